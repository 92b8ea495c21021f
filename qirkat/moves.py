from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, List, Optional, Sequence

from .move import Move
from .topology import delta, directions_from, is_odd_square, midpoint, neighbor
from .types import MAX_SQUARE_INDEX, Cells, PieceColor, SquareIndex

if TYPE_CHECKING:
    from .board import Board

EMPTY = PieceColor.EMPTY


# -----------------------------
# Capture primitives on raw cells
# -----------------------------
def capture_ok(cells: Cells, step: Move, side: PieceColor) -> bool:
    """True iff the single capture STEP is playable by SIDE on CELLS."""
    mid: Optional[SquareIndex] = midpoint(step.origin, step.dest)
    if mid is None:
        return False
    if cells[step.origin] != side or cells[step.dest] != EMPTY:
        return False
    if cells[mid] * side >= 0:
        return False
    dr, dc = delta(step.origin, step.dest)
    if dr != 0 and dc != 0 and not is_odd_square(step.origin):
        return False
    return True


def jumps_from(cells: Cells, k: SquareIndex, side: PieceColor,
               captured: FrozenSet[SquareIndex] = frozenset()) -> List[Move]:
    """Single captures available to SIDE's piece on K, skipping CAPTURED squares."""
    if cells[k] != side:
        return []
    jumps: List[Move] = []
    for dr, dc in directions_from(k):
        mid = neighbor(k, dr, dc)
        end = neighbor(k, 2 * dr, 2 * dc)
        if mid and end and cells[mid] * side < 0 and cells[end] == EMPTY and mid not in captured:
            jumps.append(Move(k, end))
    return jumps


def jump_possible(cells: Cells, side: PieceColor) -> bool:
    return any(jumps_from(cells, k, side) for k in range(1, MAX_SQUARE_INDEX + 1))


def _play_jump(cells: Cells, step: Move, side: PieceColor) -> int:
    mid = step.jumped_index
    taken = cells[mid]  # type: ignore[index]
    cells[step.origin] = EMPTY
    cells[mid] = EMPTY  # type: ignore[index]
    cells[step.dest] = side
    return taken


def _unplay_jump(cells: Cells, step: Move, side: PieceColor, taken: int) -> None:
    cells[step.dest] = EMPTY
    cells[step.jumped_index] = taken  # type: ignore[index]
    cells[step.origin] = side


def prune_subsumed(moves: Sequence[Move]) -> List[Move]:
    """Drop duplicates and any chain that is a strict prefix of another."""
    result: List[Move] = []
    for m in moves:
        if m in result:
            continue
        if any(m != other and m.is_prefix_of(other) for other in moves):
            continue
        result.append(m)
    return result


class MoveGenerator:
    """Generates the legal moves of a board for either side.

    Captures are mandatory: when any capture exists only complete capture
    chains are returned, otherwise every legal simple step.
    """

    def __init__(self, board: "Board") -> None:
        self.board = board

    def legal_moves(self, side: Optional[PieceColor] = None) -> List[Move]:
        side = self.board.whose_move if side is None else side
        cells: Cells = self.board.cells()
        if jump_possible(cells, side):
            captures: List[Move] = []
            for k in range(1, MAX_SQUARE_INDEX + 1):
                if cells[k] == side:
                    captures.extend(self.chains_from(cells, k, side))
            return prune_subsumed(captures)
        return self._gen_simple_moves(cells, side)

    def _gen_simple_moves(self, cells: Cells, side: PieceColor) -> List[Move]:
        moves: List[Move] = []
        for k in range(1, MAX_SQUARE_INDEX + 1):
            if cells[k] != side:
                continue
            for dr, dc in directions_from(k):
                nb = neighbor(k, dr, dc)
                if nb is None:
                    continue
                mov = Move(k, nb)
                if self.board.legal_simple_step(mov, side):
                    moves.append(mov)
        return moves

    def chains_from(self, cells: Cells, k: SquareIndex, side: PieceColor) -> List[Move]:
        """All complete capture chains for SIDE's piece on K.

        CELLS is used as scratch space and is restored before returning.
        """
        chains: List[Move] = []
        self._extend_chain(cells, side, Move.vestigial(k), k, frozenset(), chains)
        return chains

    def _extend_chain(self, cells: Cells, side: PieceColor, prefix: Move,
                      k: SquareIndex, captured: FrozenSet[SquareIndex],
                      out: List[Move]) -> None:
        candidates = jumps_from(cells, k, side, captured)
        if not candidates:
            if not prefix.is_vestigial:
                out.append(prefix)
            return
        for jump in candidates:
            taken = _play_jump(cells, jump, side)
            try:
                self._extend_chain(cells, side, prefix.extend(jump), jump.dest,
                                   captured | {jump.jumped_index}, out)  # type: ignore[arg-type]
            finally:
                _unplay_jump(cells, jump, side, taken)


class MoveValidator:
    """Validates capture chains against a board, step by step."""

    @staticmethod
    def check_jump(board: "Board", move: Move, allow_partial: bool = False) -> bool:
        """True iff MOVE is a playable capture chain for the side to move.

        Unless ALLOW_PARTIAL, the chain must also be complete: no further
        capture may be available from its final square.
        """
        if not move.is_jump:
            return False
        side = board.whose_move
        cells: Cells = board.cells()
        captured: List[SquareIndex] = []
        for step in move.steps():
            if not capture_ok(cells, step, side):
                return False
            captured.append(step.jumped_index)  # type: ignore[arg-type]
            _play_jump(cells, step, side)
        if allow_partial:
            return True
        return not jumps_from(cells, move.final_destination, side, frozenset(captured))


# Convenience functional API

def legal_moves(board: "Board") -> List[Move]:
    return MoveGenerator(board).legal_moves()
