"""
The Qirkat board: piece placement, side to move and move history.

Squares are addressed by their linearized index 1..25 (see ``topology``) or by
name (``a1`` .. ``e5``).  The board is mutated only through ``apply_move``,
``undo_move``, ``clear`` and ``set_pieces``; each of these informs registered
listeners exactly once, passing a read-only ``BoardView``.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple, Union

import numpy as np

from .config import GameRulesSettings, get_game_rules
from .errors import HistoryUnderflowError, MalformedBoardError
from .move import Move
from .moves import MoveGenerator, MoveValidator, jump_possible, jumps_from
from .topology import (
    COLUMNS, ROWS, check_square, delta, idx_map, is_odd_square, row_of, square_index_of,
)
from .types import SIDE, SQUARES, VALID_SIDES, BoardListener, Cells, PieceColor, SquareIndex, parse_color

logger = logging.getLogger(__name__)

EMPTY, WHITE, BLACK = PieceColor.EMPTY, PieceColor.WHITE, PieceColor.BLACK

INITIAL_LAYOUT = (
    "wwwww"
    "wwwww"
    "bb-ww"
    "bbbbb"
    "bbbbb"
)

_BOARD_RE = re.compile(r"^[bw-]{25}$", re.IGNORECASE)
_PIECES = {"w": WHITE, "b": BLACK, "-": EMPTY}


def _far_row(side: PieceColor) -> int:
    """Zero-based row farthest from SIDE's starting rows."""
    return SIDE - 1 if side == WHITE else 0


class Board:
    """A mutable Qirkat position with full move history."""

    def __init__(self, rules: Optional[GameRulesSettings] = None) -> None:
        self._rules: GameRulesSettings = rules if rules is not None else get_game_rules()
        self._listeners: List[BoardListener] = []
        self._view: Optional[BoardView] = None
        self._cells: Cells = [EMPTY] * (SQUARES + 1)
        self._whose_move: PieceColor = WHITE
        self._history: List[Move] = []
        self._moves_cache: Optional[List[Move]] = None
        self.clear()

    # -----------------------------
    # Setup
    # -----------------------------
    def clear(self) -> None:
        """Reset to the starting position with White to move."""
        self._load(INITIAL_LAYOUT, WHITE)
        self._notify()

    def set_pieces(self, text: str, next_move: Union[PieceColor, str]) -> None:
        """Load a position from TEXT: 25 characters from ``b``, ``w``, ``-``.

        Whitespace is ignored.  Squares are listed row-major starting with a1,
        so the first five characters are row 1.  NEXT_MOVE is the side to move.
        History is cleared.
        """
        if isinstance(next_move, str):
            try:
                next_move = parse_color(next_move)
            except ValueError as e:
                raise MalformedBoardError(str(e)) from e
        if next_move not in VALID_SIDES:
            raise MalformedBoardError(f"bad player color: {next_move!r}")
        compact = re.sub(r"\s", "", text)
        if not _BOARD_RE.match(compact):
            raise MalformedBoardError(f"bad board description: {text!r}")
        self._load(compact, PieceColor(next_move))
        self._notify()

    def _load(self, compact: str, next_move: PieceColor) -> None:
        self._cells = [EMPTY] + [_PIECES[ch] for ch in compact.lower()]
        self._whose_move = next_move
        self._history = []
        self._moves_cache = None

    def copy(self) -> "Board":
        """An independent copy of this position and its history, without listeners."""
        b = Board(self._rules)
        b._cells = list(self._cells)
        b._whose_move = self._whose_move
        b._history = list(self._history)
        return b

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    @property
    def rules(self) -> GameRulesSettings:
        return self._rules

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    def get(self, k: SquareIndex) -> PieceColor:
        return self._cells[check_square(k)]

    def get_at(self, name: str) -> PieceColor:
        return self._cells[square_index_of(name)]

    def cells(self) -> Cells:
        """A copy of the cell array (index 0 unused)."""
        return list(self._cells)

    def to_array(self) -> np.ndarray:
        """The 25 squares as int8: +1 White, -1 Black, 0 empty."""
        return np.array(self._cells[1:], dtype=np.int8)

    def serialize(self) -> str:
        return "".join(p.symbol for p in self._cells[1:])

    def view(self) -> "BoardView":
        if self._view is None:
            self._view = BoardView(self)
        return self._view

    # -----------------------------
    # Legality
    # -----------------------------
    def _recent_pairs(self) -> Tuple[Tuple[SquareIndex, SquareIndex], ...]:
        """(origin, final square) of the last two half-moves."""
        return tuple((m.origin, m.final_destination) for m in self._history[-2:])

    def legal_simple_step(self, move: Move, side: PieceColor) -> bool:
        """True iff MOVE is a permitted non-capturing step for SIDE,
        ignoring the mandatory-capture rule."""
        if move.next is not None or not move.is_step:
            return False
        if self._cells[move.origin] != side or self._cells[move.dest] != EMPTY:
            return False
        dr, dc = delta(move.origin, move.dest)
        if dr == 0:
            if self._rules.block_far_rank_lateral and row_of(move.dest) == _far_row(side):
                return False
            # a sideways step may not undo either of the last two half-moves
            return (move.dest, move.origin) not in self._recent_pairs()
        forward = 1 if side == WHITE else -1
        if dr != forward:
            return False
        return dc == 0 or is_odd_square(move.origin)

    def is_legal(self, move: Optional[Move]) -> bool:
        """Return true iff MOVE may be played now by the side to move."""
        if move is None or move.is_vestigial:
            return False
        if move.is_jump:
            return MoveValidator.check_jump(self, move)
        if not self.legal_simple_step(move, self._whose_move):
            return False
        return not self.jump_possible()

    def jump_possible(self, k: Optional[SquareIndex] = None) -> bool:
        """True iff the side to move can capture, from K or from anywhere."""
        if k is None:
            return jump_possible(self._cells, self._whose_move)
        return bool(jumps_from(self._cells, k, self._whose_move))

    def legal_moves(self) -> List[Move]:
        """All legal moves for the side to move; only capture chains when any capture exists."""
        if self._moves_cache is None:
            self._moves_cache = MoveGenerator(self).legal_moves()
        return list(self._moves_cache)

    def is_game_over(self, either_side: bool = False) -> bool:
        """True iff the side to move has no legal move.

        With EITHER_SIDE, also true when the other side would have none.
        """
        if not self.legal_moves():
            return True
        if either_side:
            return not MoveGenerator(self).legal_moves(self._whose_move.opposite())
        return False

    def winner(self) -> Optional[PieceColor]:
        if self.legal_moves():
            return None
        return self._whose_move.opposite()

    # -----------------------------
    # Mutation
    # -----------------------------
    def apply_move(self, move: Move, check: bool = True) -> bool:
        """Play MOVE for the side to move.

        Returns False and leaves the board untouched when CHECK is set and the
        move is illegal.  A capture chain is played in full, flips the side to
        move once and notifies listeners once.
        """
        if check and not self.is_legal(move):
            logger.debug("rejected %s for %s", move, self._whose_move)
            return False
        side = self._whose_move
        self._history.append(move)
        for step in move.steps():
            self._cells[step.origin] = EMPTY
            if step.is_jump:
                self._cells[step.jumped_index] = EMPTY  # type: ignore[index]
            self._cells[step.dest] = side
        self._whose_move = side.opposite()
        self._moves_cache = None
        self._notify()
        return True

    def undo_move(self) -> Move:
        """Take back the most recent move and return it."""
        if not self._history:
            raise HistoryUnderflowError("no move to undo")
        move = self._history.pop()
        mover = self._whose_move.opposite()
        for step in reversed(list(move.steps())):
            self._cells[step.dest] = EMPTY
            if step.is_jump:
                self._cells[step.jumped_index] = mover.opposite()  # type: ignore[index]
            self._cells[step.origin] = mover
        self._whose_move = mover
        self._moves_cache = None
        self._notify()
        return move

    # -----------------------------
    # Change notification
    # -----------------------------
    def add_listener(self, listener: BoardListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: BoardListener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.view())

    # -----------------------------
    # Display
    # -----------------------------
    def to_string(self, legend: bool = False) -> str:
        """A text depiction of the board, row 5 first.  With LEGEND, label
        rows and columns; otherwise frame the board with ``===`` lines."""
        lines: List[str] = []
        for r in reversed(range(SIDE)):
            row = "  " + " ".join(self._cells[idx_map[(r, c)]].symbol for c in range(SIDE))
            lines.append(ROWS[r] + row if legend else row)
        if legend:
            lines.append("   " + " ".join(COLUMNS))
            return "\n".join(lines)
        return "\n".join(["==="] + lines + ["==="])

    def __str__(self) -> str:
        return self.to_string(False)

    def __repr__(self) -> str:
        return f"Board({self.serialize()!r}, {self._whose_move.name})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._cells == other._cells and self._whose_move == other._whose_move
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


class BoardView:
    """A read-only window onto a Board.

    It tracks the board it was obtained from and offers every query but none
    of the mutators.  ``copy()`` returns a new, independent mutable Board.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def whose_move(self) -> PieceColor:
        return self._board.whose_move

    @property
    def history(self) -> Tuple[Move, ...]:
        return self._board.history

    @property
    def move_count(self) -> int:
        return self._board.move_count

    def get(self, k: SquareIndex) -> PieceColor:
        return self._board.get(k)

    def get_at(self, name: str) -> PieceColor:
        return self._board.get_at(name)

    def cells(self) -> Cells:
        return self._board.cells()

    def to_array(self) -> np.ndarray:
        return self._board.to_array()

    def legal_moves(self) -> List[Move]:
        return self._board.legal_moves()

    def is_legal(self, move: Optional[Move]) -> bool:
        return self._board.is_legal(move)

    def jump_possible(self, k: Optional[SquareIndex] = None) -> bool:
        return self._board.jump_possible(k)

    def is_game_over(self, either_side: bool = False) -> bool:
        return self._board.is_game_over(either_side)

    def winner(self) -> Optional[PieceColor]:
        return self._board.winner()

    def serialize(self) -> str:
        return self._board.serialize()

    def to_string(self, legend: bool = False) -> str:
        return self._board.to_string(legend)

    def copy(self) -> Board:
        return self._board.copy()

    def __str__(self) -> str:
        return str(self._board)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoardView):
            return self._board == other._board
        if isinstance(other, Board):
            return self._board == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]
