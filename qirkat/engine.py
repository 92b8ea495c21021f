"""
Functional facade over the board and search engine.
This allows ``from qirkat.engine import legal_moves`` style use, treating
boards as values: ``apply_move`` returns a new board.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .board import Board
from .errors import MalformedMoveError
from .eval import evaluate
from .move import Move, parse_move
from .search import SearchEngine, get_engine
from .topology import rc, idx_map, square_name
from .types import SquareIndex

__all__ = [
    "initial_board",
    "legal_moves",
    "apply_move",
    "is_terminal",
    "evaluate",
    "get_engine",
    "SearchEngine",
    "rc",
    "idx_map",
    "parse_move_str",
    "seq_to_str",
]


def initial_board() -> Board:
    return Board()


def legal_moves(board: Board) -> List[Move]:
    return board.legal_moves()


def apply_move(board: Board, move: Move) -> Board:
    """Return a copy of BOARD with MOVE played; BOARD itself is unchanged."""
    nb = board.copy()
    if not nb.apply_move(move):
        raise ValueError(f"illegal move for {board.whose_move}: {move}")
    return nb


def is_terminal(board: Board) -> bool:
    return board.is_game_over()


def parse_move_str(s: str) -> Optional[Move]:
    """Parse move notation, returning None instead of raising."""
    try:
        return parse_move(s)
    except MalformedMoveError:
        return None


def seq_to_str(squares: Sequence[SquareIndex]) -> str:
    """Render a square sequence such as [1, 13, 25] as ``a1-c3-e5``."""
    return "-".join(square_name(k) for k in squares)
