"""
Type definitions and protocols for the Qirkat engine.

This module provides:
- Type aliases shared by the board, move generator and search
- The ``PieceColor`` enumeration used for both cell contents and sides
- Protocol definitions for players, evaluators and search engines
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Callable, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .board import BoardView
    from .move import Move

# Basic type aliases
SquareIndex = int  # 1-25, row-major from the bottom-left corner
Position = Tuple[int, int]  # (row, col), zero-based
Cells = List[int]  # index 0 is unused, 1-25 are squares
GameResult = Tuple[int, Optional["Move"]]  # (score, best_move)
BoardListener = Callable[["BoardView"], None]


class PieceColor(IntEnum):
    """Contents of a square, doubling as the side to move.

    The integer values let rule code test ownership arithmetically:
    ``cell * side > 0`` means "own piece", ``< 0`` means "opponent's piece".
    """

    BLACK = -1
    EMPTY = 0
    WHITE = 1

    def opposite(self) -> "PieceColor":
        return PieceColor(-int(self))

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def __str__(self) -> str:
        return self.name.capitalize()


_SYMBOLS = {PieceColor.WHITE: "w", PieceColor.BLACK: "b", PieceColor.EMPTY: "-"}


def parse_color(text: str) -> PieceColor:
    """Parse ``w``/``white``/``b``/``black`` (any case) into a side."""
    t = text.strip().lower()
    if t in ("w", "white"):
        return PieceColor.WHITE
    if t in ("b", "black"):
        return PieceColor.BLACK
    raise ValueError(f"bad player color: {text!r}")


class PlayerProtocol(Protocol):
    """Protocol for anything that produces one move per turn."""

    color: PieceColor

    def my_move(self, board: "BoardView") -> Optional["Move"]:
        """Return a legal move for the board, or None when none is available."""
        ...


class PositionEvaluatorProtocol(Protocol):
    """Protocol for static position evaluators."""

    def evaluate_position(self, board: "BoardView", color: PieceColor,
                          moves: Optional[List["Move"]] = None) -> int:
        """Score a position from COLOR's point of view."""
        ...


class SearchEngineProtocol(Protocol):
    """Protocol for search engine implementations."""

    def search(self, board: "BoardView", depth: Optional[int] = None) -> GameResult:
        """Search for the best move for the side to move."""
        ...


# Constants
SIDE = 5
SQUARES = SIDE * SIDE
MIN_SQUARE_INDEX = 1
MAX_SQUARE_INDEX = SQUARES
VALID_SIDES = (PieceColor.WHITE, PieceColor.BLACK)
