"""
Exception hierarchy for the Qirkat engine.
"""
from __future__ import annotations


class QirkatError(Exception):
    """Base class for all engine errors."""


class InvalidSquareError(QirkatError, ValueError):
    """A coordinate, index or square name lies outside the 5x5 board."""


class MalformedBoardError(QirkatError, ValueError):
    """A board description failed length or alphabet validation."""


class MalformedMoveError(QirkatError, ValueError):
    """Move notation could not be parsed or describes an impossible chain."""


class IllegalMoveError(QirkatError):
    """A move is not legal in the current position."""

    def __init__(self, move: object, reason: str = "illegal move") -> None:
        super().__init__(f"{reason}: {move}")
        self.move = move


class HistoryUnderflowError(QirkatError, IndexError):
    """Undo was requested with no move in the history."""
