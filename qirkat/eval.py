"""
Static evaluation: the mobility heuristic and its batch interface.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

import numpy as np

from .move import Move
from .types import PieceColor

if TYPE_CHECKING:
    from .board import Board, BoardView

    AnyBoard = Union[Board, BoardView]

# A magnitude greater than any score
INFTY: int = 10**9
# A position magnitude indicating a forced win (positive) or loss (negative)
WINNING_VALUE: int = INFTY - 1


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: "AnyBoard", color: PieceColor,
                          moves: Optional[List[Move]] = None) -> int:  # pragma: no cover
        """Score BOARD from COLOR's point of view.  MOVES, when given, are the
        already generated legal moves of the side to move."""
        raise NotImplementedError

    def batch_evaluate(self, boards: Sequence["AnyBoard"], color: PieceColor) -> np.ndarray:
        """Score several positions for COLOR.  Default uses single calls."""
        out = np.zeros(len(boards), dtype=np.int64)
        for i, board in enumerate(boards):
            out[i] = self.evaluate_position(board, color)
        return out


class MobilityEvaluator(Evaluator):
    """Signed count of the legal moves of the side to move.

    Positive when COLOR is on move, negative otherwise.  A side on move with
    no legal move has lost, which scores +/-WINNING_VALUE and outranks every
    mobility value.
    """

    def evaluate_position(self, board: "AnyBoard", color: PieceColor,
                          moves: Optional[List[Move]] = None) -> int:
        if moves is None:
            moves = board.legal_moves()
        mine = board.whose_move == color
        if not moves:
            return -WINNING_VALUE if mine else WINNING_VALUE
        return len(moves) if mine else -len(moves)


def get_evaluator() -> Evaluator:
    return MobilityEvaluator()


def evaluate(board: "AnyBoard", color: PieceColor) -> int:
    return get_evaluator().evaluate_position(board, color)
