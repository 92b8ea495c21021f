"""
Depth-limited minimax search with alpha-beta pruning.

One recursive routine serves both players through a ``sense`` argument:
+1 where the searching side is on move (maximizing), -1 where the opponent is
(minimizing).  Every search runs on a private copy of the board, so the
authoritative game board is never touched.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

from .config import get_engine_settings, resolve_depth
from .eval import INFTY, get_evaluator
from .move import Move
from .types import GameResult, PieceColor, PositionEvaluatorProtocol

if TYPE_CHECKING:
    from .board import Board, BoardView

logger = logging.getLogger(__name__)


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, board: Union["Board", "BoardView"],
               depth: Optional[int] = None) -> GameResult:  # pragma: no cover
        raise NotImplementedError


class SearchEngine(SearchStrategy):
    """Alpha-beta search over a working copy of the board.

    DEPTH defaults to the configured engine depth; PRUNING=False searches the
    full minimax tree with the same move order.
    """

    def __init__(self, depth: Optional[int] = None,
                 evaluator: Optional[PositionEvaluatorProtocol] = None,
                 pruning: Optional[bool] = None) -> None:
        self.depth: int = resolve_depth(depth)
        if self.depth < 1:
            raise ValueError(f"search depth must be positive: {self.depth}")
        self.evaluator: PositionEvaluatorProtocol = evaluator or get_evaluator()
        self.pruning: bool = get_engine_settings().use_pruning if pruning is None else bool(pruning)
        self.nodes: int = 0
        self.cutoffs: int = 0
        self._color: PieceColor = PieceColor.WHITE
        self._last_found_move: Optional[Move] = None

    def search(self, board: Union["Board", "BoardView"],
               depth: Optional[int] = None) -> GameResult:
        """Search for the side to move.  Returns (score, best_move); the move
        is None when the side to move has no legal move."""
        d: int = self.depth if depth is None else int(depth)
        if d < 1:
            raise ValueError(f"search depth must be positive: {d}")
        work: "Board" = board.copy()
        self._color = work.whose_move
        self._last_found_move = None
        self.nodes = 0
        self.cutoffs = 0
        score = self._find_move(work, d, True, 1, -INFTY, INFTY)
        logger.debug("searched depth %d for %s: %d nodes, %d cutoffs, score %d",
                     d, self._color, self.nodes, self.cutoffs, score)
        return score, self._last_found_move

    def find_move(self, board: Union["Board", "BoardView"]) -> Optional[Move]:
        return self.search(board)[1]

    def _find_move(self, board: "Board", depth: int, save_move: bool, sense: int,
                   alpha: int, beta: int) -> int:
        """Find a move from BOARD and return its value, recording it in
        _last_found_move iff SAVE_MOVE.  The move should have maximal value or
        a value >= BETA if SENSE == 1, and minimal value or a value <= ALPHA if
        SENSE == -1.  Depth 0 and terminal positions return the static score.
        """
        self.nodes += 1
        moves = board.legal_moves()
        if depth == 0 or not moves:
            return self.evaluator.evaluate_position(board, self._color, moves)

        best: Optional[Move] = None
        best_so_far: int = -sense * INFTY
        for move in moves:
            board.apply_move(move, check=False)
            try:
                response = self._find_move(board, depth - 1, False, -sense, alpha, beta)
            finally:
                board.undo_move()
            if sense * response > sense * best_so_far:
                best_so_far = response
                best = move
                if sense == 1:
                    alpha = max(alpha, best_so_far)
                else:
                    beta = min(beta, best_so_far)
                if self.pruning and beta <= alpha:
                    self.cutoffs += 1
                    break

        if save_move:
            self._last_found_move = best
        return best_so_far


def get_engine(depth: Optional[int] = None, preset: Optional[str] = None) -> SearchEngine:
    """Get a new search engine for an explicit depth or a named preset."""
    return SearchEngine(depth=resolve_depth(depth, preset))


def minimax(board: Union["Board", "BoardView"], depth: int) -> GameResult:
    """Full minimax without pruning; same tree and move order as SearchEngine."""
    return SearchEngine(depth=depth, pruning=False).search(board)
