"""
Move sources: a manual adapter for already-read move tokens and a
search-based agent.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .board import BoardView
from .config import get_ui_settings
from .errors import IllegalMoveError
from .move import Move, parse_move
from .search import SearchEngine
from .types import PieceColor, SearchEngineProtocol

logger = logging.getLogger(__name__)

TokenSource = Callable[[], Optional[str]]


class Player(ABC):
    """A player of one colour: given the current board, produce one move."""

    def __init__(self, color: PieceColor) -> None:
        self.color = color

    @abstractmethod
    def my_move(self, board: BoardView) -> Optional[Move]:  # pragma: no cover
        """Return a legal move for BOARD, or None when no move is available."""
        raise NotImplementedError


class ManualPlayer(Player):
    """Turns move tokens from TOKEN_SOURCE into legal Moves.

    The source returns one token such as ``c2-c3`` per call, or None when it is
    exhausted.
    """

    def __init__(self, color: PieceColor, token_source: TokenSource) -> None:
        super().__init__(color)
        self._source = token_source

    def my_move(self, board: BoardView) -> Optional[Move]:
        token = self._source()
        if token is None:
            return None
        return self.move_from_token(token, board)

    @staticmethod
    def move_from_token(token: str, board: BoardView) -> Move:
        """Parse TOKEN and check it against BOARD.

        Raises MalformedMoveError for bad notation and IllegalMoveError for a
        well-formed move that cannot be played now.
        """
        move = parse_move(token)
        if not board.is_legal(move):
            raise IllegalMoveError(move)
        return move


class AIPlayer(Player):
    """A player that searches a private copy of the board for its move."""

    def __init__(self, color: PieceColor, depth: Optional[int] = None,
                 engine: Optional[SearchEngineProtocol] = None) -> None:
        super().__init__(color)
        self.engine: SearchEngineProtocol = engine or SearchEngine(depth=depth)

    def my_move(self, board: BoardView) -> Optional[Move]:
        if board.whose_move != self.color:
            raise IllegalMoveError(board.whose_move, f"{self.color} asked to move out of turn")
        _, move = self.engine.search(board)
        if move is not None and get_ui_settings().echo_moves:
            logger.info("%s moves %s.", self.color, move)
        return move
