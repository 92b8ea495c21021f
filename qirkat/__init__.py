"""Qirkat rules engine and adversarial search.

Usage examples:
    from qirkat import Board, parse_move
    from qirkat import SearchEngine, AIPlayer
"""
from __future__ import annotations

from .types import PieceColor, parse_color
from .errors import (
    QirkatError,
    InvalidSquareError,
    MalformedBoardError,
    MalformedMoveError,
    IllegalMoveError,
    HistoryUnderflowError,
)
from .move import Move, parse_move
from .board import Board, BoardView, INITIAL_LAYOUT
from .moves import MoveGenerator, MoveValidator
from .eval import Evaluator, MobilityEvaluator, WINNING_VALUE, get_evaluator
from .search import SearchEngine, SearchStrategy, get_engine, minimax
from .player import Player, ManualPlayer, AIPlayer

__version__ = "1.0.0"
