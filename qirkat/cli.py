from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

from .board import Board, BoardView
from .config import SEARCH_PRESETS, get_ui_settings, resolve_depth, setup_logging
from .errors import IllegalMoveError, MalformedMoveError
from .player import AIPlayer, ManualPlayer
from .types import PieceColor, PlayerProtocol, parse_color

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play a game of Qirkat between AI and/or manual players")
    ap.add_argument("--white", choices=["ai", "manual"], default="ai", help="Who plays White")
    ap.add_argument("--black", choices=["ai", "manual"], default="ai", help="Who plays Black")
    ap.add_argument("--depth", type=int, default=None, help="Search depth for AI players")
    ap.add_argument("--preset", choices=sorted(SEARCH_PRESETS), default=None, help="Named search depth")
    ap.add_argument("--board", default=None,
                    help="Starting position: 25 characters of b, w, -; write --board=<position> since it may start with -")
    ap.add_argument("--to-move", default="white", help="Side to move for --board")
    ap.add_argument("--max-moves", type=int, default=200, help="Stop after this many half-moves")
    ap.add_argument("--legend", action="store_true", help="Label rows and columns")
    return ap.parse_args(argv)


def _read_token(color: PieceColor):
    prompt = f"{color}: "

    def source() -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None
    return source


def play(board: Board, players: Dict[PieceColor, PlayerProtocol], max_moves: int) -> Optional[PieceColor]:
    """Alternate PLAYERS on BOARD until someone is stuck or MAX_MOVES is reached.

    Returns the winner, or None if the game was cut short.
    """
    while board.move_count < max_moves and not board.is_game_over():
        player = players[board.whose_move]
        try:
            move = player.my_move(board.view())
        except (MalformedMoveError, IllegalMoveError) as e:
            print(e)
            continue
        if move is None:
            return None
        board.apply_move(move)
    return board.winner()


def main(argv: Optional[list] = None) -> None:
    setup_logging()
    args = parse_args(argv)
    legend = args.legend or get_ui_settings().show_legend
    depth = resolve_depth(args.depth, args.preset)

    board = Board()
    if args.board:
        board.set_pieces(args.board, parse_color(args.to_move))

    def render(view: BoardView) -> None:
        print(view.to_string(legend))

    board.add_listener(render)
    render(board.view())

    players: Dict[PieceColor, PlayerProtocol] = {}
    for color, kind in ((PieceColor.WHITE, args.white), (PieceColor.BLACK, args.black)):
        if kind == "ai":
            players[color] = AIPlayer(color, depth=depth)
        else:
            players[color] = ManualPlayer(color, _read_token(color))

    winner = play(board, players, args.max_moves)
    if winner is None:
        print(f"No result after {board.move_count} moves.")
    else:
        print(f"{winner} wins.")
