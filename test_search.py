import random

import pytest

from qirkat.board import Board
from qirkat.eval import WINNING_VALUE, MobilityEvaluator
from qirkat.move import parse_move
from qirkat.search import SearchEngine, get_engine, minimax
from qirkat.topology import square_index_of
from qirkat.types import PieceColor

WHITE, BLACK = PieceColor.WHITE, PieceColor.BLACK

# Helpers

def make_board(pieces, to_move="w"):
    cells = ["-"] * 25
    for name, ch in pieces.items():
        cells[square_index_of(name) - 1] = ch
    board = Board()
    board.set_pieces("".join(cells), to_move)
    return board


def random_position(seed, plies):
    rng = random.Random(seed)
    board = Board()
    for _ in range(plies):
        moves = board.legal_moves()
        if not moves:
            break
        board.apply_move(rng.choice(moves))
    return board


class ReplayCheckingEvaluator(MobilityEvaluator):
    """Checks at every leaf that the working board equals a replay of its history."""

    def __init__(self, root):
        self.root = root
        self.leaves = 0

    def evaluate_position(self, board, color, moves=None):
        replay = self.root.copy()
        for m in board.history[self.root.move_count:]:
            assert replay.apply_move(m)
        assert replay == board
        self.leaves += 1
        return super().evaluate_position(board, color, moves)


def test_search_returns_a_legal_move_and_leaves_board_alone():
    board = Board()
    calls = []
    board.add_listener(calls.append)
    score, move = SearchEngine(depth=3).search(board)
    assert move in board.legal_moves()
    assert board.serialize() == Board().serialize()
    assert board.move_count == 0
    assert calls == []


def test_shallow_search_maximizes_mobility_difference():
    board = Board()
    score, move = SearchEngine(depth=1).search(board)
    replies = []
    for m in board.legal_moves():
        board.apply_move(m)
        replies.append(-len(board.legal_moves()))
        board.undo_move()
    assert score == max(replies)
    assert move == board.legal_moves()[replies.index(max(replies))]


def test_single_capture_wins():
    board = make_board({"c2": "w", "c3": "b"})
    assert SearchEngine(depth=2).search(board) == (WINNING_VALUE, parse_move("c2-c4"))


@pytest.mark.parametrize("depth", [1, 2])
def test_forced_win_outranks_mobility(depth):
    # e1-c1 is generated first, but only c3-c5 leaves Black without a move
    board = make_board({"a1": "b", "d1": "b", "e1": "w", "c3": "w", "c4": "b"})
    assert [str(m) for m in board.legal_moves()] == ["e1-c1", "c3-c5"]
    score, move = SearchEngine(depth=depth).search(board)
    assert move == parse_move("c3-c5")
    assert score == WINNING_VALUE
    assert score > 25 * 8


def test_equal_wins_keep_the_first_move():
    # at depth 3 e1-c1 also forces a win, and ties keep the earlier move
    board = make_board({"a1": "b", "d1": "b", "e1": "w", "c3": "w", "c4": "b"})
    assert SearchEngine(depth=3).search(board) == (WINNING_VALUE, parse_move("e1-c1"))


def test_no_move_available():
    board = make_board({"a5": "w", "e1": "b"})
    assert SearchEngine(depth=2).search(board) == (-WINNING_VALUE, None)


def test_black_searches_for_itself():
    board = make_board({"c3": "b", "c2": "w"}, to_move="b")
    score, move = SearchEngine(depth=2).search(board)
    assert move == parse_move("c3-c1")
    assert score == WINNING_VALUE


def test_deep_search_finds_double_capture():
    board = make_board({"a1": "w", "b2": "b", "d4": "b"})
    engine = get_engine(preset="deep")
    assert engine.depth == 8
    assert engine.find_move(board) == parse_move("a1-c3-e5")


@pytest.mark.parametrize("seed,plies", [(0, 0), (1, 4), (2, 7), (3, 10)])
@pytest.mark.parametrize("depth", [1, 2, 3])
def test_pruning_selects_same_move_as_full_minimax(seed, plies, depth):
    board = random_position(seed, plies)
    pruned = SearchEngine(depth=depth, pruning=True)
    assert pruned.search(board) == minimax(board, depth)


def test_pruning_visits_fewer_nodes():
    board = Board()
    pruned = SearchEngine(depth=4, pruning=True)
    full = SearchEngine(depth=4, pruning=False)
    assert pruned.search(board) == full.search(board)
    assert pruned.nodes < full.nodes
    assert pruned.cutoffs > 0
    assert full.cutoffs == 0


def test_every_probe_is_undone():
    board = random_position(5, 6)
    checker = ReplayCheckingEvaluator(board)
    SearchEngine(depth=3, evaluator=checker).search(board)
    assert checker.leaves > 0


def test_search_accepts_a_read_only_view():
    board = Board()
    assert SearchEngine(depth=1).search(board.view()) == SearchEngine(depth=1).search(board)


def test_depth_configuration():
    assert get_engine(preset="shallow").depth == 1
    assert get_engine(depth=3).depth == 3
    with pytest.raises(ValueError):
        get_engine(preset="medium")
    with pytest.raises(ValueError):
        SearchEngine(depth=0)
    with pytest.raises(ValueError):
        SearchEngine(depth=2).search(Board(), depth=0)
