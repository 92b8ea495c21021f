import pytest

from qirkat import engine
from qirkat.board import Board
from qirkat.errors import IllegalMoveError, MalformedMoveError
from qirkat.eval import MobilityEvaluator, evaluate, get_evaluator
from qirkat.move import parse_move
from qirkat.player import AIPlayer, ManualPlayer
from qirkat.search import SearchEngine
from qirkat.types import PieceColor

WHITE, BLACK = PieceColor.WHITE, PieceColor.BLACK


def tokens(*items):
    it = iter(items)
    return lambda: next(it, None)


def capture_position():
    board = Board()
    board.set_pieces("-------w----b------------", "w")
    return board


def test_manual_player_reads_tokens_until_exhausted():
    board = Board()
    player = ManualPlayer(WHITE, tokens("c2-c3"))
    assert player.my_move(board.view()) == parse_move("c2-c3")
    assert player.my_move(board.view()) is None


def test_manual_player_rejects_bad_tokens():
    board = Board()
    player = ManualPlayer(WHITE, tokens("c2", "c2-c4", "c4-c3"))
    with pytest.raises(MalformedMoveError):
        player.my_move(board.view())
    with pytest.raises(IllegalMoveError) as info:
        player.my_move(board.view())
    assert info.value.move == parse_move("c2-c4")
    with pytest.raises(IllegalMoveError):
        player.my_move(board.view())
    assert board.move_count == 0


def test_manual_player_must_finish_a_chain():
    board = Board()
    board.set_pieces("w-----b-----------b------", "w")
    with pytest.raises(IllegalMoveError):
        ManualPlayer.move_from_token("a1-c3", board.view())
    assert ManualPlayer.move_from_token("a1-c3-e5", board.view()) == parse_move("a1-c3-e5")


def test_ai_player_returns_legal_move_without_touching_board():
    board = Board()
    player = AIPlayer(WHITE, depth=1)
    move = player.my_move(board.view())
    assert move in board.legal_moves()
    assert board == Board()
    assert board.move_count == 0


def test_ai_player_refuses_to_move_out_of_turn():
    with pytest.raises(IllegalMoveError):
        AIPlayer(BLACK, depth=1).my_move(Board().view())


def test_ai_player_without_moves_returns_none():
    board = Board()
    board.set_pieces("--------------------w---b", "w")
    assert AIPlayer(WHITE, depth=2).my_move(board.view()) is None


def test_ai_player_uses_given_engine():
    engine_ = SearchEngine(depth=2, pruning=False)
    player = AIPlayer(WHITE, engine=engine_)
    assert player.engine is engine_
    assert player.my_move(capture_position().view()) == parse_move("c2-c4")
    assert engine_.nodes > 0


def test_batch_evaluate_matches_single_calls():
    evaluator = get_evaluator()
    assert isinstance(evaluator, MobilityEvaluator)
    boards = [Board(), capture_position()]
    scores = evaluator.batch_evaluate(boards, WHITE)
    assert scores.tolist() == [4, 1]
    assert evaluate(boards[0], BLACK) == -4


def test_facade_apply_move_returns_new_board():
    board = engine.initial_board()
    moved = engine.apply_move(board, parse_move("c2-c3"))
    assert moved.whose_move == BLACK
    assert board == Board()
    with pytest.raises(ValueError):
        engine.apply_move(board, parse_move("c2-c4"))


def test_facade_helpers():
    assert engine.parse_move_str("a1-c3-e5") == parse_move("a1-c3-e5")
    assert engine.parse_move_str("a1-c3-") is None
    assert engine.seq_to_str([1, 13, 25]) == "a1-c3-e5"
    assert engine.rc(13) == (2, 2)
    assert engine.idx_map[(2, 2)] == 13
    assert engine.legal_moves(capture_position()) == [parse_move("c2-c4")]
    assert not engine.is_terminal(capture_position())
    assert engine.is_terminal(engine.apply_move(capture_position(), parse_move("c2-c4")))
    _, move = engine.get_engine(depth=1).search(engine.initial_board())
    assert move in engine.initial_board().legal_moves()
