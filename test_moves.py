import random

import pytest

from qirkat.board import Board
from qirkat.move import Move, parse_move
from qirkat.moves import MoveGenerator, MoveValidator, jumps_from, legal_moves, prune_subsumed
from qirkat.topology import DIAGONAL, is_odd_square, neighbor, rc, square_index_of, square_name
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


def test_diagonal_double_capture_is_one_move():
    board = make_board({"a1": "w", "b2": "b", "d4": "b"})
    chain = parse_move("a1-c3-e5")
    assert board.legal_moves() == [chain]
    assert board.apply_move(chain)
    assert board.get_at("b2") == PieceColor.EMPTY
    assert board.get_at("d4") == PieceColor.EMPTY
    assert board.get_at("e5") == WHITE
    assert board.whose_move == BLACK


def test_branching_chains_keep_only_complete_branches():
    board = make_board({"a1": "w", "b1": "b", "a2": "b", "c2": "b"})
    assert {str(m) for m in board.legal_moves()} == {"a1-c1-c3", "a1-a3"}


def test_captures_in_all_directions_for_black():
    board = make_board({"c3": "b", "c4": "w", "c2": "w", "b3": "w"}, to_move="b")
    moves = {str(m) for m in board.legal_moves()}
    # backward for Black (upwards) is allowed when capturing
    assert moves == {"c3-c5", "c3-c1", "c3-a3"}


def test_generation_leaves_board_untouched():
    board = make_board({"a1": "w", "b1": "b", "a2": "b", "c2": "b", "b3": "b"})
    before = board.serialize()
    MoveGenerator(board).legal_moves()
    assert board.serialize() == before


def test_generator_for_the_other_side():
    board = Board()
    black = MoveGenerator(board).legal_moves(BLACK)
    assert {str(m) for m in black} == {"b3-c3", "c4-c3", "b4-c3", "d4-c3"}
    assert board.whose_move == WHITE
    assert legal_moves(board) == board.legal_moves()


@pytest.mark.parametrize("k", range(1, 26))
def test_diagonal_steps_only_from_odd_squares(k):
    board = make_board({square_name(k): "w"})
    diagonals = [m for m in board.legal_moves() if m.is_diagonal]
    if is_odd_square(k) and rc(k)[0] < 4:
        assert diagonals
    else:
        assert diagonals == []


@pytest.mark.parametrize("k", range(1, 26))
def test_diagonal_captures_only_from_odd_squares(k):
    for dr, dc in DIAGONAL:
        mid, land = neighbor(k, dr, dc), neighbor(k, 2 * dr, 2 * dc)
        if mid is None or land is None:
            continue
        board = make_board({square_name(k): "w", square_name(mid): "b"})
        moves = board.legal_moves()
        if is_odd_square(k):
            assert moves == [Move(k, land)]
        else:
            assert not any(m.is_jump for m in moves)


def test_even_square_diagonal_jump_is_rejected():
    board = make_board({"b1": "w", "c2": "b"})
    assert not MoveValidator.check_jump(board, parse_move("b1-d3"))
    assert not board.is_legal(parse_move("b1-d3"))


def test_jumps_from_skips_captured_squares():
    board = make_board({"a1": "w", "b1": "b"})
    cells = board.cells()
    assert jumps_from(cells, 1, WHITE) == [Move(1, 3)]
    assert jumps_from(cells, 1, WHITE, frozenset({2})) == []
    assert jumps_from(cells, 2, WHITE) == []


def test_prune_subsumed():
    a = parse_move("a1-c3")
    b = parse_move("a1-c3-e5")
    c = parse_move("c1-c3")
    assert prune_subsumed([a, b, b, c]) == [b, c]


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_generated_moves_are_maximal_and_capture_first(seed):
    rng = random.Random(seed)
    board = Board()
    for _ in range(80):
        moves = board.legal_moves()
        if not moves:
            break
        assert len(set(moves)) == len(moves)
        for m in moves:
            assert not any(m != other and m.is_prefix_of(other) for other in moves)
            assert len(set(m.captured_squares())) == len(m.captured_squares())
        if board.jump_possible():
            assert all(m.is_jump for m in moves)
        else:
            assert not any(m.is_jump for m in moves)
        board.apply_move(rng.choice(moves))
