"""Unit tests for /src/breakthrough/moves.py"""

from typing import Callable

import pytest

from src.breakthrough.board import Board
from src.breakthrough.moves import Move, legal_move_set, legal_moves, movable_pawns
from src.breakthrough.square import Square
from src.core.shared_types import Cell

BoardBuilder = Callable[..., Board]

W = Cell.WHITE_PAWN
B = Cell.BLACK_PAWN


def test_white_opening_moves() -> None:
    """8x8, white to move: a pawn on the front row can go to all three squares in front of it"""
    board = Board.starting_position(8, 8)
    assert legal_moves(board, Square(6, 3), is_white_turn=True) == [
        Square(5, 2),
        Square(5, 3),
        Square(5, 4),
    ]


def test_black_moves_down_the_board() -> None:
    board = Board.starting_position(8, 8)
    assert legal_moves(board, Square(1, 3), is_white_turn=False) == [
        Square(2, 2),
        Square(2, 3),
        Square(2, 4),
    ]


def test_blocked_pawns_have_no_moves() -> None:
    """Back row pawns are surrounded by their own color"""
    board = Board.starting_position(8, 8)
    assert legal_moves(board, Square(7, 3), is_white_turn=True) == []
    assert legal_moves(board, Square(0, 3), is_white_turn=False) == []


def test_wrong_side_returns_nothing() -> None:
    """Fails silently: it is not your pawn or not your turn"""
    board = Board.starting_position(8, 8)
    assert legal_moves(board, Square(6, 3), is_white_turn=False) == []
    assert legal_moves(board, Square(1, 3), is_white_turn=True) == []
    # empty square / off the board
    assert legal_moves(board, Square(4, 4), is_white_turn=True) == []
    assert legal_moves(board, Square(8, 0), is_white_turn=True) == []


def test_edge_columns_stay_on_the_board(board_with_pawns: BoardBuilder) -> None:
    board = board_with_pawns({Square(4, 0): W, Square(4, 7): W})
    assert legal_moves(board, Square(4, 0), True) == [Square(3, 0), Square(3, 1)]
    assert legal_moves(board, Square(4, 7), True) == [Square(3, 6), Square(3, 7)]


def test_straight_move_blocked_by_any_pawn(board_with_pawns: BoardBuilder) -> None:
    """Cannot capture straight ahead, and cannot step onto your own pawn"""
    board = board_with_pawns({Square(4, 3): W, Square(3, 3): B})
    assert legal_moves(board, Square(4, 3), True) == [Square(3, 2), Square(3, 4)]

    board = board_with_pawns({Square(4, 3): W, Square(3, 3): W})
    assert Square(3, 3) not in legal_moves(board, Square(4, 3), True)


def test_diagonal_capture(board_with_pawns: BoardBuilder) -> None:
    """Enemy pawns on the diagonals can be taken"""
    board = board_with_pawns({Square(3, 3): B, Square(4, 2): W, Square(4, 4): W})
    assert legal_moves(board, Square(3, 3), False) == [
        Square(4, 2),
        Square(4, 3),
        Square(4, 4),
    ]


def test_diagonal_blocked_by_own_pawn(board_with_pawns: BoardBuilder) -> None:
    board = board_with_pawns({Square(3, 3): B, Square(4, 2): B, Square(4, 4): B})
    assert legal_moves(board, Square(3, 3), False) == [Square(4, 3)]


def test_diagonal_onto_empty_square_allowed(board_with_pawns: BoardBuilder) -> None:
    """Permissive rule: diagonal steps do not need a capture"""
    board = board_with_pawns({Square(5, 5): W})
    assert Square(4, 4) in legal_moves(board, Square(5, 5), True)
    assert Square(4, 6) in legal_moves(board, Square(5, 5), True)


def test_pawn_on_goal_row_has_no_moves(board_with_pawns: BoardBuilder) -> None:
    board = board_with_pawns({Square(0, 2): W, Square(7, 2): B})
    assert legal_moves(board, Square(0, 2), True) == []
    assert legal_moves(board, Square(7, 2), False) == []


@pytest.mark.parametrize("is_white_turn", [True, False])
@pytest.mark.parametrize("height, width", [(6, 4), (8, 8), (16, 16), (7, 13)])
def test_moves_never_leave_board_or_hit_own_pawn(
    height: int, width: int, is_white_turn: bool
) -> None:
    """Checked for every square of a few mid-game boards"""
    board = Board.starting_position(height, width)
    # pull the front rows forward a bit to get some contact between both sides
    board = board.move_pawn(Move(Square(height - 2, 0), Square(2, 1)))
    board = board.move_pawn(Move(Square(1, width - 1), Square(height - 3, width - 2)))

    own = W if is_white_turn else B
    for square in board.squares():
        for destination in legal_moves(board, square, is_white_turn):
            assert destination.is_within_bounds(height, width)
            assert board.get(destination) != own
            if destination.col == square.col:
                assert board.get(destination) == Cell.EMPTY


def test_legal_move_set_wraps_destinations() -> None:
    board = Board.starting_position(8, 8)
    moves = legal_move_set(board, Square(6, 0), True)
    assert moves == [
        Move(Square(6, 0), Square(5, 0)),
        Move(Square(6, 0), Square(5, 1)),
    ]


def test_movable_pawns_in_starting_position() -> None:
    """Only the front row can move at the start"""
    board = Board.starting_position(8, 8)
    assert movable_pawns(board, True) == [Square(6, col) for col in range(8)]
    assert movable_pawns(board, False) == [Square(1, col) for col in range(8)]


def test_movable_pawns_none_left(board_with_pawns: BoardBuilder) -> None:
    board = board_with_pawns({Square(0, 0): W})
    assert movable_pawns(board, True) == []
    assert movable_pawns(board, False) == []
