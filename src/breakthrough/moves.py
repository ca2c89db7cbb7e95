"""
Movement and capturing rules of a pawn

A pawn steps one row forward (white up the board, black down), either straight or diagonally:
* straight: only onto an empty square
* diagonal: onto an empty square OR onto an enemy pawn (capture)

NOTE: the diagonal step onto an empty square is not allowed in classical Breakthrough. This rule set permits it.
To switch to classical rules, only `_is_available` for diagonal steps needs to change.
"""

from dataclasses import dataclass
from typing import Protocol

from src.breakthrough.pieces import FORWARD, color_to_move, pawn_color
from src.breakthrough.square import Square
from src.core.shared_types import Cell, Color


class Board(Protocol):
    """Just the parts the movement rules need"""

    @property
    def height(self) -> int: ...
    @property
    def width(self) -> int: ...
    def get(self, square: Square) -> Cell: ...
    def contains(self, square: Square) -> bool: ...
    def squares(self) -> list[Square]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square


# Order matters: the UI walks through the moves in this order, so it must stay deterministic
COLUMN_OFFSETS: tuple[int, ...] = (-1, 0, 1)


def legal_moves(board: Board, square: Square, is_white_turn: bool) -> list[Square]:
    """
    Destinations the pawn on `square` may move to.
    ---
    Returns an empty list when there is no pawn of the side to move on that square (wrong color, empty, or off the board).
    """
    if not board.contains(square):
        return []

    mover = color_to_move(is_white_turn)
    if pawn_color(board.get(square)) != mover:
        return []

    d_row = FORWARD[mover]
    destinations: list[Square] = []
    for d_col in COLUMN_OFFSETS:
        target_square = square.shifted(d_row, d_col)
        if not board.contains(target_square):
            continue
        if _is_available(board.get(target_square), mover, diagonal=d_col != 0):
            destinations.append(target_square)
    return destinations


def legal_move_set(board: Board, square: Square, is_white_turn: bool) -> list[Move]:
    """Same as legal_moves, but wrapped as Move objects"""
    return [
        Move(from_square=square, to_square=destination)
        for destination in legal_moves(board, square, is_white_turn)
    ]


def movable_pawns(board: Board, is_white_turn: bool) -> list[Square]:
    """All pawns of the side to move that have at least one legal move (row-major order)"""
    return [
        square
        for square in board.squares()
        if legal_moves(board, square, is_white_turn)
    ]


def _is_available(target: Cell, mover: Color, diagonal: bool) -> bool:
    if target == Cell.EMPTY:
        return True
    # occupied: a straight step is blocked by anything, a diagonal step can take an enemy pawn
    return diagonal and pawn_color(target) == mover.opponent
