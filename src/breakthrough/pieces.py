"""Pawns: which cell value belongs to which side, and which way each side moves"""

from typing import Optional

from src.core.shared_types import Cell, Color

PAWN_OF_COLOR: dict[Color, Cell] = {
    Color.WHITE: Cell.WHITE_PAWN,
    Color.BLACK: Cell.BLACK_PAWN,
}

COLOR_OF_PAWN: dict[Cell, Color] = {value: key for key, value in PAWN_OF_COLOR.items()}

# White starts at the bottom rows and moves up the board (towards row 0), black moves down.
FORWARD: dict[Color, int] = {
    Color.WHITE: -1,
    Color.BLACK: 1,
}


def pawn_color(cell: Cell) -> Optional[Color]:
    """None for an empty square"""
    return COLOR_OF_PAWN.get(cell)


def color_to_move(is_white_turn: bool) -> Color:
    return Color.WHITE if is_white_turn else Color.BLACK


def goal_row(color: Color, height: int) -> int:
    """The edge a side has to reach to win"""
    return 0 if color == Color.WHITE else height - 1
