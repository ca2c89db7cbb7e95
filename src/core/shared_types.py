"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WON = "won"


class WinReason(StrEnum):
    EDGE_REACHED = "edge reached"
    OPPONENT_ELIMINATED = "opponent eliminated"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


# --- NOTE the integer values are exactly what ends up in the "Matrix" field of a save file. Do not renumber.
class Cell(IntEnum):
    EMPTY = 0
    WHITE_PAWN = 1
    BLACK_PAWN = 2
