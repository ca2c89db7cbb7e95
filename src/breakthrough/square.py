"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Square:
    """Row 0 is black's home edge (top of the screen), column 0 is the left edge."""

    row: int
    col: int

    def shifted(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def is_within_bounds(self, height: int, width: int) -> bool:
        return (0 <= self.row < height) and (0 <= self.col < width)
