"""The Game board holds the pawns and guards its own dimensions. It contains no game rules."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Iterable, Self

from src.breakthrough.moves import Move
from src.breakthrough.pieces import PAWN_OF_COLOR
from src.breakthrough.square import Square
from src.core.config import MAX_HEIGHT, MAX_WIDTH, MIN_HEIGHT, MIN_WIDTH
from src.core.exceptions import BoardBoundsError, InvalidConfigurationError
from src.core.shared_types import Cell, Color

Grid = tuple[tuple[Cell, ...], ...]


def validate_dimensions(height: int, width: int) -> None:
    if not MIN_HEIGHT <= height <= MAX_HEIGHT:
        raise InvalidConfigurationError(
            f"Board height must be between {MIN_HEIGHT} and {MAX_HEIGHT}, got {height}."
        )
    if not MIN_WIDTH <= width <= MAX_WIDTH:
        raise InvalidConfigurationError(
            f"Board width must be between {MIN_WIDTH} and {MAX_WIDTH}, got {width}."
        )


@dataclass(frozen=True)
class Board:
    """
    Immutable grid of cells. Moving a pawn returns a new board.

    Any iterable of rows is accepted and stored as a tuple of tuples.
    """

    grid: Grid

    def __init__(self, grid: Iterable[Iterable[Cell]]) -> None:
        rows = tuple(tuple(row) for row in grid)
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise InvalidConfigurationError("Board must be a non-empty rectangular grid.")
        validate_dimensions(len(rows), len(rows[0]))
        object.__setattr__(self, "grid", rows)

    @classmethod
    def starting_position(cls, height: int, width: int) -> Self:
        """
        Two rows of black pawns on top (rows 0 and 1), two rows of white pawns at the bottom.
        ex. a 6x4 board:
        2 2 2 2
        2 2 2 2
        0 0 0 0
        0 0 0 0
        1 1 1 1
        1 1 1 1
        """
        validate_dimensions(height, width)
        grid: list[list[Cell]] = []
        for row in range(height):
            if row < 2:
                cell = Cell.BLACK_PAWN
            elif row >= height - 2:
                cell = Cell.WHITE_PAWN
            else:
                cell = Cell.EMPTY
            grid.append([cell] * width)
        return cls(grid)

    @classmethod
    def from_matrix(cls, matrix: list[list[int]]) -> Self:
        """Rebuild a board from the integers stored in a save file"""
        try:
            grid = [[Cell(value) for value in row] for row in matrix]
        except ValueError as exc:
            raise InvalidConfigurationError(f"Unknown cell value in matrix: {exc}") from exc
        return cls(grid)

    def to_matrix(self) -> list[list[int]]:
        return [[int(cell) for cell in row] for row in self.grid]

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0])

    def contains(self, square: Square) -> bool:
        return square.is_within_bounds(self.height, self.width)

    def get(self, square: Square) -> Cell:
        if not self.contains(square):
            raise BoardBoundsError(
                f"{square} is not on a {self.height}x{self.width} board."
            )
        return self.grid[square.row][square.col]

    def clone(self) -> "Board":
        return deepcopy(self)

    def squares(self) -> list[Square]:
        """All squares in row-major order"""
        return [
            Square(row, col) for row in range(self.height) for col in range(self.width)
        ]

    def pawns(self, color: Color) -> list[Square]:
        pawn = PAWN_OF_COLOR[color]
        return [square for square in self.squares() if self.get(square) == pawn]

    def count(self, cell: Cell) -> int:
        return sum(row.count(cell) for row in self.grid)

    def move_pawn(self, move: Move) -> "Board":
        """
        The position after `move`, as a new board. `self` stays as it is.

        NOTE: whatever stood on the destination is simply overwritten: that is the capture.
        """
        pawn_that_moved = self.get(move.from_square)
        self.get(move.to_square)  # bounds check only
        grid = [list(row) for row in self.grid]
        grid[move.to_square.row][move.to_square.col] = pawn_that_moved
        grid[move.from_square.row][move.from_square.col] = Cell.EMPTY
        return Board(grid)
