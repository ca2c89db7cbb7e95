"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from src.breakthrough.board import Board
from src.breakthrough.square import Square
from src.core.config import StorageSettings
from src.core.shared_types import Cell
from src.db.json_repository import JsonSaveStore

BoardBuilder = Callable[..., Board]


@pytest.fixture
def settings(tmp_path: Path) -> StorageSettings:
    """Every test gets its own directory for saves, top-scores and error log."""
    return StorageSettings(base_dir=tmp_path)


@pytest.fixture
def store(settings: StorageSettings) -> JsonSaveStore:
    return JsonSaveStore(settings)


@pytest.fixture
def frozen_time() -> datetime:
    return datetime(2024, 3, 1, 14, 5, 9, 42_000, tzinfo=timezone.utc)


@pytest.fixture
def board_with_pawns() -> BoardBuilder:
    """Call the inner function with the board dimensions and the pawns to place, everything else stays empty"""

    def _create_board(
        pawns: dict[Square, Cell], height: int = 8, width: int = 8
    ) -> Board:
        grid = [[Cell.EMPTY] * width for _ in range(height)]
        for square, cell in pawns.items():
            grid[square.row][square.col] = cell
        return Board(grid)

    return _create_board
