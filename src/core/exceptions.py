"""
Custom exceptions shared by all layers.

NOTE: GameError derives from Exception, not ValueError.
Pydantic only wraps ValueError/AssertionError raised inside validators, so our own errors pass through unchanged.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.breakthrough.game import Outcome
    from src.breakthrough.game_record import GameRecord


class GameError(Exception):
    """Top-level exception: catch this one to handle anything the game raises on purpose."""


# --- Domain ---
class InvalidConfigurationError(GameError):
    """Board dimensions (or a stored matrix) outside the allowed bounds."""


class BoardBoundsError(GameError):
    """Tried to read a square that is not on the board."""


class GameStateError(GameError):
    """The requested action does not fit the current state of the game."""


class IllegalMoveError(GameError):
    """Move is not in the set of legal moves for that pawn."""


# --- Boundary ---
class InvalidRequestError(GameError):
    """Request data rejected before it reaches the service."""


# --- Persistence ---
class RepositoryError(GameError):
    """Record could not be found."""


class PersistenceError(GameError):
    """Writing a save failed: the current move may not be durable."""


class UnfinishedMoveError(PersistenceError):
    """
    The move itself is on disk, a later write of the same turn failed.

    `saved_record` is the newest state that did reach the disk, with its current code.
    `outcome` is the result of the move, so the turn can be completed later.
    """

    def __init__(
        self, message: str, saved_record: "GameRecord", outcome: "Outcome"
    ) -> None:
        super().__init__(message)
        self.saved_record = saved_record
        self.outcome = outcome


class SaveLoadError(GameError):
    """Base class for problems with one specific save file. Never aborts a bulk load."""


class MalformedJsonError(SaveLoadError):
    """The file is not valid JSON."""


class MalformedRecordError(SaveLoadError):
    """Valid JSON, but required fields are missing or hold unusable data."""


class IntegrityViolationError(SaveLoadError):
    """File modification time does not match the timestamp encoded in its name."""
