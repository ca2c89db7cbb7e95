"""Requests and Response models"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.config import DEFAULT_HEIGHT, DEFAULT_WIDTH
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status, WinReason

PlayerName = str


# --- REQUEST MODELS ---
class StartGameRequest(BaseModel):
    white_player: PlayerName
    black_player: PlayerName
    first_move: Optional[Literal[0, 1]] = None  # None: let the service pick at random
    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH

    @field_validator(*["white_player", "black_player"])
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name cannot be empty.")
        return name


class LegalMovesRequest(BaseModel):
    row: int = Field(ge=0)
    col: int = Field(ge=0)


class MoveRequest(BaseModel):
    from_row: int = Field(ge=0)
    from_col: int = Field(ge=0)
    to_row: int = Field(ge=0)
    to_col: int = Field(ge=0)


# --- RESPONSE MODELS ---
class SquareModel(BaseModel):
    row: int
    col: int


class GameResponse(BaseModel):
    unique_code: str
    players: dict[Color, PlayerName]
    first_move: int
    move_count: int
    color_to_move: Color
    board: list[list[int]]
    is_win: bool


class LegalMovesResponse(BaseModel):
    origin: SquareModel
    color: Color
    legal_moves: list[SquareModel]


class MoveResponse(BaseModel):
    game: GameResponse
    status: Status
    winner: Optional[Color] = None
    winner_name: Optional[PlayerName] = None
    reason: Optional[WinReason] = None


class SaveSummary(BaseModel):
    """One line in the 'load game' menu"""

    unique_code: str
    white_player: PlayerName
    black_player: PlayerName
    move_count: int
    is_win: bool


class LeaderboardResponse(BaseModel):
    best_player: str
    longest_game: str
    shortest_game: str
