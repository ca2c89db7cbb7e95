"""Save file schema: what a `<code>.json` file looks like on disk"""

import json
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.breakthrough.board import Board
from src.breakthrough.game_record import GameRecord
from src.core.exceptions import (
    InvalidConfigurationError,
    MalformedJsonError,
    MalformedRecordError,
)


class SaveData(BaseModel):
    """
    Transport format of a GameRecord.
    ---
    Field names on disk are PascalCase (UniqueCode, MoveCount, ...), in Python they are snake_case.
    UniqueCode, Players and Matrix are required: without them a game cannot be continued.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    unique_code: str = Field(alias="UniqueCode", min_length=1)
    move_count: int = Field(default=0, alias="MoveCount", ge=0)
    players: list[str] = Field(alias="Players", min_length=2, max_length=2)
    first_move: Literal[0, 1] = Field(default=0, alias="FirstMove")
    matrix: list[list[int]] = Field(alias="Matrix")
    is_win: bool = Field(default=False, alias="IsWin")

    @classmethod
    def from_record(cls, record: GameRecord) -> Self:
        if record.unique_code is None:
            raise MalformedRecordError("Cannot save a record without a unique code.")
        return cls(
            unique_code=record.unique_code,
            move_count=record.move_count,
            players=list(record.players),
            first_move=record.first_move,
            matrix=record.board.to_matrix(),
            is_win=record.is_win,
        )

    @classmethod
    def from_json(cls, text: str) -> Self:
        """Two separate failure modes: not JSON at all, or JSON that does not describe a game."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedJsonError(f"Invalid JSON: {exc}") from exc
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise MalformedRecordError(_summarize(exc)) from exc

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_record(self) -> GameRecord:
        """Explicit factory: every field goes through the constructor, the board is validated on the way."""
        try:
            board = Board.from_matrix(self.matrix)
        except InvalidConfigurationError as exc:
            raise MalformedRecordError(f"Unusable 'Matrix' field: {exc}") from exc
        return GameRecord(
            unique_code=self.unique_code,
            move_count=self.move_count,
            players=tuple(self.players),
            first_move=self.first_move,
            board=board,
            is_win=self.is_win,
        )


def _summarize(exc: ValidationError) -> str:
    """One line per problem is too much for the error log: join them, naming the field as it appears on disk."""
    problems = [
        f"'{'.'.join(str(part) for part in error['loc'])}': {error['msg']}"
        for error in exc.errors()
    ]
    return "Invalid save data: " + "; ".join(problems)
