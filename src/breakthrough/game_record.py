"""
Contract between the engine and the persistence layer.

Domain level data model of a single game: everything needed to continue (or score) it.
A record is never changed after creation. Every move produces a brand-new one (see `dataclasses.replace`).
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.breakthrough.board import Board
from src.breakthrough.pieces import color_to_move
from src.core.exceptions import InvalidConfigurationError
from src.core.shared_types import Color

PlayerName = str


@dataclass(frozen=True)
class GameRecord:
    """Board + game handling info (players, turn parity, end flag)"""

    unique_code: Optional[str]
    move_count: int
    players: tuple[PlayerName, ...]  # (white, black)
    first_move: int  # 0: white starts, 1: black starts
    board: Board
    is_win: bool = False

    @classmethod
    def new_game(
        cls, board: Board, white_player: str, black_player: str, first_move: int
    ) -> Self:
        """Not yet persisted, so there is no code."""
        if first_move not in (0, 1):
            raise InvalidConfigurationError(f"first_move must be 0 or 1, got {first_move}.")
        return cls(
            unique_code=None,
            move_count=0,
            players=(white_player, black_player),
            first_move=first_move,
            board=board,
        )

    @property
    def is_white_turn(self) -> bool:
        return (self.move_count + self.first_move) % 2 == 0

    @property
    def color_to_move(self) -> Color:
        return color_to_move(self.is_white_turn)

    def player_name(self, color: Color) -> Optional[PlayerName]:
        index = 0 if color == Color.WHITE else 1
        return self.players[index] if len(self.players) > index else None

    @property
    def winner(self) -> Optional[PlayerName]:
        """
        Name of the player that made the final move of a finished game.

        The final move was number `move_count - 1`, so the winner is the side whose turn it was before the count was increased.
        """
        if not self.is_win or len(self.players) < 2:
            return None
        return self.players[(self.first_move + self.move_count + 1) % 2] or None
