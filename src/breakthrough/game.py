"""
The GameEngine is the entrypoint into the domain layer for the service layer.
It is responsible for playing a single turn: move the pawn, make the new state durable and decide whether the game is over.

NOTE: the engine trusts its caller to only send moves obtained from `legal_moves`. It does not check legality again.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Self

from src.breakthrough.board import Board
from src.breakthrough.game_record import GameRecord
from src.breakthrough.leaderboard import LeaderboardSnapshot
from src.breakthrough.moves import Move
from src.breakthrough.pieces import PAWN_OF_COLOR, goal_row, pawn_color
from src.breakthrough.square import Square
from src.core.exceptions import GameStateError, PersistenceError, UnfinishedMoveError
from src.core.shared_types import Color, Status, WinReason

logger = logging.getLogger(__name__)


class GameSaver(Protocol):
    """Just the parts of the persistence layer the engine needs"""

    def persist(self, record: GameRecord) -> GameRecord: ...
    def refresh_top_scores(self) -> LeaderboardSnapshot: ...


@dataclass(frozen=True)
class Outcome:
    status: Status
    winner: Optional[Color] = None
    reason: Optional[WinReason] = None

    @classmethod
    def in_progress(cls) -> Self:
        return cls(Status.IN_PROGRESS)

    @classmethod
    def won(cls, winner: Color, reason: WinReason) -> Self:
        return cls(Status.WON, winner, reason)

    @property
    def is_over(self) -> bool:
        return self.status == Status.WON


def terminal_outcome(board: Board, destination: Square) -> Outcome:
    """
    Check the end conditions after a pawn landed on `destination`.
    ---
    Order is fixed, first match wins:
    1. the pawn reached the opposite edge -> its side wins
    2. one side has no pawns left -> the other side wins
    """
    mover = pawn_color(board.get(destination))
    if mover is not None and destination.row == goal_row(mover, board.height):
        return Outcome.won(mover, WinReason.EDGE_REACHED)

    for color in (Color.WHITE, Color.BLACK):
        if board.count(PAWN_OF_COLOR[color]) == 0:
            return Outcome.won(color.opponent, WinReason.OPPONENT_ELIMINATED)

    return Outcome.in_progress()


class GameEngine:
    """Applies moves to game records and keeps the save store in sync."""

    def __init__(self, repository: GameSaver) -> None:
        self.repo = repository

    def start(
        self, height: int, width: int, players: tuple[str, str], first_move: int
    ) -> GameRecord:
        """New board in the starting position, saved right away (move count 0)."""
        board = Board.starting_position(height, width)
        record = GameRecord.new_game(board, players[0], players[1], first_move)
        stored = self.repo.persist(record)
        logger.info(
            "Started %dx%d game %s: %s (white) vs %s (black)",
            height,
            width,
            stored.unique_code,
            *players,
        )
        return stored

    def apply_move(self, record: GameRecord, move: Move) -> tuple[GameRecord, Outcome]:
        """
        Play one move
        -----

        1. move the pawn (on a new board, the board inside `record` is never touched)
        2. persist the new state with the move counter increased
        3. check for the end of the game
        4. game over? `finish` the record

        Once step 2 succeeded the previous save is gone. A write error after that point is raised as
        `UnfinishedMoveError` carrying the record that is on disk now.
        """
        if record.is_win:
            raise GameStateError(
                f"Game {record.unique_code} is already finished. No more moves allowed."
            )

        after_move = self.repo.persist(
            replace(
                record,
                board=record.board.move_pawn(move),
                move_count=record.move_count + 1,
            )
        )
        logger.debug("Applied %s, game saved as %s", move, after_move.unique_code)

        outcome = terminal_outcome(after_move.board, move.to_square)
        if not outcome.is_over:
            return after_move, outcome
        return self.finish(after_move, outcome), outcome

    def finish(self, record: GameRecord, outcome: Outcome) -> GameRecord:
        """Flag the record as won, persist it and refresh the leaderboard."""
        if not record.is_win:
            try:
                record = self.repo.persist(replace(record, is_win=True))
            except PersistenceError as exc:
                raise UnfinishedMoveError(
                    f"Game {record.unique_code} is over but the win could not be saved: {exc}",
                    record,
                    outcome,
                ) from exc

        try:
            self.repo.refresh_top_scores()
        except PersistenceError as exc:
            raise UnfinishedMoveError(
                f"Game {record.unique_code} is saved as won but the leaderboard is stale: {exc}",
                record,
                outcome,
            ) from exc

        logger.info(
            "Game %s won by %s (%s) after %d moves",
            record.unique_code,
            outcome.winner,
            outcome.reason,
            record.move_count,
        )
        return record
