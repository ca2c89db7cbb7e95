"""Orchestration of communication from the UI to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional

from src.api.models import (
    GameResponse,
    LeaderboardResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    SaveSummary,
    SquareModel,
    StartGameRequest,
)
from src.breakthrough.game import GameEngine, Outcome
from src.breakthrough.game_record import GameRecord
from src.breakthrough.moves import Move, legal_move_set, legal_moves, movable_pawns
from src.breakthrough.square import Square
from src.core.exceptions import GameStateError, IllegalMoveError, UnfinishedMoveError
from src.core.shared_types import Color
from src.db.repository import SaveRepository

logger = logging.getLogger(__name__)


class BreakthroughService:
    """
    Orchestration of layers for one local Breakthrough session.

    The active game is plain instance state: the UI owns one service object and passes it around,
    there is no module-level "current game".
    """

    def __init__(
        self, repository: SaveRepository, rng: Optional[random.Random] = None
    ) -> None:
        self.repo = repository
        self.engine = GameEngine(repository)
        self.rng = rng or random.Random()
        self.current: Optional[GameRecord] = None
        # set when the winning move is on disk but its win flag is not
        self.pending_outcome: Optional[Outcome] = None

    # -- UI calls ---
    def start_game(self, request: StartGameRequest) -> GameResponse:
        """Create the board, persist the starting position and make it the active game."""
        first_move = (
            request.first_move
            if request.first_move is not None
            else self.rng.randint(0, 1)
        )
        self.current = self.engine.start(
            height=request.height,
            width=request.width,
            players=(request.white_player, request.black_player),
            first_move=first_move,
        )
        self.pending_outcome = None
        return self._create_game_response(self.current)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destinations for the pawn the player selected. Empty if it is not one of theirs."""
        record = self._active_game()
        origin = Square(request.row, request.col)
        destinations = legal_moves(record.board, origin, record.is_white_turn)
        return LegalMovesResponse(
            origin=_to_square_model(origin),
            color=record.color_to_move,
            legal_moves=[_to_square_model(square) for square in destinations],
        )

    def movable_pawns(self) -> list[SquareModel]:
        """Pawns the player to move can select"""
        record = self._active_game()
        return [
            _to_square_model(square)
            for square in movable_pawns(record.board, record.is_white_turn)
        ]

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Validate the move, then let the engine play and persist it."""
        record = self._complete_pending_finish(self._active_game())
        if record.is_win:
            raise GameStateError(f"Game {record.unique_code} is already finished.")

        new_move = Move(
            from_square=Square(request.from_row, request.from_col),
            to_square=Square(request.to_row, request.to_col),
        )
        if new_move not in legal_move_set(
            record.board, new_move.from_square, record.is_white_turn
        ):
            raise IllegalMoveError(f"Move not allowed: {new_move}")

        try:
            self.current, outcome = self.engine.apply_move(record, new_move)
        except UnfinishedMoveError as exc:
            self._adopt_saved_record(exc)
            raise
        return MoveResponse(
            game=self._create_game_response(self.current),
            status=outcome.status,
            winner=outcome.winner,
            winner_name=self.current.player_name(outcome.winner)
            if outcome.winner
            else None,
            reason=outcome.reason,
        )

    def list_saves(self) -> list[SaveSummary]:
        """All readable saves, most recent first."""
        return [
            SaveSummary(
                unique_code=record.unique_code or "",
                white_player=record.player_name(Color.WHITE) or "?",
                black_player=record.player_name(Color.BLACK) or "?",
                move_count=record.move_count,
                is_win=record.is_win,
            )
            for record in self.repo.load_all()
        ]

    def load_save(self, unique_code: str) -> GameResponse:
        """Continue a stored game"""
        self.current = self.repo.load(unique_code)
        self.pending_outcome = None
        return self._create_game_response(self.current)

    def get_leaderboard(self) -> LeaderboardResponse:
        """Rewrites the top-scores file, then reports what it says"""
        lines = self.repo.read_top_scores()
        return LeaderboardResponse(
            best_player=lines[1],
            longest_game=lines[3],
            shortest_game=lines[5],
        )

    # -- Internal helpers --
    def _active_game(self) -> GameRecord:
        if self.current is None:
            raise GameStateError("No active game. Start a new game or load a save first.")
        return self.current

    def _adopt_saved_record(self, exc: UnfinishedMoveError) -> None:
        """The previous save is already gone: continue from the state that is on disk."""
        self.current = exc.saved_record
        self.pending_outcome = None if exc.saved_record.is_win else exc.outcome
        logger.warning(
            "Move saved as %s, but the turn did not complete: %s",
            exc.saved_record.unique_code,
            exc,
        )

    def _complete_pending_finish(self, record: GameRecord) -> GameRecord:
        """Retry flagging a game that ended on a move whose win flag could not be saved."""
        if self.pending_outcome is None:
            return record
        try:
            self.current = self.engine.finish(record, self.pending_outcome)
        except UnfinishedMoveError as exc:
            self._adopt_saved_record(exc)
            raise
        self.pending_outcome = None
        return self.current

    def _create_game_response(self, record: GameRecord) -> GameResponse:
        return GameResponse(
            unique_code=record.unique_code or "",
            players={
                color: name
                for color in Color
                if (name := record.player_name(color)) is not None
            },
            first_move=record.first_move,
            move_count=record.move_count,
            color_to_move=record.color_to_move,
            board=record.board.to_matrix(),
            is_win=record.is_win,
        )


def _to_square_model(square: Square) -> SquareModel:
    return SquareModel(row=square.row, col=square.col)
