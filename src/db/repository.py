"""Protocol repository (implemented with JSON files, one file per game)"""

from typing import Protocol

from src.breakthrough.game_record import GameRecord
from src.breakthrough.leaderboard import LeaderboardSnapshot


class SaveRepository(Protocol):
    """Persistence layer orchestration"""

    def persist(self, record: GameRecord) -> GameRecord:
        """Store the record under a fresh code, drop the file of its previous code. Returns the record with the new code."""
        ...

    def load_all(self) -> list[GameRecord]:
        """Every readable save, most recent first. Unreadable saves are skipped."""
        ...

    def load(self, unique_code: str) -> GameRecord:
        """Single save by its code."""
        ...

    def refresh_top_scores(self) -> LeaderboardSnapshot:
        """Recompute the leaderboard from all finished games and rewrite the top-scores file."""
        ...

    def read_top_scores(self) -> list[str]:
        """Regenerate the top-scores file and return its lines."""
        ...
