"""
Leaderboard statistics over all finished games.

Always recomputed from scratch out of the full set of records: there is no running tally that could drift
from what is actually on disk.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from src.breakthrough.game_record import GameRecord

UNDETERMINED = "undetermined"

BEST_PLAYER_LABEL = "Player with the most wins"
LONGEST_GAME_LABEL = "Longest game"
SHORTEST_GAME_LABEL = "Shortest game"


@dataclass(frozen=True)
class LeaderboardSnapshot:
    best_player: Optional[str]
    longest_game: Optional[int]
    shortest_game: Optional[int]

    def to_lines(self) -> list[str]:
        """Alternating label/value lines, in the order of the top-scores file"""
        return [
            BEST_PLAYER_LABEL,
            _display(self.best_player),
            LONGEST_GAME_LABEL,
            _display(self.longest_game),
            SHORTEST_GAME_LABEL,
            _display(self.shortest_game),
        ]


def recompute(records: Iterable[GameRecord]) -> LeaderboardSnapshot:
    """Pure function of the records: unfinished games and games without player names are ignored."""
    finished = [record for record in records if record.is_win and record.winner]
    if not finished:
        return LeaderboardSnapshot(None, None, None)

    game_lengths = [record.move_count for record in finished]
    return LeaderboardSnapshot(
        best_player=_best_player([record.winner for record in finished]),
        longest_game=max(game_lengths),
        shortest_game=min(game_lengths),
    )


def _best_player(winners: list[Optional[str]]) -> Optional[str]:
    """Only a player with strictly more wins than everybody else counts. A shared first place is undetermined."""
    wins = Counter(winners).most_common()
    if len(wins) > 1 and wins[0][1] == wins[1][1]:
        return None
    return wins[0][0]


def _display(value: Optional[str | int]) -> str:
    return UNDETERMINED if value is None else str(value)
