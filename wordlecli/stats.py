import threading
from dataclasses import dataclass
from typing import Optional, Union

from .game import Outcome, SessionRecord, Won


@dataclass(frozen=True)
class AggregateStats:
    games_played: int = 0
    games_won: int = 0
    total_guesses_in_wins: int = 0


class StatsAggregator:
    """
    Accumulates finished games for the lifetime of the process.

    record() takes a lock so one aggregator can be shared between sessions
    running on different threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.games_played = 0
        self.games_won = 0
        self.total_guesses_in_wins = 0

    def record(self, outcome: Union[Outcome, SessionRecord]) -> None:
        if isinstance(outcome, SessionRecord):
            outcome = outcome.outcome
        with self._lock:
            self.games_played += 1
            if isinstance(outcome, Won):
                self.games_won += 1
                self.total_guesses_in_wins += outcome.guesses_used

    def win_rate(self) -> Optional[float]:
        stats = self.snapshot()
        if stats.games_played == 0:
            return None
        return stats.games_won / stats.games_played

    def average_winning_guesses(self) -> Optional[float]:
        stats = self.snapshot()
        if stats.games_won == 0:
            return None
        return stats.total_guesses_in_wins / stats.games_won

    def snapshot(self) -> AggregateStats:
        with self._lock:
            return AggregateStats(self.games_played, self.games_won, self.total_guesses_in_wins)
