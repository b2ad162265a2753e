# Area: Rounds
"""
playground_engine._rounds.history — Mini-game round log and statistics
======================================================================

RoundHistory is an append-only log of finished rounds for one player on
one device. GameStats is never stored: ``compute_stats`` folds the log
from scratch every time, so the tallies cannot drift from the rounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List

from .._opponents.choice_opponent import Outcome


@dataclass(frozen=True)
class RoundOutcome:
    """
    One finished round.

    For the choice game the moves are single Choice values; for the grid
    game they are the tuples of cells each side played, in order.
    """

    player_move: Any
    opponent_move: Any
    result: Outcome
    round_number: int


@dataclass(frozen=True)
class GameStats:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    games_played: int = 0
    current_streak: int = 0
    best_streak: int = 0

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "gamesPlayed": self.games_played,
            "streak": self.current_streak,
            "bestStreak": self.best_streak,
        }


def compute_stats(outcomes: Iterable[RoundOutcome]) -> GameStats:
    """
    Fold rounds into tallies.

    A win extends the current streak, a loss resets it to 0 and a draw
    leaves it unchanged.
    """
    wins = losses = draws = streak = best = 0
    for outcome in outcomes:
        if outcome.result is Outcome.WIN:
            wins += 1
            streak += 1
            best = max(best, streak)
        elif outcome.result is Outcome.LOSE:
            losses += 1
            streak = 0
        else:
            draws += 1
    return GameStats(
        wins=wins,
        losses=losses,
        draws=draws,
        games_played=wins + losses + draws,
        current_streak=streak,
        best_streak=best,
    )


class RoundHistory:
    """Append-only sequence of RoundOutcome, numbered from 1."""

    def __init__(self):
        self._rounds: List[RoundOutcome] = []

    def record(self, player_move: Any, opponent_move: Any, result: Outcome) -> RoundOutcome:
        outcome = RoundOutcome(
            player_move=player_move,
            opponent_move=opponent_move,
            result=result,
            round_number=len(self._rounds) + 1,
        )
        self._rounds.append(outcome)
        return outcome

    def player_moves(self) -> List[Any]:
        return [r.player_move for r in self._rounds]

    def stats(self) -> GameStats:
        return compute_stats(self._rounds)

    @property
    def last(self):
        return self._rounds[-1] if self._rounds else None

    def __iter__(self) -> Iterator[RoundOutcome]:
        return iter(list(self._rounds))

    def __len__(self) -> int:
        return len(self._rounds)
