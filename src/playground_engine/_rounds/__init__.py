# Area: Rounds
"""
Mini-game rounds: the append-only history, derived statistics and the
match drivers that feed both.
"""

from .history import RoundOutcome, RoundHistory, GameStats, compute_stats
from .matches import ChoiceMatch, GridMatch

__all__ = [
    "RoundOutcome",
    "RoundHistory",
    "GameStats",
    "compute_stats",
    "ChoiceMatch",
    "GridMatch",
]
