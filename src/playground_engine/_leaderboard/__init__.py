# Area: Leaderboard
"""
Standings and player progress, both recomputed from session records.
"""

from .periods import Period, period_contains
from .standings import (
    DEFAULT_PAGE_SIZE,
    LeaderboardEntry,
    LeaderboardPage,
    build_leaderboard,
    paginate,
)
from .progress import (
    ACHIEVEMENTS,
    Achievement,
    AchievementDefinition,
    CategoryProgress,
    PlayerProgress,
    build_progress,
)

__all__ = [
    "Period",
    "period_contains",
    "DEFAULT_PAGE_SIZE",
    "LeaderboardEntry",
    "LeaderboardPage",
    "build_leaderboard",
    "paginate",
    "ACHIEVEMENTS",
    "Achievement",
    "AchievementDefinition",
    "CategoryProgress",
    "PlayerProgress",
    "build_progress",
]
