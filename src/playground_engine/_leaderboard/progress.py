# Area: Leaderboard
"""
playground_engine._leaderboard.progress — Per-player progress and achievements
==============================================================================

Like the standings, progress is recomputed from session records on
demand and never stored.

Achievements are checked while walking a player's completions in
chronological order, so ``unlocked_at`` is the completion time of the
session that first met the requirement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .periods import as_utc
from .._session.enums import SessionStatus
from .._session.models import Challenge, GameSession


@dataclass(frozen=True)
class AchievementDefinition:
    achievement_id: str
    title: str
    description: str
    kind: str           # "completion", "streak" or "score"
    requirement: int


ACHIEVEMENTS = (
    AchievementDefinition("first_win", "First Victory", "Complete your first coding game", "completion", 1),
    AchievementDefinition("streak_3", "On Fire", "Play games for 3 consecutive days", "streak", 3),
    AchievementDefinition("streak_7", "Week Warrior", "Play games for 7 consecutive days", "streak", 7),
    AchievementDefinition("points_1000", "Point Master", "Earn 1000 total points", "score", 1000),
    AchievementDefinition("games_10", "Dedicated Player", "Complete 10 games", "completion", 10),
    AchievementDefinition("games_50", "Game Master", "Complete 50 games", "completion", 50),
)


@dataclass(frozen=True)
class Achievement:
    definition: AchievementDefinition
    progress: int
    unlocked_at: Optional[datetime] = None

    @property
    def achievement_id(self) -> str:
        return self.definition.achievement_id

    @property
    def is_unlocked(self) -> bool:
        return self.unlocked_at is not None


@dataclass(frozen=True)
class CategoryProgress:
    category: str
    completed_games: int
    total_points: int

    @property
    def average_score(self) -> float:
        if self.completed_games == 0:
            return 0.0
        return self.total_points / self.completed_games


@dataclass(frozen=True)
class PlayerProgress:
    """
    Aggregate statistics for one player.

    Attributes:
        games_played: Sessions that reached any terminal state
        games_completed: Sessions that reached COMPLETED
        streak_days: Consecutive UTC days with a completion, ending on
            the most recent completion day
        favorite_language: Language of the most recent completion
    """

    user_id: str
    games_played: int = 0
    games_completed: int = 0
    total_points: int = 0
    streak_days: int = 0
    last_played: Optional[datetime] = None
    favorite_language: Optional[str] = None
    categories: List[CategoryProgress] = field(default_factory=list)
    achievements: List[Achievement] = field(default_factory=list)

    @property
    def average_score(self) -> float:
        if self.games_completed == 0:
            return 0.0
        return self.total_points / self.games_completed

    @property
    def completion_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_completed / self.games_played * 100

    @property
    def unlocked(self) -> List[str]:
        return [a.achievement_id for a in self.achievements if a.is_unlocked]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "totalGamesPlayed": self.games_played,
            "totalGamesCompleted": self.games_completed,
            "totalPoints": self.total_points,
            "averageScore": self.average_score,
            "completionRate": self.completion_rate,
            "streakDays": self.streak_days,
            "lastPlayedDate": self.last_played.isoformat() if self.last_played else None,
            "favoriteLanguage": self.favorite_language,
            "categoryProgress": [
                {
                    "category": c.category,
                    "completedGames": c.completed_games,
                    "totalPoints": c.total_points,
                    "averageScore": c.average_score,
                }
                for c in self.categories
            ],
            "achievements": [
                {
                    "id": a.achievement_id,
                    "title": a.definition.title,
                    "type": a.definition.kind,
                    "requirement": a.definition.requirement,
                    "progress": a.progress,
                    "isUnlocked": a.is_unlocked,
                    "unlockedAt": a.unlocked_at.isoformat() if a.unlocked_at else None,
                }
                for a in self.achievements
            ],
        }


def _catalog_map(catalog) -> Dict[str, Challenge]:
    if catalog is None:
        return {}
    if isinstance(catalog, Mapping):
        return dict(catalog)
    return {c.challenge_id: c for c in catalog}


def _player_progress(
    user_id: str,
    sessions: List[GameSession],
    catalog: Dict[str, Challenge],
) -> PlayerProgress:
    finished = [s for s in sessions if s.status.is_terminal]
    completions = sorted(
        (s for s in finished if s.status is SessionStatus.COMPLETED and s.completed_at),
        key=lambda s: as_utc(s.completed_at),
    )

    count = points = run = 0
    last_day: Optional[date] = None
    categories: Dict[str, List[int]] = {}
    unlocked: Dict[str, datetime] = {}
    language = None

    for session in completions:
        completed_at = as_utc(session.completed_at)
        count += 1
        points += session.score

        day = completed_at.date()
        if last_day is None or day - last_day > timedelta(days=1):
            run = 1
        elif day - last_day == timedelta(days=1):
            run += 1
        last_day = day

        challenge = catalog.get(session.challenge_id)
        category = challenge.category if challenge else "general"
        tally = categories.setdefault(category, [0, 0])
        tally[0] += 1
        tally[1] += session.score
        if challenge is not None:
            language = challenge.language

        metrics = {"completion": count, "streak": run, "score": points}
        for definition in ACHIEVEMENTS:
            if definition.achievement_id in unlocked:
                continue
            if metrics[definition.kind] >= definition.requirement:
                unlocked[definition.achievement_id] = completed_at

    final_metrics = {"completion": count, "streak": run, "score": points}
    achievements = [
        Achievement(
            definition=d,
            progress=final_metrics[d.kind],
            unlocked_at=unlocked.get(d.achievement_id),
        )
        for d in ACHIEVEMENTS
    ]

    return PlayerProgress(
        user_id=user_id,
        games_played=len(finished),
        games_completed=count,
        total_points=points,
        streak_days=run,
        last_played=as_utc(completions[-1].completed_at) if completions else None,
        favorite_language=language,
        categories=[
            CategoryProgress(category=name, completed_games=games, total_points=total)
            for name, (games, total) in categories.items()
        ],
        achievements=achievements,
    )


def build_progress(
    sessions: Iterable[GameSession],
    catalog: Union[Mapping[str, Challenge], Iterable[Challenge], None] = None,
) -> Dict[str, PlayerProgress]:
    """
    Recompute progress for every user appearing in ``sessions``.

    Sessions still in progress count toward nothing. Challenges missing
    from the catalog are grouped under the "general" category.
    """
    by_user: Dict[str, List[GameSession]] = {}
    for session in sessions:
        by_user.setdefault(session.user_id, []).append(session)
    challenges = _catalog_map(catalog)
    return {
        user_id: _player_progress(user_id, user_sessions, challenges)
        for user_id, user_sessions in by_user.items()
    }
