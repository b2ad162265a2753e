# Area: Leaderboard
"""
playground_engine._leaderboard.standings — Ranked standings per period
======================================================================

Standings are a view. They are rebuilt from session records on every
request and have no update or delete operation.

Ranking rules:
1. Keep COMPLETED sessions whose completion falls inside the period
2. Group by user: sum scores, count games, remember earliest completion
3. Sort by summed score descending, then earliest completion ascending;
   the sort is stable, so full ties keep first-seen input order
4. Number the rows 1..n with no gaps
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .periods import Period, as_utc, coerce_period, period_contains
from .._session.enums import SessionStatus
from .._session.models import GameSession
from ..types import LeaderboardEntryPayload, LeaderboardPagePayload

logger = logging.getLogger("playground_engine.leaderboard")

DEFAULT_PAGE_SIZE = 50


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: str
    user_name: str
    score: int
    games_completed: int
    first_completed_at: datetime

    def to_dict(self) -> LeaderboardEntryPayload:
        return {
            "rank": self.rank,
            "userId": self.user_id,
            "userName": self.user_name,
            "score": self.score,
            "gamesCompleted": self.games_completed,
        }


@dataclass(frozen=True)
class LeaderboardPage:
    period: Period
    page: int
    page_size: int
    total_entries: int
    entries: List[LeaderboardEntry] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_entries / self.page_size)

    def to_dict(self) -> LeaderboardPagePayload:
        return {
            "period": self.period.value,
            "page": self.page,
            "pageSize": self.page_size,
            "totalEntries": self.total_entries,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class _Tally:
    user_id: str
    score: int = 0
    games: int = 0
    first_completed_at: Optional[datetime] = None


def build_leaderboard(
    sessions: Iterable[GameSession],
    period: Union[Period, str] = Period.ALL_TIME,
    now: Optional[datetime] = None,
    display_names: Optional[Mapping[str, str]] = None,
) -> List[LeaderboardEntry]:
    """
    Rank users by their summed completed-session score within ``period``.

    Returns an empty list when nothing qualifies.
    """
    period = coerce_period(period)
    display_names = display_names or {}

    tallies: Dict[str, _Tally] = {}
    for session in sessions:
        if session.status is not SessionStatus.COMPLETED:
            continue
        if session.completed_at is None:
            logger.warning(f"[{session.session_id}] Completed session has no completion time; skipped")
            continue
        if not period_contains(period, session.completed_at, now):
            continue
        tally = tallies.setdefault(session.user_id, _Tally(session.user_id))
        tally.score += session.score
        tally.games += 1
        completed_at = as_utc(session.completed_at)
        if tally.first_completed_at is None or completed_at < tally.first_completed_at:
            tally.first_completed_at = completed_at

    ordered = sorted(
        tallies.values(),
        key=lambda t: (-t.score, t.first_completed_at),
    )
    entries = [
        LeaderboardEntry(
            rank=rank,
            user_id=t.user_id,
            user_name=display_names.get(t.user_id, t.user_id),
            score=t.score,
            games_completed=t.games,
            first_completed_at=t.first_completed_at,
        )
        for rank, t in enumerate(ordered, start=1)
    ]
    logger.debug(f"Leaderboard {period.value}: {len(entries)} ranked users")
    return entries


def paginate(
    entries: List[LeaderboardEntry],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    period: Union[Period, str] = Period.ALL_TIME,
) -> LeaderboardPage:
    """Slice ranked entries into a 1-based page. Ranks are not renumbered."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return LeaderboardPage(
        period=coerce_period(period),
        page=page,
        page_size=page_size,
        total_entries=len(entries),
        entries=list(entries[start:start + page_size]),
    )
