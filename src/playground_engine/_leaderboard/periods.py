# Area: Leaderboard
"""
playground_engine._leaderboard.periods — Leaderboard time windows
=================================================================

Every window is evaluated in UTC relative to ``now``:

- daily:    same calendar day
- weekly:   same ISO week (Monday start)
- monthly:  same calendar month
- all_time: no filter

Naive datetimes are taken to already be UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union


class Period(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL_TIME = "all_time"


def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def coerce_period(period: Union[Period, str]) -> Period:
    if isinstance(period, Period):
        return period
    return Period(period)


def period_contains(
    period: Union[Period, str],
    ts: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    """Whether ``ts`` falls inside the window of ``period`` that contains ``now``."""
    period = coerce_period(period)
    if ts is None:
        return False
    if period is Period.ALL_TIME:
        return True

    ts = as_utc(ts)
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    if period is Period.DAILY:
        return ts.date() == now.date()
    if period is Period.WEEKLY:
        return ts.isocalendar()[:2] == now.isocalendar()[:2]
    return (ts.year, ts.month) == (now.year, now.month)
