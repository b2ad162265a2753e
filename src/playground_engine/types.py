"""
playground_engine.types — TypedDict schemas for collaborator payloads
=====================================================================

This module documents the exact structure of the dictionaries the engine
hands to its persistence collaborator and exposes to API layers.

All types are exported from the main package:

    from playground_engine import SessionEventPayload, LeaderboardEntryPayload

Use __annotations__ to inspect fields:

    >>> LeaderboardEntryPayload.__annotations__
    {'rank': int, 'userId': str, 'userName': str, 'score': int, 'gamesCompleted': int}
"""

from typing import TypedDict, List, Optional


# ============================================
# save_session_event() payload
# ============================================

class TestResultPayload(TypedDict):
    """One test verdict as stored with a session."""
    testCaseIndex: int
    passed: bool
    expectedOutput: str
    actualOutput: str
    executionTime: float    # milliseconds
    error: Optional[str]


class SessionEventPayload(TypedDict):
    """Snapshot passed to PersistenceService.save_session_event().

    Fields
    ------
    event : str
        What happened: "started", "resumed", "submitted", "hint_used",
        "completed", "failed", "abandoned".
    status : str
        "in_progress", "completed", "failed" or "abandoned".
    timeSpent : int
        Whole seconds spent in the session so far.
    startedAt, completedAt : Optional[str]
        ISO-8601 UTC timestamps; completedAt is set only on terminal states.
    """
    event: str
    id: str
    userId: str
    challengeId: str
    status: str
    code: str
    score: int
    timeSpent: int
    hintsUsed: int
    attempts: int
    testResults: List[TestResultPayload]
    startedAt: Optional[str]
    completedAt: Optional[str]


# ============================================
# Leaderboard payloads
# ============================================

class LeaderboardEntryPayload(TypedDict):
    """One row of a leaderboard page."""
    rank: int
    userId: str
    userName: str
    score: int
    gamesCompleted: int


class LeaderboardPagePayload(TypedDict):
    """A page of standings for one period.

    Fields
    ------
    period : str
        "daily", "weekly", "monthly" or "all_time".
    page : int
        1-based page number.
    totalEntries : int
        Number of ranked users across all pages.
    """
    period: str
    page: int
    pageSize: int
    totalEntries: int
    entries: List[LeaderboardEntryPayload]


__all__ = [
    "TestResultPayload",
    "SessionEventPayload",
    "LeaderboardEntryPayload",
    "LeaderboardPagePayload",
]
