# Area: Leaderboard Tests
"""Tests for leaderboard periods, standings and pagination."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from playground_engine._leaderboard.periods import Period, period_contains
from playground_engine._leaderboard.standings import build_leaderboard, paginate
from playground_engine._session.enums import SessionStatus
from playground_engine._session.models import GameSession

UTC = timezone.utc
# Wednesday of ISO week 20
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)


def _session(user, score, completed_at, status=SessionStatus.COMPLETED, sid=None):
    _session.counter += 1
    return GameSession(
        session_id=sid or f"s{_session.counter}",
        user_id=user,
        challenge_id="c1",
        status=status,
        score=score,
        completed_at=completed_at,
    )


_session.counter = 0


class TestPeriodContains:
    """Tests for period_contains()."""

    def test_all_time_accepts_anything(self):
        """Test ALL_TIME accepts any timestamp."""
        assert period_contains(Period.ALL_TIME, datetime(2001, 1, 1, tzinfo=UTC), NOW)

    def test_missing_timestamp_never_matches(self):
        """Test a missing timestamp never matches."""
        assert period_contains(Period.ALL_TIME, None, NOW) is False

    def test_daily_is_same_utc_day(self):
        """Test DAILY is the same UTC day."""
        assert period_contains(Period.DAILY, datetime(2024, 5, 15, 0, 0, tzinfo=UTC), NOW)
        assert not period_contains(Period.DAILY, datetime(2024, 5, 14, 23, 59, tzinfo=UTC), NOW)

    def test_daily_converts_other_timezones(self):
        """Test daily converts other timezones."""
        plus_five = timezone(timedelta(hours=5))
        # 01:00 on the 16th at +05:00 is 20:00 on the 15th in UTC
        assert period_contains(Period.DAILY, datetime(2024, 5, 16, 1, 0, tzinfo=plus_five), NOW)

    def test_naive_timestamps_are_utc(self):
        """Test naive timestamps are read as UTC."""
        assert period_contains(Period.DAILY, datetime(2024, 5, 15, 8, 0), NOW)

    def test_weekly_is_iso_week(self):
        """Test WEEKLY is the ISO week."""
        assert period_contains(Period.WEEKLY, datetime(2024, 5, 13, 0, 0, tzinfo=UTC), NOW)
        assert period_contains(Period.WEEKLY, datetime(2024, 5, 19, 23, 0, tzinfo=UTC), NOW)
        assert not period_contains(Period.WEEKLY, datetime(2024, 5, 12, 23, 0, tzinfo=UTC), NOW)

    def test_weekly_across_year_boundary(self):
        """Test WEEKLY across a year boundary."""
        now = datetime(2024, 12, 31, tzinfo=UTC)  # ISO week 1 of 2025
        assert period_contains(Period.WEEKLY, datetime(2025, 1, 2, tzinfo=UTC), now)
        assert not period_contains(Period.WEEKLY, datetime(2024, 12, 29, tzinfo=UTC), now)

    def test_monthly_is_calendar_month(self):
        """Test MONTHLY is the calendar month."""
        assert period_contains(Period.MONTHLY, datetime(2024, 5, 1, tzinfo=UTC), NOW)
        assert not period_contains(Period.MONTHLY, datetime(2024, 4, 30, 23, 0, tzinfo=UTC), NOW)
        assert not period_contains(Period.MONTHLY, datetime(2023, 5, 15, tzinfo=UTC), NOW)

    def test_string_period(self):
        """Test periods given as strings."""
        assert period_contains("monthly", datetime(2024, 5, 2, tzinfo=UTC), NOW)
        with pytest.raises(ValueError):
            period_contains("yearly", NOW, NOW)


class TestBuildLeaderboard:
    """Tests for build_leaderboard()."""

    def test_empty_sessions_give_empty_list(self):
        """Test empty sessions give empty list."""
        assert build_leaderboard([], Period.WEEKLY, now=NOW) == []

    def test_only_completed_sessions_count(self):
        """Test only completed sessions count."""
        t = NOW - timedelta(hours=1)
        sessions = [
            _session("u1", 100, t),
            _session("u2", 0, t, status=SessionStatus.ABANDONED),
            _session("u3", 0, t, status=SessionStatus.FAILED),
            _session("u4", 0, None, status=SessionStatus.IN_PROGRESS),
        ]
        entries = build_leaderboard(sessions, Period.ALL_TIME, now=NOW)
        assert [e.user_id for e in entries] == ["u1"]

    def test_sums_scores_and_counts_games(self):
        """Test sums scores and counts games."""
        t = NOW - timedelta(hours=2)
        sessions = [_session("u1", 50, t), _session("u2", 80, t), _session("u1", 40, t)]
        entries = build_leaderboard(sessions, Period.ALL_TIME, now=NOW)
        assert [(e.user_id, e.score, e.games_completed) for e in entries] == [
            ("u1", 90, 2),
            ("u2", 80, 1),
        ]

    def test_ranks_are_gapless_from_one(self):
        """Test ranks are gapless from one."""
        t = NOW - timedelta(hours=1)
        sessions = [_session(f"u{i}", score, t) for i, score in enumerate([30, 90, 30, 60, 90])]
        entries = build_leaderboard(sessions, Period.ALL_TIME, now=NOW)
        assert [e.rank for e in entries] == [1, 2, 3, 4, 5]
        assert [e.score for e in entries] == [90, 90, 60, 30, 30]

    def test_tie_broken_by_earliest_completion(self):
        """Test tie broken by earliest completion."""
        sessions = [
            _session("late", 100, NOW - timedelta(hours=1)),
            _session("early", 100, NOW - timedelta(hours=3)),
        ]
        entries = build_leaderboard(sessions, Period.DAILY, now=NOW)
        assert [e.user_id for e in entries] == ["early", "late"]

    def test_tie_uses_earliest_of_each_users_completions(self):
        """Test tie uses earliest of each users completions."""
        sessions = [
            _session("a", 50, NOW - timedelta(hours=1)),
            _session("b", 100, NOW - timedelta(hours=2)),
            _session("a", 50, NOW - timedelta(hours=5)),
        ]
        entries = build_leaderboard(sessions, Period.DAILY, now=NOW)
        assert [e.user_id for e in entries] == ["a", "b"]
        assert entries[0].first_completed_at == NOW - timedelta(hours=5)

    def test_full_tie_keeps_input_order(self):
        """Test full tie keeps input order."""
        t = NOW - timedelta(hours=1)
        sessions = [_session("first", 70, t), _session("second", 70, t)]
        entries = build_leaderboard(sessions, Period.ALL_TIME, now=NOW)
        assert [(e.rank, e.user_id) for e in entries] == [(1, "first"), (2, "second")]

    def test_period_filter(self):
        """Test only sessions inside the period count."""
        sessions = [
            _session("u1", 10, NOW - timedelta(hours=1)),
            _session("u1", 20, NOW - timedelta(days=20)),
        ]
        assert build_leaderboard(sessions, Period.DAILY, now=NOW)[0].score == 10
        assert build_leaderboard(sessions, Period.ALL_TIME, now=NOW)[0].score == 30

    def test_no_qualifying_sessions_in_period(self):
        """Test no qualifying sessions in period."""
        sessions = [_session("u1", 10, NOW - timedelta(days=400))]
        assert build_leaderboard(sessions, Period.MONTHLY, now=NOW) == []

    def test_completed_without_timestamp_is_logged(self, caplog):
        """Test a completed session lacking completed_at is skipped with a warning."""
        sessions = [_session("u1", 10, None, sid="undated"), _session("u2", 5, NOW)]
        with caplog.at_level(logging.WARNING, logger="playground_engine.leaderboard"):
            entries = build_leaderboard(sessions, Period.ALL_TIME, now=NOW)
        assert [e.user_id for e in entries] == ["u2"]
        assert "undated" in caplog.text

    def test_display_names(self):
        """Test display names fall back to the user id."""
        sessions = [_session("u1", 10, NOW), _session("u2", 5, NOW)]
        entries = build_leaderboard(sessions, "all_time", now=NOW, display_names={"u1": "Ada L"})
        assert [e.user_name for e in entries] == ["Ada L", "u2"]

    def test_entry_to_dict(self):
        """Test entry to dict."""
        entries = build_leaderboard([_session("u1", 10, NOW)], Period.ALL_TIME, now=NOW)
        assert entries[0].to_dict() == {
            "rank": 1,
            "userId": "u1",
            "userName": "u1",
            "score": 10,
            "gamesCompleted": 1,
        }


class TestPaginate:
    """Tests for paginate()."""

    def _entries(self, n):
        t = NOW - timedelta(hours=1)
        sessions = [_session(f"u{i:03d}", 1000 - i, t) for i in range(n)]
        return build_leaderboard(sessions, Period.ALL_TIME, now=NOW)

    def test_first_page_uses_default_size(self):
        """Test first page uses default size."""
        page = paginate(self._entries(120))
        assert page.page_size == 50
        assert len(page.entries) == 50
        assert page.total_entries == 120
        assert page.total_pages == 3

    def test_last_partial_page_keeps_ranks(self):
        """Test last partial page keeps ranks."""
        page = paginate(self._entries(120), page=3)
        assert [e.rank for e in page.entries] == list(range(101, 121))

    def test_page_past_end_is_empty(self):
        """Test page past end is empty."""
        page = paginate(self._entries(5), page=2, page_size=5)
        assert page.entries == []
        assert page.total_entries == 5

    def test_invalid_page_arguments(self):
        """Test invalid page arguments."""
        with pytest.raises(ValueError):
            paginate([], page=0)
        with pytest.raises(ValueError):
            paginate([], page_size=0)

    def test_to_dict(self):
        """Test LeaderboardPage.to_dict uses camelCase keys."""
        page = paginate(self._entries(3), page=1, page_size=2, period="weekly")
        data = page.to_dict()
        assert data["period"] == "weekly"
        assert data["page"] == 1
        assert data["pageSize"] == 2
        assert data["totalEntries"] == 3
        assert [e["rank"] for e in data["entries"]] == [1, 2]

    def test_empty_leaderboard_page(self):
        """Test empty leaderboard page."""
        page = paginate([])
        assert page.entries == []
        assert page.total_pages == 0
