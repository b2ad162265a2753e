# Area: Shared Tests
"""Tests for TimerScheduler — cancellable countdowns."""

from unittest.mock import Mock, patch

import pytest

from playground_engine._shared.timers import TimerScheduler, TimerToken


MOCK_TIME = "playground_engine._shared.timers.time"


class TestTimerScheduler:
    """Unit tests for TimerScheduler."""

    def test_no_timers_initially(self):
        """Test no timers initially."""
        scheduler = TimerScheduler()
        assert scheduler.poll() == []
        assert scheduler.pending() == []

    def test_fires_once_after_deadline(self):
        """Test fires once after deadline."""
        scheduler = TimerScheduler()
        callback = Mock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            token = scheduler.schedule("quiz_time_limit", 30, callback, owner="quiz-1")

            mock_time.monotonic.return_value = 129.0
            assert scheduler.poll() == []
            callback.assert_not_called()

            mock_time.monotonic.return_value = 130.0
            assert scheduler.poll() == [token]
            callback.assert_called_once_with()

            mock_time.monotonic.return_value = 500.0
            assert scheduler.poll() == []
        assert callback.call_count == 1

    def test_cancel_prevents_firing(self):
        """Test cancel prevents firing."""
        scheduler = TimerScheduler()
        callback = Mock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 0.0
            token = scheduler.schedule("t", 10, callback)
            assert scheduler.cancel(token) is True
            mock_time.monotonic.return_value = 20.0
            assert scheduler.poll() == []
        callback.assert_not_called()

    def test_cancel_unknown_or_none_is_noop(self):
        """Test cancelling an unknown token or None is a no-op."""
        scheduler = TimerScheduler()
        assert scheduler.cancel(None) is False
        assert scheduler.cancel(TimerToken(timer_id=99, name="ghost")) is False

    def test_cancel_after_fire_is_noop(self):
        """Test cancelling after firing is a no-op."""
        scheduler = TimerScheduler()
        token = scheduler.schedule("t", 0, Mock())
        scheduler.poll()
        assert scheduler.cancel(token) is False

    def test_cancel_all_by_owner(self):
        """Test cancel all by owner."""
        scheduler = TimerScheduler()
        scheduler.schedule("a", 10, Mock(), owner="s1")
        scheduler.schedule("b", 10, Mock(), owner="s1")
        keep = scheduler.schedule("c", 10, Mock(), owner="s2")
        assert scheduler.cancel_all(owner="s1") == 2
        assert scheduler.pending() == [keep]
        assert scheduler.cancel_all() == 1
        assert scheduler.pending() == []

    def test_fires_in_deadline_order(self):
        """Test fires in deadline order."""
        scheduler = TimerScheduler()
        order = []
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 0.0
            scheduler.schedule("late", 20, lambda: order.append("late"))
            scheduler.schedule("early", 5, lambda: order.append("early"))
            mock_time.monotonic.return_value = 30.0
            scheduler.poll()
        assert order == ["early", "late"]

    def test_callback_cancelling_later_timer(self):
        """Test callback cancelling later timer."""
        scheduler = TimerScheduler()
        second = Mock()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 0.0
            token_b = scheduler.schedule("b", 2, second)
            scheduler.schedule("a", 1, lambda: scheduler.cancel(token_b))
            mock_time.monotonic.return_value = 10.0
            fired = scheduler.poll()
        assert [t.name for t in fired] == ["a"]
        second.assert_not_called()

    def test_remaining(self):
        """Test remaining() counts down and is None after firing."""
        scheduler = TimerScheduler()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 0.0
            token = scheduler.schedule("t", 10, Mock())
            mock_time.monotonic.return_value = 4.0
            assert scheduler.remaining(token) == 6.0
            scheduler.cancel(token)
            assert scheduler.remaining(token) is None

    def test_negative_duration_rejected(self):
        """Test negative duration rejected."""
        with pytest.raises(ValueError):
            TimerScheduler().schedule("t", -1, Mock())
