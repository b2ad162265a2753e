# Area: Shared
"""
playground_engine._shared.timers — Cancellable countdown scheduling
===================================================================

Tracks countdowns (whole-quiz limit, per-question limit, challenge time
limit) keyed by an opaque token. Scheduling returns the token; the owner
cancels it on every terminal transition. The host event loop calls
``poll()``, which fires each expired timer exactly once.

Cancellation is best-effort from the engine's point of view: the expiry
operations a timer calls are idempotent, so a late firing against a
terminal state is a no-op.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger("playground_engine.timers")


@dataclass(frozen=True)
class TimerToken:
    """Handle returned by ``TimerScheduler.schedule``."""
    timer_id: int
    name: str
    owner: Optional[str] = None


@dataclass
class _Timer:
    token: TimerToken
    expires_at: float
    callback: Callable[[], object]


class TimerScheduler:
    """
    Poll-driven countdown registry.

    Each timer stores its name, owner, callback, and the monotonic
    timestamp at which it expires.
    """

    def __init__(self) -> None:
        self._timers: Dict[int, _Timer] = {}
        self._ids = itertools.count(1)

    def schedule(
        self,
        name: str,
        seconds: float,
        callback: Callable[[], object],
        owner: Optional[str] = None,
    ) -> TimerToken:
        """Schedule ``callback`` to run once ``seconds`` from now."""
        if seconds < 0:
            raise ValueError(f"Timer duration must be >= 0, got {seconds}")
        token = TimerToken(timer_id=next(self._ids), name=name, owner=owner)
        self._timers[token.timer_id] = _Timer(
            token=token,
            expires_at=time.monotonic() + seconds,
            callback=callback,
        )
        logger.debug("Timer set: %s for %s (%.1fs)", name, owner, seconds)
        return token

    def cancel(self, token: Optional[TimerToken]) -> bool:
        """Cancel a timer. No-op (returns False) if unknown or already fired."""
        if token is None or token.timer_id not in self._timers:
            return False
        del self._timers[token.timer_id]
        logger.debug("Timer cancelled: %s for %s", token.name, token.owner)
        return True

    def cancel_all(self, owner: Optional[str] = None) -> int:
        """Cancel every timer, or only those belonging to ``owner``."""
        if owner is None:
            count = len(self._timers)
            self._timers.clear()
        else:
            doomed = [tid for tid, t in self._timers.items() if t.token.owner == owner]
            for tid in doomed:
                del self._timers[tid]
            count = len(doomed)
        if count:
            logger.debug("Cancelled %d timer(s) for %s", count, owner or "all owners")
        return count

    def poll(self) -> List[TimerToken]:
        """
        Fire every expired timer once and return their tokens.

        Timers are removed before their callback runs, so a callback that
        cancels or reschedules timers sees a consistent registry.
        """
        now = time.monotonic()
        due = sorted(
            (t for t in self._timers.values() if now >= t.expires_at),
            key=lambda t: (t.expires_at, t.token.timer_id),
        )
        fired: List[TimerToken] = []
        for timer in due:
            if self._timers.pop(timer.token.timer_id, None) is None:
                # Cancelled by an earlier callback in this poll
                continue
            logger.info("Timer expired: %s for %s", timer.token.name, timer.token.owner)
            timer.callback()
            fired.append(timer.token)
        return fired

    def pending(self, owner: Optional[str] = None) -> List[TimerToken]:
        """Tokens still waiting to fire."""
        return [
            t.token for t in self._timers.values()
            if owner is None or t.token.owner == owner
        ]

    def remaining(self, token: TimerToken) -> Optional[float]:
        """Seconds left on a pending timer, or None if it is gone."""
        timer = self._timers.get(token.timer_id)
        if timer is None:
            return None
        return max(0.0, timer.expires_at - time.monotonic())
