# Area: Session
"""
playground_engine._session.manager — Coding challenge session lifecycle
=======================================================================

Owns every GameSession of one user: start, code edits, graded
submissions, hint use, completion, failure and abandonment, with a
running clock per session.

At most one IN_PROGRESS session exists per (user, challenge). Starting a
challenge that already has one raises DuplicateActiveSessionError;
``resume`` is the way back into it. Leaving a session stops its clock and
its time-limit countdown, and nothing can act on it until it is resumed.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import (
    TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union,
)

from .enums import SessionEvent, SessionStatus, TRANSITIONS
from .models import Challenge, GameSession, TestVerdict
from .snapshot import build_session_snapshot
from .._scoring.scoring import challenge_score
from .._shared.config import EngineSettings
from .._shared.timers import TimerScheduler, TimerToken
from ..errors import (
    DuplicateActiveSessionError,
    ExecutionServiceError,
    HintAlreadyUsedError,
    InvalidHintIndexError,
    InvariantViolation,
    SubmissionFailedError,
    UnknownChallengeError,
)

if TYPE_CHECKING:
    from ..callbacks import ExecutionService, PersistenceService

logger = logging.getLogger("playground_engine.session")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameSessionManager:
    """
    Session service for one user.

    Operations act on the current session (the one last started or
    resumed). Collaborators, the timer scheduler and both clocks are
    injected so callers and tests hold explicit references.
    """

    def __init__(
        self,
        user_id: str,
        catalog: Union[Mapping[str, Challenge], Iterable[Challenge]],
        execution: Optional["ExecutionService"] = None,
        persistence: Optional["PersistenceService"] = None,
        timers: Optional[TimerScheduler] = None,
        settings: Optional[EngineSettings] = None,
        clock: Optional[Callable[[], float]] = None,
        now: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.user_id = user_id
        if isinstance(catalog, Mapping):
            self._catalog: Dict[str, Challenge] = dict(catalog)
        else:
            self._catalog = {c.challenge_id: c for c in catalog}
        self._execution = execution
        self._persistence = persistence
        self._timers = timers
        self.settings = settings or EngineSettings()
        self._clock = clock or time.monotonic
        self._now = now or _utcnow
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

        self._sessions: Dict[str, GameSession] = {}
        self._current_id: Optional[str] = None
        self._deadlines: Dict[str, TimerToken] = {}

    # ── Read-only views ───────────────────────────────────────

    @property
    def current(self) -> Optional[GameSession]:
        if self._current_id is None:
            return None
        return self._sessions[self._current_id]

    @property
    def current_state(self) -> Optional[SessionStatus]:
        session = self.current
        return session.status if session else None

    @property
    def sessions(self) -> List[GameSession]:
        return list(self._sessions.values())

    def get_session(self, session_id: str) -> GameSession:
        return self._sessions[session_id]

    def active_session_for(self, challenge_id: str) -> Optional[GameSession]:
        for session in self._sessions.values():
            if session.challenge_id == challenge_id and session.is_active:
                return session
        return None

    def elapsed_seconds(self, session: Optional[GameSession] = None) -> float:
        session = session or self._require_current("elapsed_seconds")
        return session.elapsed_seconds(self._clock())

    def challenge(self, challenge_id: str) -> Challenge:
        try:
            return self._catalog[challenge_id]
        except KeyError:
            raise UnknownChallengeError(challenge_id) from None

    # ── Lifecycle ─────────────────────────────────────────────

    def start(self, challenge_id: str) -> GameSession:
        """
        Create a fresh session with zero score, hints and attempts.

        Raises:
            UnknownChallengeError: If the challenge is not in the catalog
            DuplicateActiveSessionError: If this user already has the
                challenge in progress (the existing session is untouched)
        """
        challenge = self.challenge(challenge_id)
        existing = self.active_session_for(challenge_id)
        if existing is not None:
            raise DuplicateActiveSessionError(self.user_id, challenge_id, existing.session_id)
        self.leave()

        session = GameSession(
            session_id=self._id_factory(),
            user_id=self.user_id,
            challenge_id=challenge_id,
            code=challenge.starter_code,
            started_at=self._now(),
            segment_started=self._clock(),
        )
        self._sessions[session.session_id] = session
        self._current_id = session.session_id
        self._arm_deadline(session, challenge)

        logger.info(f"[{session.session_id}] Session started: {self.user_id} / {challenge_id}")
        self._emit(session, "started")
        return session

    def resume(self, challenge_id: str) -> GameSession:
        """
        Re-enter the in-progress session for a challenge and restart its clock.

        Raises:
            InvariantViolation: If there is no in-progress session to resume
        """
        session = self.active_session_for(challenge_id)
        if session is None:
            raise InvariantViolation("resume", "no_active_session", challenge_id)
        if self._current_id not in (None, session.session_id):
            self.leave()
        if session.segment_started is None:
            session.segment_started = self._clock()
        self._current_id = session.session_id
        if session.session_id not in self._deadlines:
            self._arm_deadline(session, self.challenge(challenge_id))
        logger.info(f"[{session.session_id}] Session resumed at {session.time_spent:.1f}s")
        self._emit(session, "resumed")
        return session

    def leave(self) -> None:
        """
        Step out of the current session without ending it.

        The clock and the time-limit countdown stop, and there is no
        current session until ``start`` or ``resume``: every operation on
        the session raises InvariantViolation in the meantime.
        """
        session = self.current
        self._current_id = None
        if session is None or not session.is_active:
            return
        self._bank_time(session)
        self._disarm_deadline(session)
        logger.info(f"[{session.session_id}] Session left at {session.time_spent:.1f}s")

    def update_code(self, text: str) -> None:
        """Replace the code buffer. No scoring effect."""
        session = self._require_active("update_code")
        session.code = text

    def submit(self, code: str, verdicts: Sequence[TestVerdict]) -> GameSession:
        """
        Record a graded attempt.

        All verdicts passing completes the session. Otherwise it stays in
        progress, unless the attempt limit is now reached, which fails it.
        """
        session = self._require_active("submit")
        challenge = self.challenge(session.challenge_id)

        session.code = code
        session.attempts += 1
        session.test_results = list(verdicts)
        passed_count = sum(1 for v in session.test_results if v.passed)
        logger.info(
            f"[{session.session_id}] Attempt {session.attempts}: "
            f"{passed_count}/{len(session.test_results)} tests passed"
        )

        if session.all_tests_passed():
            session.score = challenge_score(
                base_points=self._base_points(challenge),
                hints_used=session.hints_used,
                attempts=session.attempts,
                penalty_per_hint=self.settings.penalty_per_hint,
                penalty_per_attempt=self.settings.attempt_penalty,
            )
            self._finish(session, SessionEvent.ALL_PASSED)
            return session

        max_attempts = challenge.max_attempts or self.settings.max_attempts
        if max_attempts is not None and session.attempts >= max_attempts:
            self._finish(session, SessionEvent.ATTEMPTS_EXHAUSTED)
            return session

        self._emit(session, "submitted")
        return session

    def run(self, code: str) -> GameSession:
        """
        Grade ``code`` through the execution service, then ``submit`` it.

        Raises:
            SubmissionFailedError: If the execution service fails; the
                session stays in progress and the attempt is not counted
        """
        session = self._require_active("run")
        if self._execution is None:
            raise InvariantViolation("run", "no_execution_service", session.session_id)
        challenge = self.challenge(session.challenge_id)
        session.code = code
        try:
            verdicts = self._execution.execute(challenge.language, code, challenge.test_cases)
        except ExecutionServiceError as e:
            logger.warning(f"[{session.session_id}] Execution failed: {e}")
            raise SubmissionFailedError(session.session_id, str(e)) from e
        return self.submit(code, verdicts)

    def use_hint(self, index: int) -> str:
        """
        Reveal a hint and count it against the eventual score.

        The penalty is applied at completion, so a hint revealed before a
        correct solution still costs points.

        Raises:
            InvalidHintIndexError: If the challenge has no hint at ``index``
            HintAlreadyUsedError: If the hint was already revealed
        """
        session = self._require_active("use_hint")
        challenge = self.challenge(session.challenge_id)
        if not 0 <= index < len(challenge.hints):
            raise InvalidHintIndexError(challenge.challenge_id, index, len(challenge.hints))
        if index in session.revealed_hints:
            raise HintAlreadyUsedError(session.session_id, index)

        session.revealed_hints.add(index)
        session.hints_used += 1
        logger.info(
            f"[{session.session_id}] Hint {index} revealed "
            f"({session.hints_used}/{len(challenge.hints)} used)"
        )
        self._emit(session, "hint_used")
        return challenge.hints[index]

    def abandon(self) -> GameSession:
        """Give up the current session. No score is awarded."""
        session = self._require_active("abandon")
        session.score = 0
        self._finish(session, SessionEvent.ABANDON)
        return session

    def expire_time_budget(self, session_id: Optional[str] = None) -> Optional[GameSession]:
        """
        Fail a session whose time limit ran out.

        Idempotent: a session already in a terminal state is left as-is.
        """
        sid = session_id or self._current_id
        session = self._sessions.get(sid) if sid else None
        if session is None:
            return None
        if not session.is_active:
            logger.debug(f"[{session.session_id}] Expiry after {session.status.value} ignored")
            return session
        session.score = 0
        self._finish(session, SessionEvent.TIME_EXPIRED)
        return session

    # ── Internals ─────────────────────────────────────────────

    def _base_points(self, challenge: Challenge) -> int:
        if challenge.points is None:
            return self.settings.default_challenge_points
        return challenge.points

    def _require_current(self, operation: str) -> GameSession:
        session = self.current
        if session is None:
            raise InvariantViolation(operation, "no_session", self.user_id)
        return session

    def _require_active(self, operation: str) -> GameSession:
        session = self._require_current(operation)
        if not session.is_active:
            raise InvariantViolation(operation, session.status.value, session.session_id)
        return session

    def _bank_time(self, session: GameSession) -> None:
        session.time_spent = session.elapsed_seconds(self._clock())
        session.segment_started = None

    def _arm_deadline(self, session: GameSession, challenge: Challenge) -> None:
        """Schedule expiry for whatever is left of the challenge's time limit."""
        if self._timers is None or not challenge.time_limit:
            return
        remaining = max(0.0, challenge.time_limit - session.time_spent)
        self._deadlines[session.session_id] = self._timers.schedule(
            "challenge_time_limit",
            remaining,
            lambda sid=session.session_id: self.expire_time_budget(sid),
            owner=session.session_id,
        )

    def _disarm_deadline(self, session: GameSession) -> None:
        deadline = self._deadlines.pop(session.session_id, None)
        if self._timers is not None:
            self._timers.cancel(deadline)

    def _finish(self, session: GameSession, event: SessionEvent) -> None:
        next_status = TRANSITIONS[session.status].get(event)
        if next_status is None:
            raise InvariantViolation(event.value, session.status.value, session.session_id)

        self._bank_time(session)
        session.completed_at = self._now()
        logger.info(
            f"[{session.session_id}] Status: {session.status.value} → {next_status.value} "
            f"(score={session.score}, time={session.time_spent:.1f}s)"
        )
        session.status = next_status
        self._disarm_deadline(session)
        self._emit(session, next_status.value)

    def _emit(self, session: GameSession, event: str) -> None:
        if self._persistence is None:
            return
        snapshot = build_session_snapshot(
            session, event, elapsed_seconds=session.elapsed_seconds(self._clock()),
        )
        try:
            self._persistence.save_session_event(snapshot)
        except Exception:
            logger.error(
                "Saving session event '%s' failed for %s; keeping local state",
                event,
                session.session_id,
                exc_info=True,
            )
