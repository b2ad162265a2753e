# Area: Session
"""
playground_engine._session.enums — Session states and events
============================================================

Defines the statuses and events of the coding-challenge session state
machine.
"""

from enum import Enum


class SessionStatus(Enum):
    """
    Status of a challenge session.

    State transitions:
    IN_PROGRESS -> COMPLETED (on ALL_PASSED)
    IN_PROGRESS -> FAILED (on ATTEMPTS_EXHAUSTED or TIME_EXPIRED)
    IN_PROGRESS -> ABANDONED (on ABANDON)
    COMPLETED, FAILED and ABANDONED are terminal.
    """
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.IN_PROGRESS


class SessionEvent(Enum):
    """
    Events that trigger session transitions.

    - ALL_PASSED: a submission whose verdicts all passed
    - ATTEMPTS_EXHAUSTED: a failing submission that used the last allowed attempt
    - TIME_EXPIRED: the challenge time limit ran out
    - ABANDON: the user gave up
    """
    ALL_PASSED = "ALL_PASSED"
    ATTEMPTS_EXHAUSTED = "ATTEMPTS_EXHAUSTED"
    TIME_EXPIRED = "TIME_EXPIRED"
    ABANDON = "ABANDON"


# Valid transitions: {current_status: {event: next_status}}
TRANSITIONS = {
    SessionStatus.IN_PROGRESS: {
        SessionEvent.ALL_PASSED: SessionStatus.COMPLETED,
        SessionEvent.ATTEMPTS_EXHAUSTED: SessionStatus.FAILED,
        SessionEvent.TIME_EXPIRED: SessionStatus.FAILED,
        SessionEvent.ABANDON: SessionStatus.ABANDONED,
    },
    SessionStatus.COMPLETED: {},
    SessionStatus.FAILED: {},
    SessionStatus.ABANDONED: {},
}
