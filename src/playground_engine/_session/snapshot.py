# Area: Session
"""
playground_engine._session.snapshot — Session event snapshot builder
====================================================================

Builds serializable session snapshots handed to the persistence
collaborator on every session state change, and reads stored ones back
for the leaderboard and progress views.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from .enums import SessionStatus
from .models import GameSession, TestVerdict
from ..types import SessionEventPayload


def build_session_snapshot(
    session: GameSession, event: str, elapsed_seconds: Optional[float] = None,
) -> SessionEventPayload:
    """Build a serializable snapshot of ``session`` for ``event``."""
    time_spent = session.time_spent if elapsed_seconds is None else elapsed_seconds
    return {
        "event": event,
        "id": session.session_id,
        "userId": session.user_id,
        "challengeId": session.challenge_id,
        "status": session.status.value,
        "code": session.code,
        "score": session.score,
        "timeSpent": int(time_spent),
        "hintsUsed": session.hints_used,
        "attempts": session.attempts,
        "testResults": [v.to_dict() for v in session.test_results],
        "startedAt": _iso(session.started_at),
        "completedAt": _iso(session.completed_at),
    }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def load_session_snapshot(data: Dict[str, Any]) -> GameSession:
    """
    Rebuild a finished-or-not GameSession from a stored snapshot.

    Only the fields the leaderboard and progress views read are required
    (id, userId, challengeId, status, and completedAt for a completed
    session); the rest fall back to defaults.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the status is unknown, or a completed session has
            no completion time (it could not be placed in any period)
    """
    status = SessionStatus(data["status"])
    completed_at = _parse_iso(data.get("completedAt"))
    if status is SessionStatus.COMPLETED and completed_at is None:
        raise ValueError(f"Completed session '{data['id']}' has no completedAt")

    return GameSession(
        session_id=str(data["id"]),
        user_id=str(data["userId"]),
        challenge_id=str(data["challengeId"]),
        status=status,
        code=data.get("code", ""),
        score=int(data.get("score", 0)),
        time_spent=float(data.get("timeSpent", 0)),
        hints_used=int(data.get("hintsUsed", 0)),
        attempts=int(data.get("attempts", 0)),
        test_results=[
            TestVerdict(
                test_case_index=r["testCaseIndex"],
                passed=r["passed"],
                expected_output=r.get("expectedOutput", ""),
                actual_output=r.get("actualOutput", ""),
                execution_time=r.get("executionTime", 0.0),
                error=r.get("error"),
            )
            for r in data.get("testResults", ())
        ],
        started_at=_parse_iso(data.get("startedAt")),
        completed_at=completed_at,
    )
