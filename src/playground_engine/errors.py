"""
playground_engine.errors — Custom exception classes
====================================================

Defines the exception hierarchy for the session engine.
Each exception stores full context for structured logging.

InvariantViolation is always a programming error (an operation invoked
in a state that forbids it). DuplicateActiveSessionError,
HintAlreadyUsedError and InvalidHintIndexError are expected conditions
a caller should present to the user. EmptyQuizError is a content
configuration error.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class EngineError(Exception):
    """Base exception for all playground_engine errors."""

    error_type = "ENGINE_ERROR"

    def context(self) -> Dict[str, Any]:
        return {}

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message=str(self),
            context=self.context(),
        )


class InvariantViolation(EngineError):
    """Raised when an operation is invoked in a state that forbids it."""

    error_type = "INVARIANT_VIOLATION"

    def __init__(self, operation: str, state: str, owner_id: Optional[str] = None):
        self.operation = operation
        self.state = state
        self.owner_id = owner_id
        where = f" [{owner_id}]" if owner_id else ""
        super().__init__(
            f"Operation '{operation}' is not allowed in state '{state}'{where}"
        )

    def context(self) -> Dict[str, Any]:
        return {"operation": self.operation, "state": self.state, "owner_id": self.owner_id}


class DuplicateActiveSessionError(EngineError):
    """Raised when a user already has an in-progress session for a challenge."""

    error_type = "DUPLICATE_ACTIVE_SESSION"

    def __init__(self, user_id: str, challenge_id: str, session_id: str):
        self.user_id = user_id
        self.challenge_id = challenge_id
        self.session_id = session_id
        super().__init__(
            f"User '{user_id}' already has session '{session_id}' "
            f"in progress for challenge '{challenge_id}'"
        )

    def context(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "challenge_id": self.challenge_id,
            "session_id": self.session_id,
        }


class HintAlreadyUsedError(EngineError):
    """Raised when a hint index has already been revealed in a session."""

    error_type = "HINT_ALREADY_USED"

    def __init__(self, session_id: str, hint_index: int):
        self.session_id = session_id
        self.hint_index = hint_index
        super().__init__(
            f"Hint {hint_index} was already revealed in session '{session_id}'"
        )

    def context(self) -> Dict[str, Any]:
        return {"session_id": self.session_id, "hint_index": self.hint_index}


class InvalidHintIndexError(EngineError):
    """Raised when a hint index is outside the challenge's hint list."""

    error_type = "INVALID_HINT_INDEX"

    def __init__(self, challenge_id: str, hint_index: int, total_hints: int):
        self.challenge_id = challenge_id
        self.hint_index = hint_index
        self.total_hints = total_hints
        super().__init__(
            f"Invalid hint index {hint_index} for challenge '{challenge_id}' "
            f"({total_hints} hints available)"
        )

    def context(self) -> Dict[str, Any]:
        return {
            "challenge_id": self.challenge_id,
            "hint_index": self.hint_index,
            "total_hints": self.total_hints,
        }


class EmptyQuizError(EngineError):
    """Raised when a quiz has no questions (accuracy would be undefined)."""

    error_type = "EMPTY_QUIZ"

    def __init__(self, quiz_id: Optional[str] = None):
        self.quiz_id = quiz_id
        label = f"'{quiz_id}'" if quiz_id else "(unnamed)"
        super().__init__(f"Quiz {label} has no questions")

    def context(self) -> Dict[str, Any]:
        return {"quiz_id": self.quiz_id}


class UnknownChallengeError(EngineError):
    """Raised when a challenge id is not present in the catalog."""

    error_type = "UNKNOWN_CHALLENGE"

    def __init__(self, challenge_id: str):
        self.challenge_id = challenge_id
        super().__init__(f"Challenge '{challenge_id}' not found")

    def context(self) -> Dict[str, Any]:
        return {"challenge_id": self.challenge_id}


class ExecutionServiceError(EngineError):
    """Raised by execution collaborators on transport or timeout failures."""

    error_type = "EXECUTION_SERVICE_FAILURE"


class SubmissionFailedError(EngineError):
    """Raised when code could not be graded; the attempt is not counted."""

    error_type = "SUBMISSION_FAILED"

    def __init__(self, session_id: str, reason: str):
        self.session_id = session_id
        self.reason = reason
        super().__init__(f"Submission failed for session '{session_id}': {reason}")

    def context(self) -> Dict[str, Any]:
        return {"session_id": self.session_id, "reason": self.reason}


def _format_error_block(
    error_type: str,
    message: str,
    context: Dict[str, Any],
) -> str:
    """Format a structured error block for terminal output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " ENGINE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Message:      {message}",
    ]

    if context:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
