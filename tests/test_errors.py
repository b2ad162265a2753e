# Area: Shared Tests
"""Tests for the engine exception hierarchy and error formatting."""

import pytest

from playground_engine.errors import (
    DuplicateActiveSessionError,
    EmptyQuizError,
    EngineError,
    ExecutionServiceError,
    HintAlreadyUsedError,
    InvalidHintIndexError,
    InvariantViolation,
    SubmissionFailedError,
    UnknownChallengeError,
)


class TestHierarchy:
    """All engine errors share one base class."""

    @pytest.mark.parametrize("error", [
        InvariantViolation("submit_answer", "completed"),
        DuplicateActiveSessionError("u1", "c1", "s1"),
        HintAlreadyUsedError("s1", 0),
        InvalidHintIndexError("c1", 5, 2),
        EmptyQuizError("quiz-1"),
        UnknownChallengeError("c9"),
        ExecutionServiceError("timeout"),
        SubmissionFailedError("s1", "timeout"),
    ])
    def test_is_engine_error(self, error):
        """Test every error derives from EngineError."""
        assert isinstance(error, EngineError)
        assert error.error_type != EngineError.error_type


class TestMessages:
    """Tests for messages and context."""

    def test_invariant_violation(self):
        """Test InvariantViolation message and context."""
        error = InvariantViolation("advance", "presenting", "quiz-1")
        assert "advance" in str(error)
        assert "presenting" in str(error)
        assert error.context() == {
            "operation": "advance",
            "state": "presenting",
            "owner_id": "quiz-1",
        }

    def test_duplicate_session_context(self):
        """Test duplicate session context."""
        error = DuplicateActiveSessionError("u1", "c1", "s1")
        assert error.context()["session_id"] == "s1"

    def test_empty_quiz_without_id(self):
        """Test empty quiz without id."""
        assert "(unnamed)" in str(EmptyQuizError())

    def test_invalid_hint_index(self):
        """Test invalid hint index."""
        error = InvalidHintIndexError("c1", 5, 2)
        assert "Invalid hint index 5" in str(error)


class TestFormatErrorLog:
    """Tests for format_error_log()."""

    def test_block_contains_type_message_and_context(self):
        """Test block contains type message and context."""
        block = HintAlreadyUsedError("s1", 2).format_error_log()
        assert "ENGINE ERROR" in block
        assert "HINT_ALREADY_USED" in block
        assert "Hint 2 was already revealed" in block
        assert '"session_id": "s1"' in block

    def test_plain_error_has_no_context_section(self):
        """Test plain error has no context section."""
        block = ExecutionServiceError("sandbox down").format_error_log()
        assert "EXECUTION_SERVICE_FAILURE" in block
        assert "CONTEXT" not in block
