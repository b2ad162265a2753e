# Area: Collaborators Tests
"""Tests for the demo collaborators and built-in content."""

import pytest

from playground_engine._session.enums import SessionStatus
from playground_engine._session.manager import GameSessionManager
from playground_engine._session.models import TestCase
from playground_engine.callbacks import ExecutionService, PersistenceService
from playground_engine.demo_services import (
    ExpectedOutputExecutor,
    InMemoryPersistence,
    demo_challenges,
    demo_quiz,
)
from playground_engine.errors import ExecutionServiceError, SubmissionFailedError


def _reverse(code, text):
    return text[::-1]


class TestExpectedOutputExecutor:
    """Tests for ExpectedOutputExecutor."""

    def test_implements_interface(self):
        """Test implements interface."""
        assert isinstance(ExpectedOutputExecutor(_reverse), ExecutionService)
        assert isinstance(InMemoryPersistence(), PersistenceService)

    def test_verdict_per_case_in_order(self):
        """Test verdict per case in order."""
        cases = [TestCase("abc", "cba"), TestCase("xy", "xy")]
        verdicts = ExpectedOutputExecutor(_reverse).execute("python", "code", cases)
        assert [v.test_case_index for v in verdicts] == [0, 1]
        assert [v.passed for v in verdicts] == [True, False]
        assert verdicts[1].actual_output == "yx"
        assert verdicts[0].execution_time >= 0

    def test_trailing_whitespace_ignored(self):
        """Test trailing whitespace ignored."""
        executor = ExpectedOutputExecutor(lambda code, text: text + "\n")
        assert executor.execute("python", "", [TestCase("a", "a")])[0].passed is True

    def test_runner_exception_fails_only_that_case(self):
        """Test runner exception fails only that case."""
        def flaky(code, text):
            if text == "boom":
                raise ZeroDivisionError("division by zero")
            return text

        verdicts = ExpectedOutputExecutor(flaky).execute(
            "python", "", [TestCase("boom", "x"), TestCase("ok", "ok")],
        )
        assert verdicts[0].passed is False
        assert verdicts[0].error == "ZeroDivisionError: division by zero"
        assert verdicts[1].passed is True

    def test_service_error_propagates(self):
        """Test service error propagates."""
        def down(code, text):
            raise ExecutionServiceError("sandbox unreachable")

        with pytest.raises(ExecutionServiceError):
            ExpectedOutputExecutor(down).execute("python", "", [TestCase("a", "a")])


class TestDemoContent:
    """Tests for the built-in quiz and challenges."""

    def test_demo_quiz(self):
        """Test the demo quiz content."""
        quiz = demo_quiz()
        assert len(quiz.questions) == 3
        assert quiz.total_points == 40
        assert quiz.questions[0].options == ("func", "def", "lambda", "fn")

    def test_demo_challenge_runs_end_to_end(self):
        """Test demo challenge runs end to end."""
        store = InMemoryPersistence()
        manager = GameSessionManager(
            "u1",
            demo_challenges(),
            execution=ExpectedOutputExecutor(_reverse),
            persistence=store,
        )
        session = manager.start("reverse-string")
        assert manager.use_hint(1) == "Try s[::-1]."
        manager.run("def solve(s): return s[::-1]")
        assert session.status is SessionStatus.COMPLETED
        assert session.score == 90
        assert store.events_for(session.session_id) == ["started", "hint_used", "completed"]

    def test_executor_failure_surfaces_as_submission_failure(self):
        """Test executor failure surfaces as submission failure."""
        def down(code, text):
            raise ExecutionServiceError("timeout")

        manager = GameSessionManager("u1", demo_challenges(), execution=ExpectedOutputExecutor(down))
        session = manager.start("reverse-string")
        with pytest.raises(SubmissionFailedError):
            manager.run("code")
        assert session.attempts == 0
