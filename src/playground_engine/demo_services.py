# Area: Collaborators
"""
playground_engine.demo_services — Ready-to-use demo collaborators
=================================================================

In-memory implementations of the collaborator interfaces plus a small
built-in quiz and challenge set, so the engine runs out of the box.

Usage:
    from playground_engine import GameSessionManager, InMemoryPersistence, demo_challenges

    store = InMemoryPersistence()
    manager = GameSessionManager("u1", demo_challenges(), persistence=store)
"""

import logging
import time
from typing import Callable, List, Sequence

from ._quiz.models import Quiz, QuizResult
from ._session.models import Challenge, TestCase, TestVerdict
from .callbacks import ExecutionService, PersistenceService
from .errors import ExecutionServiceError
from .types import SessionEventPayload

logger = logging.getLogger("playground_engine.demo")


class InMemoryPersistence(PersistenceService):
    """Keeps every saved quiz result and session event in lists."""

    def __init__(self):
        self.quiz_results: List[QuizResult] = []
        self.session_events: List[SessionEventPayload] = []

    def save_completed_quiz(self, result: QuizResult) -> None:
        self.quiz_results.append(result)

    def save_session_event(self, event: SessionEventPayload) -> None:
        self.session_events.append(event)

    def events_for(self, session_id: str) -> List[str]:
        return [e["event"] for e in self.session_events if e["id"] == session_id]


class ExpectedOutputExecutor(ExecutionService):
    """
    Grades code by comparing a runner's output with each expected output.

    ``run_fn(code, input_text)`` produces the program output for one test
    case. An exception raised by ``run_fn`` fails that test case only;
    ExecutionServiceError propagates as a transport failure.
    """

    def __init__(self, run_fn: Callable[[str, str], str]):
        self._run_fn = run_fn

    def execute(
        self, language: str, code: str, test_cases: Sequence[TestCase],
    ) -> List[TestVerdict]:
        verdicts = []
        for index, case in enumerate(test_cases):
            started = time.perf_counter()
            error = None
            try:
                actual = self._run_fn(code, case.input)
            except ExecutionServiceError:
                raise
            except Exception as e:
                actual = ""
                error = f"{e.__class__.__name__}: {e}"
            verdicts.append(TestVerdict(
                test_case_index=index,
                passed=error is None and actual.strip() == case.expected_output.strip(),
                expected_output=case.expected_output,
                actual_output=actual,
                execution_time=(time.perf_counter() - started) * 1000,
                error=error,
            ))
        logger.debug(
            f"Executed {language} code: "
            f"{sum(v.passed for v in verdicts)}/{len(verdicts)} passed"
        )
        return verdicts


DEMO_QUIZ = {
    "id": "python-basics",
    "title": "Python Basics",
    "passing_score": 70,
    "questions": [
        {
            "id": "q1",
            "question": "Which keyword defines a function in Python?",
            "type": "multiple_choice",
            "options": ["func", "def", "lambda", "fn"],
            "correct_answer": "def",
            "explanation": "Functions are defined with the def keyword.",
            "difficulty": "easy",
            "points": 10,
        },
        {
            "id": "q2",
            "question": "Lists in Python are immutable.",
            "type": "true_false",
            "correct_answer": "false",
            "explanation": "Lists are mutable; tuples are immutable.",
            "difficulty": "easy",
            "points": 10,
        },
        {
            "id": "q3",
            "question": "What does len('hello') return?",
            "type": "short_answer",
            "correct_answer": "5",
            "difficulty": "medium",
            "points": 20,
        },
    ],
}

DEMO_CHALLENGES = [
    {
        "id": "reverse-string",
        "title": "Reverse a string",
        "language": "python",
        "points": 100,
        "category": "strings",
        "starter_code": "def solve(s):\n    pass\n",
        "hints": [
            "Slicing accepts a negative step.",
            "Try s[::-1].",
        ],
        "test_cases": [
            {"input": "abc", "expected_output": "cba"},
            {"input": "racecar", "expected_output": "racecar"},
        ],
    },
]


def demo_quiz() -> Quiz:
    return Quiz.from_dict(DEMO_QUIZ)


def demo_challenges() -> List[Challenge]:
    return [Challenge.from_dict(c) for c in DEMO_CHALLENGES]
