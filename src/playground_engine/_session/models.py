# Area: Session
"""
playground_engine._session.models — Challenge and session records
=================================================================

Challenge content (Challenge, TestCase), execution verdicts
(TestVerdict) and the mutable GameSession record owned by the
GameSessionManager.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from .enums import SessionStatus


@dataclass(frozen=True)
class TestCase:
    """One input/expected-output pair checked by the execution service."""
    __test__ = False  # not a pytest class

    input: str
    expected_output: str
    description: str = ""
    is_hidden: bool = False


@dataclass(frozen=True)
class TestVerdict:
    """
    Outcome of running one test case, as reported by the execution service.

    The engine stores these as received and never alters them.
    """
    __test__ = False  # not a pytest class

    test_case_index: int
    passed: bool
    expected_output: str
    actual_output: str
    execution_time: float = 0.0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "testCaseIndex": self.test_case_index,
            "passed": self.passed,
            "expectedOutput": self.expected_output,
            "actualOutput": self.actual_output,
            "executionTime": self.execution_time,
            "error": self.error,
        }


@dataclass(frozen=True)
class Challenge:
    """
    A graded coding challenge.

    Attributes:
        challenge_id: Unique challenge identifier
        title: Display title
        language: Language passed to the execution service
        points: Base points before penalties (None uses the configured default)
        starter_code: Initial code buffer for new sessions
        hints: Ordered hint texts
        test_cases: Cases the execution service runs
        category: Grouping used by progress statistics
        time_limit: Optional session time budget in seconds
        max_attempts: Optional cap on graded submissions
    """

    challenge_id: str
    title: str = ""
    language: str = "python"
    points: Optional[int] = None
    starter_code: str = ""
    hints: Tuple[str, ...] = ()
    test_cases: Tuple[TestCase, ...] = ()
    category: str = "general"
    time_limit: Optional[float] = None
    max_attempts: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Challenge":
        return cls(
            challenge_id=str(data["id"]),
            title=data.get("title", ""),
            language=data.get("language", "python"),
            points=data.get("points"),
            starter_code=data.get("starter_code", ""),
            hints=tuple(data.get("hints", ())),
            test_cases=tuple(
                TestCase(
                    input=tc.get("input", ""),
                    expected_output=tc["expected_output"],
                    description=tc.get("description", ""),
                    is_hidden=tc.get("is_hidden", False),
                )
                for tc in data.get("test_cases", ())
            ),
            category=data.get("category", "general"),
            time_limit=data.get("time_limit"),
            max_attempts=data.get("max_attempts"),
        )


@dataclass
class GameSession:
    """
    One user's attempt at one challenge.

    Mutated only by GameSessionManager. Elapsed time is banked in
    ``time_spent`` whenever the clock segment stops (leave or terminal
    transition); ``segment_started`` is the monotonic start of the running
    segment, or None while suspended or finished.
    """

    session_id: str
    user_id: str
    challenge_id: str
    status: SessionStatus = SessionStatus.IN_PROGRESS
    code: str = ""
    score: int = 0
    time_spent: float = 0.0
    hints_used: int = 0
    revealed_hints: Set[int] = field(default_factory=set)
    attempts: int = 0
    test_results: List[TestVerdict] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    segment_started: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.IN_PROGRESS

    def elapsed_seconds(self, now: float) -> float:
        """Banked time plus the running segment, if any."""
        if self.segment_started is None:
            return self.time_spent
        return self.time_spent + max(0.0, now - self.segment_started)

    def all_tests_passed(self) -> bool:
        return all(v.passed for v in self.test_results)
