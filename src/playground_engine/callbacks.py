# Area: Collaborators
"""
playground_engine.callbacks — Collaborator interfaces the engine consumes
=========================================================================

The engine owns no I/O. Code execution and persistence are provided by
the host application through these two abstract classes, injected into
QuizFlow and GameSessionManager through their constructors.

Persistence calls are fire-and-forget relative to the state machines:
the local state reaches its terminal form first, and a failing save is
logged and left to the collaborator to retry.
"""

from abc import ABC, abstractmethod
from typing import Sequence, List, TYPE_CHECKING

from .types import SessionEventPayload

if TYPE_CHECKING:
    from ._quiz.models import QuizResult
    from ._session.models import TestCase, TestVerdict


class ExecutionService(ABC):
    """
    Runs submitted code against a challenge's test cases.

    The engine never executes code itself; it only consumes the ordered
    verdict list returned here.
    """

    @abstractmethod
    def execute(
        self, language: str, code: str, test_cases: Sequence["TestCase"],
    ) -> List["TestVerdict"]:
        """
        Run ``code`` once per test case.

        Parameters
        ----------
        language : str
            Challenge language, e.g. "python".
        code : str
            The user's code buffer.
        test_cases : Sequence[TestCase]
            Cases to run, in order.

        Returns
        -------
        List[TestVerdict]
            One verdict per test case, in the same order.

        Raises
        ------
        ExecutionServiceError
            On transport or timeout failures. The engine reports these as
            a failed submission and does not count the attempt.
        """
        ...


class PersistenceService(ABC):
    """Stores finished quizzes and session events."""

    @abstractmethod
    def save_completed_quiz(self, result: "QuizResult") -> None:
        """
        Called once when a quiz reaches COMPLETED.

        Exceptions are logged by the engine and never roll back the result.
        """
        ...

    @abstractmethod
    def save_session_event(self, event: SessionEventPayload) -> None:
        """
        Called after every session state change (start, resume, submit,
        hint, completion, failure, abandon).

        Exceptions are logged by the engine and never roll back the session.
        """
        ...
