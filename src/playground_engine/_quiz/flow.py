# Area: Quiz
"""
playground_engine._quiz.flow — Timed quiz state machine
=======================================================

Drives one quiz a question at a time:
presentation -> answer capture -> grading -> feedback -> advance/terminate.

The engine never blocks. It sits in a phase until the caller invokes the
next operation, or until a scheduled timer calls ``expire_time_budget``.
Completion is idempotent: the first finalization wins and any later
expiry, finish or stale timer firing is a no-op.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, List, Optional

from .models import AnswerRecord, Quiz, QuizResult
from .state import QuizEvent, QuizPhase, QuizState, TRANSITIONS
from .._scoring.scoring import grade_answer, passed, summarize_quiz
from .._shared.timers import TimerScheduler, TimerToken
from ..errors import EmptyQuizError, InvariantViolation

if TYPE_CHECKING:
    from ..callbacks import PersistenceService

logger = logging.getLogger("playground_engine.quiz")


class QuizFlow:
    """
    State machine for a single quiz run.

    Starts in PRESENTING(0). A whole-quiz timer (``quiz.time_limit``) and a
    per-question timer (``question.time_limit``) are armed on the injected
    scheduler when present; both call ``expire_time_budget``.

    Attributes:
        quiz: The immutable quiz content
        result: QuizResult once COMPLETED, else None
    """

    def __init__(
        self,
        quiz: Quiz,
        persistence: Optional["PersistenceService"] = None,
        timers: Optional[TimerScheduler] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if not quiz.questions:
            raise EmptyQuizError(quiz.quiz_id)

        self.quiz = quiz
        self.result: Optional[QuizResult] = None
        self._persistence = persistence
        self._timers = timers
        self._clock = clock or time.monotonic

        self._phase = QuizPhase.PRESENTING
        self._index = 0
        self._records: List[AnswerRecord] = []
        self._presented_at = self._clock()
        self._quiz_timer: Optional[TimerToken] = None
        self._question_timer: Optional[TimerToken] = None

        if self._timers is not None and quiz.time_limit:
            self._quiz_timer = self._timers.schedule(
                "quiz_time_limit", quiz.time_limit, self.expire_time_budget,
                owner=quiz.quiz_id,
            )
        self._arm_question_timer()
        logger.info(
            f"[{quiz.quiz_id}] Quiz started: {len(quiz.questions)} questions, "
            f"{quiz.total_points} points"
        )

    # ── Read-only views ───────────────────────────────────────

    @property
    def current_state(self) -> QuizState:
        return QuizState(
            phase=self._phase,
            question_index=self._index,
            total_questions=len(self.quiz.questions),
            last_record=self._records[-1] if self._phase is QuizPhase.FEEDBACK else None,
        )

    @property
    def records(self) -> List[AnswerRecord]:
        return list(self._records)

    @property
    def current_question(self):
        return self.quiz.questions[self._index]

    def passed(self, passing_score_percent: Optional[float] = None) -> bool:
        """Whether the finalized result meets the pass threshold."""
        if self.result is None:
            raise InvariantViolation("passed", self._phase.value, self.quiz.quiz_id)
        threshold = self.quiz.passing_score if passing_score_percent is None else passing_score_percent
        return passed(self.result, threshold)

    # ── Operations ────────────────────────────────────────────

    def submit_answer(self, text: str) -> AnswerRecord:
        """
        Record and grade the answer to the current question.

        An empty string is accepted as "no answer" and graded incorrect.

        Raises:
            InvariantViolation: If not in PRESENTING
        """
        self._require(QuizPhase.PRESENTING, "submit_answer")
        self._transition(QuizEvent.SUBMIT)
        self._cancel_question_timer()

        question = self.quiz.questions[self._index]
        grade = grade_answer(question, text)
        record = AnswerRecord(
            question_index=self._index,
            answer=text,
            elapsed_ms=self._elapsed_ms(),
            is_correct=grade.correct,
            points_awarded=grade.points,
        )
        self._records.append(record)
        self._transition(QuizEvent.GRADED)
        return record

    def advance(self) -> QuizState:
        """
        Leave FEEDBACK for the next question, or complete after the last one.

        Raises:
            InvariantViolation: If not in FEEDBACK
        """
        self._require(QuizPhase.FEEDBACK, "advance")
        if self._index == len(self.quiz.questions) - 1:
            self._transition(QuizEvent.LAST_ANSWERED)
            self._finalize()
        else:
            self._index += 1
            self._transition(QuizEvent.NEXT_QUESTION)
            self._presented_at = self._clock()
            self._arm_question_timer()
        return self.current_state

    def expire_time_budget(self) -> Optional[QuizResult]:
        """
        Force completion, filling every unanswered question with "no answer".

        Safe to call from any phase and any number of times; once COMPLETED
        it returns the existing result without recording anything.
        """
        if self._phase is QuizPhase.COMPLETED:
            logger.debug(f"[{self.quiz.quiz_id}] Expiry after completion ignored")
            return self.result

        self._cancel_question_timer()
        elapsed_current = self._elapsed_ms() if self._phase is QuizPhase.PRESENTING else 0
        for index in range(len(self._records), len(self.quiz.questions)):
            question = self.quiz.questions[index]
            grade = grade_answer(question, "")
            self._records.append(AnswerRecord(
                question_index=index,
                answer="",
                elapsed_ms=elapsed_current if index == self._index else 0,
                is_correct=grade.correct,
                points_awarded=grade.points,
            ))
        self._index = len(self.quiz.questions) - 1
        self._transition(QuizEvent.EXPIRE)
        self._finalize()
        return self.result

    def finish(self) -> Optional[QuizResult]:
        """User-initiated early finish; same semantics as a time expiry."""
        return self.expire_time_budget()

    # ── Internals ─────────────────────────────────────────────

    def _require(self, phase: QuizPhase, operation: str) -> None:
        if self._phase is not phase:
            raise InvariantViolation(operation, self._phase.value, self.quiz.quiz_id)

    def _transition(self, event: QuizEvent) -> None:
        next_phase = TRANSITIONS[self._phase].get(event)
        if next_phase is None:
            raise InvariantViolation(event.value, self._phase.value, self.quiz.quiz_id)
        logger.info(
            f"[{self.quiz.quiz_id}] Phase: {self._phase.value}({self._index}) "
            f"→ {next_phase.value}"
        )
        self._phase = next_phase

    def _elapsed_ms(self) -> int:
        return int(round((self._clock() - self._presented_at) * 1000))

    def _arm_question_timer(self) -> None:
        limit = self.quiz.questions[self._index].time_limit
        if self._timers is not None and limit:
            self._question_timer = self._timers.schedule(
                f"question_time_limit:{self._index}", limit, self.expire_time_budget,
                owner=self.quiz.quiz_id,
            )

    def _cancel_question_timer(self) -> None:
        if self._timers is not None:
            self._timers.cancel(self._question_timer)
        self._question_timer = None

    def _finalize(self) -> None:
        if self._timers is not None:
            self._timers.cancel(self._quiz_timer)
            self._timers.cancel(self._question_timer)
        self._quiz_timer = None
        self._question_timer = None

        self.result = summarize_quiz(self._records, self.quiz.questions, self.quiz.quiz_id)
        logger.info(
            f"[{self.quiz.quiz_id}] Quiz completed: {self.result.score}/"
            f"{self.result.total_points} ({self.result.accuracy:.1f}%)"
        )

        if self._persistence is None:
            return
        try:
            self._persistence.save_completed_quiz(self.result)
        except Exception:
            # Local result is the source of truth; retries belong to the collaborator
            logger.error(
                "Saving quiz result failed for %s; keeping local result",
                self.quiz.quiz_id,
                exc_info=True,
            )
