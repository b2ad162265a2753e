# Area: Quiz
"""
playground_engine._quiz.state — Quiz phases and transition table
================================================================

The quiz is a single explicit state machine:

    PRESENTING(i) -> ANSWERED(i) -> FEEDBACK(i) -> PRESENTING(i+1) | COMPLETED

Every UI flag ("show feedback", "quiz completed", ...) is a derived
predicate on the current QuizState, so contradictory flag combinations
cannot exist.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import AnswerRecord


class QuizPhase(Enum):
    """Phase of the question currently in focus."""
    PRESENTING = "presenting"    # Question i shown, timer running
    ANSWERED = "answered"        # Answer captured, grading
    FEEDBACK = "feedback"        # Verdict shown, waiting for advance()
    COMPLETED = "completed"      # Terminal, QuizResult finalized


class QuizEvent(Enum):
    SUBMIT = "SUBMIT"
    GRADED = "GRADED"
    NEXT_QUESTION = "NEXT_QUESTION"
    LAST_ANSWERED = "LAST_ANSWERED"
    EXPIRE = "EXPIRE"


# Valid transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    QuizPhase.PRESENTING: {
        QuizEvent.SUBMIT: QuizPhase.ANSWERED,
        QuizEvent.EXPIRE: QuizPhase.COMPLETED,
    },
    QuizPhase.ANSWERED: {
        QuizEvent.GRADED: QuizPhase.FEEDBACK,
        QuizEvent.EXPIRE: QuizPhase.COMPLETED,
    },
    QuizPhase.FEEDBACK: {
        QuizEvent.NEXT_QUESTION: QuizPhase.PRESENTING,
        QuizEvent.LAST_ANSWERED: QuizPhase.COMPLETED,
        QuizEvent.EXPIRE: QuizPhase.COMPLETED,
    },
    QuizPhase.COMPLETED: {},
}


@dataclass(frozen=True)
class QuizState:
    """
    Read-only view of the quiz machine.

    Attributes:
        phase: Current phase
        question_index: Question in focus (last question once completed)
        total_questions: Number of questions in the quiz
        last_record: Graded record shown during FEEDBACK
    """

    phase: QuizPhase
    question_index: int
    total_questions: int
    last_record: Optional[AnswerRecord] = None

    @property
    def accepts_answer(self) -> bool:
        return self.phase is QuizPhase.PRESENTING

    @property
    def show_feedback(self) -> bool:
        return self.phase is QuizPhase.FEEDBACK

    @property
    def is_completed(self) -> bool:
        return self.phase is QuizPhase.COMPLETED

    @property
    def is_last_question(self) -> bool:
        return self.question_index == self.total_questions - 1

    @property
    def progress(self) -> float:
        """Fraction of questions answered, for progress bars."""
        if self.phase is QuizPhase.COMPLETED:
            return 1.0
        done = self.question_index + (0 if self.phase is QuizPhase.PRESENTING else 1)
        return done / self.total_questions
