# Area: Quiz
"""
Quiz engine - timed question-by-question flow.

This package handles:
- Quiz content types (Question, Quiz)
- Answer records and the final QuizResult
- The QuizFlow state machine
"""

from .models import (
    QuestionKind,
    Difficulty,
    Question,
    Quiz,
    AnswerRecord,
    QuizResult,
)
from .state import QuizPhase, QuizEvent, QuizState
from .flow import QuizFlow

__all__ = [
    "QuestionKind",
    "Difficulty",
    "Question",
    "Quiz",
    "AnswerRecord",
    "QuizResult",
    "QuizPhase",
    "QuizEvent",
    "QuizState",
    "QuizFlow",
]
