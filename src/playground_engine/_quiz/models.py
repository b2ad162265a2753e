# Area: Quiz
"""
playground_engine._quiz.models — Quiz content and result records
================================================================

Immutable value types for quiz content (Question, Quiz) and for what a
quiz run produces (AnswerRecord, QuizResult).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class QuestionKind(Enum):
    """How a question is answered."""
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"
    CODE = "code"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Question:
    """
    One quiz question.

    Attributes:
        question_id: Unique identifier within the quiz
        prompt: Question text shown to the user
        kind: Answer format
        correct_answer: Canonical answer string
        options: Ordered choices (multiple choice only)
        explanation: Optional text shown with feedback
        difficulty: easy / medium / hard
        points: Points awarded for a correct answer
        time_limit: Optional per-question budget in seconds
    """

    question_id: str
    prompt: str
    kind: QuestionKind
    correct_answer: str
    options: Tuple[str, ...] = ()
    explanation: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    points: int = 10
    time_limit: Optional[float] = None

    def __post_init__(self):
        if self.points < 0:
            raise ValueError(f"Question {self.question_id}: points must be >= 0")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"Question {self.question_id}: time_limit must be > 0")
        if self.kind is QuestionKind.MULTIPLE_CHOICE and not self.options:
            raise ValueError(f"Question {self.question_id}: multiple choice needs options")
        if self.kind is not QuestionKind.MULTIPLE_CHOICE and self.options:
            raise ValueError(
                f"Question {self.question_id}: options are only allowed for multiple choice"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            question_id=str(data["id"]),
            prompt=data["question"],
            kind=QuestionKind(data.get("type", "short_answer")),
            correct_answer=str(data["correct_answer"]),
            options=tuple(data.get("options") or ()),
            explanation=data.get("explanation"),
            difficulty=Difficulty(data.get("difficulty", "medium")),
            points=int(data.get("points", 10)),
            time_limit=data.get("time_limit"),
        )


@dataclass(frozen=True)
class Quiz:
    """
    A fixed, ordered set of questions.

    ``time_limit`` is the whole-quiz budget in seconds; ``passing_score``
    is a percentage of total points.
    """

    quiz_id: str
    title: str
    questions: Tuple[Question, ...]
    time_limit: Optional[float] = None
    passing_score: float = 70.0

    @property
    def total_points(self) -> int:
        return sum(q.points for q in self.questions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quiz":
        return cls(
            quiz_id=str(data["id"]),
            title=data.get("title", ""),
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
            time_limit=data.get("time_limit"),
            passing_score=float(data.get("passing_score", 70.0)),
        )


@dataclass(frozen=True)
class AnswerRecord:
    """
    One graded answer.

    An empty ``answer`` means the question went unanswered.
    """

    question_index: int
    answer: str
    elapsed_ms: int
    is_correct: bool
    points_awarded: int

    @property
    def unanswered(self) -> bool:
        return self.answer == ""


@dataclass(frozen=True)
class QuizResult:
    """Aggregate of all answer records, created once at quiz termination."""

    score: int
    total_points: int
    correct_answers: int
    total_questions: int
    time_spent: int
    accuracy: float
    answers: Tuple[AnswerRecord, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "totalPoints": self.total_points,
            "correctAnswers": self.correct_answers,
            "totalQuestions": self.total_questions,
            "timeSpent": self.time_spent,
            "accuracy": self.accuracy,
            "answers": [
                {
                    "questionIndex": r.question_index,
                    "answer": r.answer,
                    "isCorrect": r.is_correct,
                    "timeSpent": r.elapsed_ms,
                }
                for r in self.answers
            ],
        }
