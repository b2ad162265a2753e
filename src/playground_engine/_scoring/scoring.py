# Area: Scoring
"""
playground_engine._scoring.scoring — Point math
===============================================

Pure, side-effect-free scoring functions shared by the quiz flow and
the challenge session manager.

Answer matching is exact after normalization (trim + casefold): no
partial credit and no numeric tolerance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .._quiz.models import AnswerRecord, Question, QuizResult
from ..errors import EmptyQuizError


@dataclass(frozen=True)
class Grade:
    correct: bool
    points: int


def normalize_answer(text: str) -> str:
    return text.strip().lower()


def grade_answer(question: Question, submitted: str) -> Grade:
    """Grade one answer: full points if it matches the canonical answer, else 0."""
    correct = normalize_answer(submitted) == normalize_answer(question.correct_answer)
    return Grade(correct=correct, points=question.points if correct else 0)


def summarize_quiz(
    records: Sequence[AnswerRecord],
    questions: Sequence[Question],
    quiz_id: Optional[str] = None,
) -> QuizResult:
    """
    Fold answer records into a QuizResult.

    Raises:
        EmptyQuizError: If ``questions`` is empty
    """
    if not questions:
        raise EmptyQuizError(quiz_id)

    correct = sum(1 for r in records if r.is_correct)
    return QuizResult(
        score=sum(r.points_awarded for r in records),
        total_points=sum(q.points for q in questions),
        correct_answers=correct,
        total_questions=len(questions),
        time_spent=sum(r.elapsed_ms for r in records),
        accuracy=correct / len(questions) * 100,
        answers=tuple(records),
    )


def apply_hint_penalty(base_score: int, hints_used: int, penalty_per_hint: int) -> int:
    """Deduct ``penalty_per_hint`` per hint; never below zero."""
    return max(0, base_score - max(0, hints_used) * penalty_per_hint)


def apply_attempt_penalty(score: int, attempts: int, penalty_per_attempt: int) -> int:
    """Deduct ``penalty_per_attempt`` for every attempt after the first; never below zero."""
    extra_attempts = max(0, attempts - 1)
    return max(0, score - extra_attempts * penalty_per_attempt)


def challenge_score(
    base_points: int,
    hints_used: int,
    attempts: int,
    penalty_per_hint: int,
    penalty_per_attempt: int = 0,
) -> int:
    """Final score for a completed challenge session."""
    score = apply_hint_penalty(base_points, hints_used, penalty_per_hint)
    return apply_attempt_penalty(score, attempts, penalty_per_attempt)


def score_percent(result: QuizResult) -> Optional[float]:
    """Score as a percentage of total points, or None when there are no points."""
    if result.total_points <= 0:
        return None
    return result.score / result.total_points * 100


def passed(result: QuizResult, passing_score_percent: float) -> bool:
    percent = score_percent(result)
    if percent is None:
        return False
    return percent >= passing_score_percent
