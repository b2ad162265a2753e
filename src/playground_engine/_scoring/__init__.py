# Area: Scoring
"""
Scoring model: grading, quiz summaries, hint and attempt penalties.
"""

from .scoring import (
    Grade,
    normalize_answer,
    grade_answer,
    summarize_quiz,
    apply_hint_penalty,
    apply_attempt_penalty,
    challenge_score,
    score_percent,
    passed,
)

__all__ = [
    "Grade",
    "normalize_answer",
    "grade_answer",
    "summarize_quiz",
    "apply_hint_penalty",
    "apply_attempt_penalty",
    "challenge_score",
    "score_percent",
    "passed",
]
