"""
playground_engine — Quiz, Challenge and Mini-Game Session Engine
================================================================

Quick Start (demo collaborators, no setup needed):
    from playground_engine import QuizFlow, demo_quiz
    flow = QuizFlow(demo_quiz())
    flow.submit_answer("def")
    flow.advance()

Coding challenges:
    from playground_engine import GameSessionManager, InMemoryPersistence, demo_challenges
    manager = GameSessionManager("u1", demo_challenges(), persistence=InMemoryPersistence())
    manager.start("reverse-string")
    manager.use_hint(0)
    manager.submit(code, verdicts)

Mini-games:
    from playground_engine import ChoiceMatch, ChoiceOpponent, Choice
    match = ChoiceMatch(ChoiceOpponent())
    match.play(Choice.ROCK)

Standings:
    from playground_engine import build_leaderboard, paginate, Period
    page = paginate(build_leaderboard(sessions, Period.WEEKLY), page=1)

Type Definitions
----------------
Collaborator payload shapes are available for import:

    from playground_engine import SessionEventPayload, LeaderboardPagePayload
"""

# _quiz must load before _scoring and _session, which import its models
from ._quiz import (
    QuestionKind,
    Difficulty,
    Question,
    Quiz,
    AnswerRecord,
    QuizResult,
    QuizPhase,
    QuizEvent,
    QuizState,
    QuizFlow,
)
from ._scoring import (
    Grade,
    grade_answer,
    summarize_quiz,
    apply_hint_penalty,
    apply_attempt_penalty,
    challenge_score,
    score_percent,
    passed,
)
from ._session import (
    SessionStatus,
    Challenge,
    TestCase,
    TestVerdict,
    GameSession,
    GameSessionManager,
    build_session_snapshot,
    load_session_snapshot,
)
from ._opponents import (
    Opponent,
    GridOpponent,
    Choice,
    Outcome,
    ChoiceOpponent,
    counter_to,
    resolve,
)
from ._rounds import RoundOutcome, RoundHistory, GameStats, compute_stats, ChoiceMatch, GridMatch
from ._leaderboard import (
    Period,
    period_contains,
    LeaderboardEntry,
    LeaderboardPage,
    build_leaderboard,
    paginate,
    PlayerProgress,
    build_progress,
)
from ._shared import (
    EngineSettings,
    load_settings,
    setup_logging,
    TimerScheduler,
    TimerToken,
)
from .callbacks import ExecutionService, PersistenceService
from .demo_services import InMemoryPersistence, ExpectedOutputExecutor, demo_quiz, demo_challenges
from .errors import (
    EngineError,
    InvariantViolation,
    DuplicateActiveSessionError,
    HintAlreadyUsedError,
    InvalidHintIndexError,
    EmptyQuizError,
    UnknownChallengeError,
    ExecutionServiceError,
    SubmissionFailedError,
)
from .types import (
    TestResultPayload,
    SessionEventPayload,
    LeaderboardEntryPayload,
    LeaderboardPagePayload,
)

__all__ = [
    # Quiz
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
    # Scoring
    "Grade",
    "grade_answer",
    "summarize_quiz",
    "apply_hint_penalty",
    "apply_attempt_penalty",
    "challenge_score",
    "score_percent",
    "passed",
    # Sessions
    "SessionStatus",
    "Challenge",
    "TestCase",
    "TestVerdict",
    "GameSession",
    "GameSessionManager",
    "build_session_snapshot",
    "load_session_snapshot",
    # Opponents and rounds
    "Opponent",
    "GridOpponent",
    "Choice",
    "Outcome",
    "ChoiceOpponent",
    "counter_to",
    "resolve",
    "RoundOutcome",
    "RoundHistory",
    "GameStats",
    "compute_stats",
    "ChoiceMatch",
    "GridMatch",
    # Leaderboard
    "Period",
    "period_contains",
    "LeaderboardEntry",
    "LeaderboardPage",
    "build_leaderboard",
    "paginate",
    "PlayerProgress",
    "build_progress",
    # Shared
    "EngineSettings",
    "load_settings",
    "setup_logging",
    "TimerScheduler",
    "TimerToken",
    # Collaborators
    "ExecutionService",
    "PersistenceService",
    "InMemoryPersistence",
    "ExpectedOutputExecutor",
    "demo_quiz",
    "demo_challenges",
    # Errors
    "EngineError",
    "InvariantViolation",
    "DuplicateActiveSessionError",
    "HintAlreadyUsedError",
    "InvalidHintIndexError",
    "EmptyQuizError",
    "UnknownChallengeError",
    "ExecutionServiceError",
    "SubmissionFailedError",
    # Payload types
    "TestResultPayload",
    "SessionEventPayload",
    "LeaderboardEntryPayload",
    "LeaderboardPagePayload",
]

__version__ = "1.0.0"
