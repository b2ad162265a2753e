# Area: Session
"""
Session engine - graded coding-challenge attempts.

This package handles:
- Challenge content and execution verdicts
- The session status machine
- Session event snapshots for persistence
- The GameSessionManager service
"""

from .enums import SessionStatus, SessionEvent
from .models import Challenge, TestCase, TestVerdict, GameSession
from .snapshot import build_session_snapshot, load_session_snapshot
from .manager import GameSessionManager

__all__ = [
    "SessionStatus",
    "SessionEvent",
    "Challenge",
    "TestCase",
    "TestVerdict",
    "GameSession",
    "build_session_snapshot",
    "load_session_snapshot",
    "GameSessionManager",
]
