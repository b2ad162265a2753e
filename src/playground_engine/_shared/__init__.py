# Area: Shared
"""
Shared utilities used by the quiz, session and mini-game engines.

This package contains:
- Logging configuration
- Engine settings (pydantic + .env)
- Cancellable countdown scheduling
"""

from .logging_config import setup_logging, log_engine_error
from .config import EngineSettings, load_settings
from .timers import TimerScheduler, TimerToken

__all__ = [
    "setup_logging",
    "log_engine_error",
    "EngineSettings",
    "load_settings",
    "TimerScheduler",
    "TimerToken",
]
