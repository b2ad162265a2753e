# Area: Shared
"""
playground_engine._shared.config — Engine settings
==================================================

Validated settings for scoring penalties, opponent tuning and the
leaderboard. Values come from (lowest to highest precedence):

1. Field defaults below
2. A JSON config file
3. Environment variables (a ``.env`` file is loaded first)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("playground_engine.config")

# Environment variable -> settings field
ENV_MAPPINGS = {
    "PLAYGROUND_PENALTY_PER_HINT": "penalty_per_hint",
    "PLAYGROUND_ATTEMPT_PENALTY": "attempt_penalty",
    "PLAYGROUND_DEFAULT_CHALLENGE_POINTS": "default_challenge_points",
    "PLAYGROUND_MAX_ATTEMPTS": "max_attempts",
    "PLAYGROUND_PASSING_SCORE_PERCENT": "passing_score_percent",
    "PLAYGROUND_GRID_RANDOM_MOVE_PROBABILITY": "grid_random_move_probability",
    "PLAYGROUND_CHOICE_WINDOW": "choice_window",
    "PLAYGROUND_CHOICE_COUNTER_PROBABILITY": "choice_counter_probability",
    "PLAYGROUND_LEADERBOARD_PAGE_SIZE": "leaderboard_page_size",
    "PLAYGROUND_LOG_LEVEL": "log_level",
    "PLAYGROUND_LOG_FILE": "log_file",
}


class EngineSettings(BaseModel):
    """Tunable engine parameters."""

    # Session scoring
    penalty_per_hint: int = Field(default=10, ge=0)
    attempt_penalty: int = Field(default=0, ge=0)
    default_challenge_points: int = Field(default=100, ge=0)
    max_attempts: Optional[int] = Field(default=None, ge=1)

    # Quiz
    passing_score_percent: float = Field(default=70.0, ge=0, le=100)

    # Opponents
    grid_random_move_probability: float = Field(default=0.7, ge=0, le=1)
    choice_window: int = Field(default=3, ge=1)
    choice_counter_probability: float = Field(default=0.6, ge=0, le=1)

    # Leaderboard
    leaderboard_page_size: int = Field(default=50, ge=1)

    # Logging
    log_level: str = "INFO"
    log_file: str = "playground_engine.log"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(config_path: Optional[str] = None) -> EngineSettings:
    """
    Load settings from an optional JSON file plus environment overrides.

    Args:
        config_path: Path to a JSON config file. Missing files are ignored.

    Returns:
        Validated EngineSettings

    Raises:
        pydantic.ValidationError: If any value is out of range
    """
    load_dotenv()
    raw: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, field_name in ENV_MAPPINGS.items():
        if env_key in os.environ:
            raw[field_name] = os.environ[env_key]

    return EngineSettings.model_validate(raw)
