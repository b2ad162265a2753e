# Area: Shared Tests
"""Tests for EngineSettings and load_settings()."""

import json
import logging

import pytest
from pydantic import ValidationError

from playground_engine._shared.config import ENV_MAPPINGS, EngineSettings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PLAYGROUND_* variables from the host out of these tests."""
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("playground_engine._shared.config.load_dotenv", lambda: False)


class TestEngineSettings:
    """Tests for defaults and validation."""

    def test_defaults(self):
        """Test EngineSettings defaults."""
        settings = EngineSettings()
        assert settings.penalty_per_hint == 10
        assert settings.attempt_penalty == 0
        assert settings.default_challenge_points == 100
        assert settings.max_attempts is None
        assert settings.grid_random_move_probability == 0.7
        assert settings.choice_window == 3
        assert settings.choice_counter_probability == 0.6
        assert settings.leaderboard_page_size == 50

    def test_probability_bounds(self):
        """Test probability bounds."""
        with pytest.raises(ValidationError):
            EngineSettings(choice_counter_probability=1.5)
        with pytest.raises(ValidationError):
            EngineSettings(grid_random_move_probability=-0.1)

    def test_negative_penalty_rejected(self):
        """Test negative penalty rejected."""
        with pytest.raises(ValidationError):
            EngineSettings(penalty_per_hint=-1)

    def test_log_level_normalized(self):
        """Test log level normalized."""
        settings = EngineSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.log_level_value == logging.DEBUG

    def test_unknown_log_level_rejected(self):
        """Test unknown log level rejected."""
        with pytest.raises(ValidationError):
            EngineSettings(log_level="CHATTY")


class TestLoadSettings:
    """Tests for file and environment layering."""

    def test_no_sources_gives_defaults(self):
        """Test no sources gives defaults."""
        assert load_settings() == EngineSettings()

    def test_json_file(self, tmp_path):
        """Test values are read from a JSON config file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"penalty_per_hint": 15, "max_attempts": 3}))
        settings = load_settings(str(path))
        assert settings.penalty_per_hint == 15
        assert settings.max_attempts == 3

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test missing file uses defaults."""
        settings = load_settings(str(tmp_path / "nope.json"))
        assert settings == EngineSettings()

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test environment overrides file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"penalty_per_hint": 15}))
        monkeypatch.setenv("PLAYGROUND_PENALTY_PER_HINT", "20")
        monkeypatch.setenv("PLAYGROUND_CHOICE_COUNTER_PROBABILITY", "1.0")
        settings = load_settings(str(path))
        assert settings.penalty_per_hint == 20
        assert settings.choice_counter_probability == 1.0

    def test_invalid_environment_value(self, monkeypatch):
        """Test an out-of-range environment value is rejected."""
        monkeypatch.setenv("PLAYGROUND_CHOICE_WINDOW", "0")
        with pytest.raises(ValidationError):
            load_settings()

    def test_every_mapping_targets_a_field(self):
        """Test every mapping targets a field."""
        assert set(ENV_MAPPINGS.values()) <= set(EngineSettings.model_fields)
