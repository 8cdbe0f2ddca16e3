"""Tests for the startup speed configuration.

WHY: A typo in .env should fail loudly at startup rather than start the
reader at a surprising pace.

HOW: monkeypatch sets RSVP_* variables (conftest clears them first) and
load_speed_config() is called directly.
"""

import pytest

from rsvp_reader.config import load_speed_config
from rsvp_reader.core.models import ConfigError


class TestLoadSpeedConfig:
    def test_default_is_normal(self):
        assert load_speed_config().as_dict() == {
            "start_wpm": 200,
            "target_wpm": 350,
            "ramp_up_words": 30,
        }

    def test_explicit_preset(self):
        assert load_speed_config("slow").target_wpm == 250

    def test_preset_from_env(self, monkeypatch):
        monkeypatch.setenv("RSVP_PRESET", "fast")
        assert load_speed_config().start_wpm == 300

    def test_argument_beats_env(self, monkeypatch):
        monkeypatch.setenv("RSVP_PRESET", "fast")
        assert load_speed_config("speed").start_wpm == 400

    def test_field_overrides(self, monkeypatch):
        monkeypatch.setenv("RSVP_TARGET_WPM", "420")
        monkeypatch.setenv("RSVP_RAMP_UP_WORDS", " 10 ")
        config = load_speed_config()
        assert config.start_wpm == 200
        assert config.target_wpm == 420
        assert config.ramp_up_words == 10

    def test_blank_override_ignored(self, monkeypatch):
        monkeypatch.setenv("RSVP_START_WPM", "")
        assert load_speed_config().start_wpm == 200

    def test_non_integer_override(self, monkeypatch):
        monkeypatch.setenv("RSVP_START_WPM", "fast")
        with pytest.raises(ConfigError, match="RSVP_START_WPM"):
            load_speed_config()

    def test_non_positive_override(self, monkeypatch):
        monkeypatch.setenv("RSVP_RAMP_UP_WORDS", "0")
        with pytest.raises(ConfigError):
            load_speed_config()

    def test_unknown_preset(self, monkeypatch):
        monkeypatch.setenv("RSVP_PRESET", "turbo")
        with pytest.raises(ValueError, match="Unknown preset"):
            load_speed_config()
