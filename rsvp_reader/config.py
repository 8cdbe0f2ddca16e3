"""Configuration constants, speed defaults, and .env loading.

WHY: Centralizes every tunable value so it is easy to find, update, and
override. Keyboard step sizes, WPM bounds and the startup speed are plain
data, not buried in logic, so both humans and coding agents can modify
them confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. load_speed_config() builds the startup
SpeedConfig from a named preset plus optional environment overrides.

RULES:
- RSVP_PRESET picks the starting preset (default "normal")
- RSVP_START_WPM / RSVP_TARGET_WPM / RSVP_RAMP_UP_WORDS override single
  fields of that preset
- Invalid overrides raise ConfigError; they are never silently clamped
- Keyboard adjustments keep target_wpm within [MIN_TARGET_WPM, MAX_TARGET_WPM]
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

from rsvp_reader.core.models import ConfigError, SpeedConfig
from rsvp_reader.core.timing import DEFAULT_PRESET, get_preset

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Keyboard control steps
# ---------------------------------------------------------------------------

WPM_STEP = 25
MIN_TARGET_WPM = 100
MAX_TARGET_WPM = 800
SEEK_STEP = 10
SEEK_STEP_LARGE = 50

# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------

SUPPORTED_TEXT_FORMATS: set[str] = {".txt", ".md"}
"""Extensions the built-in plain text extractor reads (lowercase, with dot)."""

ANALYSIS_MAX_CHARS = 15000
"""Texts longer than this are truncated before going to the analysis service."""

DEFAULT_RECOMMENDED_WPM = 300
"""Used when the analysis service returns no recommendation."""

# ---------------------------------------------------------------------------
# Startup speed
# ---------------------------------------------------------------------------

_ENV_OVERRIDES = {
    "start_wpm": "RSVP_START_WPM",
    "target_wpm": "RSVP_TARGET_WPM",
    "ramp_up_words": "RSVP_RAMP_UP_WORDS",
}


def _env_int(var: str) -> Optional[int]:
    raw = os.getenv(var, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError("{} must be an integer, got {!r}".format(var, raw)) from None


def load_speed_config(preset: Optional[str] = None) -> SpeedConfig:
    """Build the startup SpeedConfig from a preset and environment overrides.

    WHY: Users want their preferred pace every session without passing
    flags each time. A .env file (or real environment) holds it.

    HOW: Start from ``preset`` (or RSVP_PRESET, or "normal"), then apply
    any RSVP_*_WPM / RSVP_RAMP_UP_WORDS values through SpeedConfig.replace()
    so they are validated together.

    RULES:
    - Unknown preset names raise ValueError
    - Non-integer or non-positive overrides raise ConfigError
    """
    name = preset or os.getenv("RSVP_PRESET", DEFAULT_PRESET).strip() or DEFAULT_PRESET
    config = get_preset(name)

    overrides = {}
    for field_name, var in _ENV_OVERRIDES.items():
        value = _env_int(var)
        if value is not None:
            overrides[field_name] = value
    if overrides:
        config.replace(**overrides)
    return config
