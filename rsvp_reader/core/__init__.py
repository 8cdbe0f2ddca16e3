"""Pure RSVP core: data model, focus point, tokenizer, timing, normalization.

WHY: Everything in this package is deterministic and clock-free, so it can
be tested exhaustively and reused by any surface (terminal, desktop, tests).

HOW: models.py defines the shared dataclasses, focus.py the fixation point,
tokenizer.py turns text into tokens, timing.py turns tokens into delays,
normalize.py cleans extracted text.

RULES:
- No I/O, no scheduling, no logging configuration in this package
- The Token dataclass is the contract with the playback layer
"""

from rsvp_reader.core.focus import focus_index, split_at_focus
from rsvp_reader.core.models import (
    ConfigError,
    FocusSplit,
    PlaybackState,
    SpeedConfig,
    Token,
)
from rsvp_reader.core.timing import (
    DEFAULT_PRESET,
    SPEED_PRESETS,
    effective_wpm,
    get_preset,
    token_delay_ms,
    total_duration_ms,
)
from rsvp_reader.core.tokenizer import (
    delay_multiplier,
    estimate_reading_time,
    tokenize,
    word_count,
)

__all__ = [
    "ConfigError",
    "DEFAULT_PRESET",
    "FocusSplit",
    "PlaybackState",
    "SPEED_PRESETS",
    "SpeedConfig",
    "Token",
    "delay_multiplier",
    "effective_wpm",
    "estimate_reading_time",
    "focus_index",
    "get_preset",
    "split_at_focus",
    "token_delay_ms",
    "tokenize",
    "total_duration_ms",
    "word_count",
]
