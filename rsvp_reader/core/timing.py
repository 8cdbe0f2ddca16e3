"""Timing model: effective pace along the ramp, per-token delays, presets.

WHY: The controller needs two numbers at every step: how fast to go at
this point in the text, and how long the current word stays up. Both are
pure arithmetic over the speed settings, so they live here where they can
be tested without a clock.

HOW: effective_wpm() interpolates linearly from start_wpm to target_wpm
over the first ramp_up_words words. token_delay_ms() converts a pace to
milliseconds per word and scales it by the token's delay multiplier.
SPEED_PRESETS bundles named (start, target, ramp) triples the same way
the caption presets bundle their limits.

RULES:
- Rounding is half-up (2.5 -> 3), not Python's round-half-to-even.
- A non-positive wpm is a configuration error, never clamped.
- Presets are frozen constants; get_preset() always returns a fresh
  SpeedConfig so callers can mutate it freely.
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple

from rsvp_reader.core.models import ConfigError, SpeedConfig, Token

_MS_PER_MINUTE = 60000

# Named presets: (start_wpm, target_wpm, ramp_up_words)
SPEED_PRESETS: Dict[str, Tuple[int, int, int]] = {
    "slow": (150, 250, 40),
    "normal": (200, 350, 30),
    "fast": (300, 500, 25),
    "speed": (400, 700, 20),
}

DEFAULT_PRESET = "normal"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_preset(name: str) -> SpeedConfig:
    """Build a fresh SpeedConfig from a named preset.

    Raises:
        ValueError: If ``name`` is not a known preset.
    """
    key = name.lower()
    if key not in SPEED_PRESETS:
        raise ValueError(
            "Unknown preset '{}'. Available: {}".format(
                name, ", ".join(SPEED_PRESETS.keys())
            )
        )
    start, target, ramp = SPEED_PRESETS[key]
    return SpeedConfig(start_wpm=start, target_wpm=target, ramp_up_words=ramp)


def effective_wpm(index: int, config: SpeedConfig) -> int:
    """Return the pace for the word at ``index``, accounting for ramp-up.

    Speed rises linearly from ``start_wpm`` at index 0 to ``target_wpm`` at
    index ``ramp_up_words`` and stays there. A start above the target ramps
    down instead.
    """
    if index >= config.ramp_up_words:
        return config.target_wpm

    fraction = index / config.ramp_up_words
    return _round_half_up(
        config.start_wpm + (config.target_wpm - config.start_wpm) * fraction
    )


def token_delay_ms(token: Token, wpm: int) -> int:
    """How long ``token`` stays on screen at ``wpm``, in milliseconds.

    Raises:
        ConfigError: If ``wpm`` is not positive.
    """
    if wpm <= 0:
        raise ConfigError("wpm must be positive, got {}".format(wpm))
    return _round_half_up((_MS_PER_MINUTE / wpm) * token.delay_multiplier)


def total_duration_ms(tokens: List[Token], config: SpeedConfig) -> int:
    """Exact playback time of ``tokens`` from the first word, ramp included."""
    return sum(
        token_delay_ms(token, effective_wpm(index, config))
        for index, token in enumerate(tokens)
    )
