"""Data model shared by the tokenizer, timing model, and playback controller.

WHY: Every layer of the reader passes the same few shapes around: a word
with its display metadata, the speed settings, a snapshot of where
playback currently is. Keeping them in one module gives the renderers and
the controller a single stable contract.

HOW: Four dataclasses and one exception:
  Token         one word plus focus index, delay multiplier, structure flags
  FocusSplit    a word cut into (before, focus, after) for rendering
  SpeedConfig   start/target WPM and ramp length, validated on assignment
  PlaybackState immutable snapshot published after every transition
  ConfigError   raised when a speed value violates the caller contract

RULES:
- Token and PlaybackState are frozen; they are replaced, never mutated.
- SpeedConfig stays mutable because the caller owns it and the controller
  reads it fresh at every scheduling decision.
- Speed values must be positive ints (bools rejected). Invalid values are
  rejected at the point of assignment, never clamped.
- Lengths and indices count Unicode codepoints (plain str indexing).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

_SPEED_FIELDS = ("start_wpm", "target_wpm", "ramp_up_words")


class ConfigError(ValueError):
    """A speed configuration value violates the caller contract."""


def _check_speed_value(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            "{} must be a positive integer, got {!r}".format(name, value)
        )
    if value <= 0:
        raise ConfigError(
            "{} must be a positive integer, got {}".format(name, value)
        )


@dataclass(frozen=True)
class Token:
    """A single display unit produced by the tokenizer.

    Attributes:
        word: The word exactly as it appears in the text (punctuation kept).
        focus_index: Codepoint index of the fixation character.
        delay_multiplier: Scale applied to the base per-word delay.
        is_end_of_sentence: True if the word ends with ".", "!" or "?".
        is_end_of_paragraph: True for the last word of every paragraph
            except the final one.
    """

    word: str
    focus_index: int
    delay_multiplier: float = 1.0
    is_end_of_sentence: bool = False
    is_end_of_paragraph: bool = False


@dataclass(frozen=True)
class FocusSplit:
    """A word cut around its focus character."""

    before: str
    focus: str
    after: str


@dataclass
class SpeedConfig:
    """Pacing settings: ramp linearly from start_wpm to target_wpm.

    WHY: Readers settle in faster when the first words arrive slowly. The
    ramp lasts ``ramp_up_words`` words, after which ``target_wpm`` holds.

    HOW: ``__setattr__`` validates the three speed fields on every
    assignment, including the ones made by the generated ``__init__``.
    ``replace()`` validates a whole partial update before applying any of it.

    RULES:
    - All three fields are positive ints
    - A rejected update leaves the config unchanged
    - ``ramp_up_words`` can never be zero, so the ramp never divides by zero
    """

    start_wpm: int = 200
    target_wpm: int = 350
    ramp_up_words: int = 30

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _SPEED_FIELDS:
            _check_speed_value(name, value)
        super().__setattr__(name, value)

    def replace(self, **changes: Any) -> None:
        """Merge ``changes`` into this config in place, all-or-nothing.

        Raises:
            ConfigError: If a key is unknown or a value is invalid. No field
                is modified in that case.
        """
        unknown = sorted(set(changes) - set(_SPEED_FIELDS))
        if unknown:
            raise ConfigError(
                "Unknown speed setting(s): {}. Available: {}".format(
                    ", ".join(unknown), ", ".join(_SPEED_FIELDS)
                )
            )
        for name, value in changes.items():
            _check_speed_value(name, value)
        for name, value in changes.items():
            super().__setattr__(name, value)

    def copy(self) -> "SpeedConfig":
        return SpeedConfig(
            start_wpm=self.start_wpm,
            target_wpm=self.target_wpm,
            ramp_up_words=self.ramp_up_words,
        )

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PlaybackState:
    """What the rendering surface needs after each playback transition.

    Attributes:
        current_token: Token on screen, or None when there is no text.
        current_index: Index of ``current_token`` in the token sequence.
        is_playing: True while an advance is scheduled.
        current_wpm: Effective WPM used for the current word.
        progress: current_index / total, or 0.0 for an empty sequence.
    """

    current_token: Optional[Token]
    current_index: int
    is_playing: bool
    current_wpm: int
    progress: float
