"""Keyboard shortcuts mapped onto playback controller commands.

WHY: Readers keep their eyes on the focus point, so every control they use
mid-session must be a single key. The mapping is product behaviour, not a
widget detail, so it lives beside the controller where it can be tested
without a GUI.

HOW: KeyboardBindings.handle() normalises a key name (tkinter keysyms such
as "Left" or "space" and plain names such as "left" are both accepted)
and dispatches to the controller.

RULES:
- space         toggle play/pause
- left / right  seek -10 / +10 words (shift: 50)
- up / down     target_wpm +25 / -25, clamped to [100, 800]
- r             reset
- escape        pause, then call on_close
- handle() returns True only for keys it consumed
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from rsvp_reader.config import (
    MAX_TARGET_WPM,
    MIN_TARGET_WPM,
    SEEK_STEP,
    SEEK_STEP_LARGE,
    WPM_STEP,
)
from rsvp_reader.playback.controller import PlaybackController

logger = logging.getLogger(__name__)

_KEY_ALIASES = {
    " ": "space",
    "esc": "escape",
    "arrowleft": "left",
    "arrowright": "right",
    "arrowup": "up",
    "arrowdown": "down",
}


def _normalise_key(key: str) -> str:
    name = key if key == " " else key.strip().lower()
    return _KEY_ALIASES.get(name, name)


class KeyboardBindings:
    """Translate key presses into controller commands.

    Args:
        controller: The controller to drive.
        on_close: Called after Escape has paused playback.
    """

    def __init__(
        self,
        controller: PlaybackController,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._controller = controller
        self._on_close = on_close

    def handle(self, key: str, shift: bool = False) -> bool:
        """Apply the shortcut bound to ``key``.

        Returns:
            True if the key is bound, False if the caller should handle it.
        """
        name = _normalise_key(key)
        controller = self._controller
        step = SEEK_STEP_LARGE if shift else SEEK_STEP

        if name == "space":
            controller.toggle()
        elif name == "left":
            controller.seek_by(-step)
        elif name == "right":
            controller.seek_by(step)
        elif name == "up":
            self._adjust_target_wpm(WPM_STEP)
        elif name == "down":
            self._adjust_target_wpm(-WPM_STEP)
        elif name == "r":
            controller.reset()
        elif name == "escape":
            controller.pause()
            if self._on_close is not None:
                self._on_close()
        else:
            return False

        logger.debug("Handled key %s (shift=%s)", name, shift)
        return True

    def _adjust_target_wpm(self, delta: int) -> None:
        target = self._controller.config.target_wpm + delta
        target = max(MIN_TARGET_WPM, min(MAX_TARGET_WPM, target))
        self._controller.update_config(target_wpm=target)
