"""Timed playback: scheduler abstraction, controller, keyboard shortcuts.

WHY: This package holds the only stateful, time-dependent code in the
reader. Keeping it apart from the pure core means the core stays
clock-free and the controller can be driven by any event loop.

HOW: scheduler.py wraps event-loop timers, controller.py is the state
machine, keyboard.py maps keys to controller commands.

RULES:
- The controller never creates threads; the scheduler's loop is the only
  source of time
"""

from rsvp_reader.playback.controller import PlaybackController, PlaybackStatus
from rsvp_reader.playback.keyboard import KeyboardBindings
from rsvp_reader.playback.scheduler import BaseScheduler, BlockingScheduler, TkScheduler

__all__ = [
    "BaseScheduler",
    "BlockingScheduler",
    "KeyboardBindings",
    "PlaybackController",
    "PlaybackStatus",
    "TkScheduler",
]
