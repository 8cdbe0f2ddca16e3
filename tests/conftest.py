"""Shared test fixtures for the rsvp_reader test suite.

WHY: The playback controller is a timed state machine. Testing it against
a real clock would be slow and flaky, so every controller test drives it
through ManualScheduler, a fake that records scheduled callbacks and
fires them on demand.

HOW: ManualScheduler implements BaseScheduler by appending each
call_later() to a pending list. Tests inspect the pending delays and call
fire_next() to run the earliest callback as if its timer had expired.

RULES:
- ManualScheduler never runs a callback on its own
- Cancelling an unknown or already-fired handle is a test failure
- SAMPLE_TEXT is the two-paragraph example used across modules
- RSVP_* environment variables are cleared for every test
"""

import itertools
from typing import Callable, Dict, List, Tuple

import pytest

from rsvp_reader.core.models import SpeedConfig
from rsvp_reader.playback.controller import PlaybackController
from rsvp_reader.playback.scheduler import BaseScheduler

SAMPLE_TEXT = "Hello, world. New paragraph.\n\nSecond para."


class ManualScheduler(BaseScheduler):
    """Scheduler that only fires when the test says so."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: Dict[int, Tuple[int, Callable[[], None]]] = {}
        self.scheduled: List[int] = []
        self.cancelled: List[int] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = (delay_ms, callback)
        self.scheduled.append(delay_ms)
        return handle

    def cancel(self, handle: int) -> None:
        assert handle in self._pending, "cancelled a handle that is not pending"
        del self._pending[handle]
        self.cancelled.append(handle)

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def pending_delays(self) -> List[int]:
        return [delay for delay, _ in self._pending.values()]

    def fire_next(self) -> None:
        """Run the oldest pending callback."""
        assert self._pending, "nothing scheduled"
        handle = min(self._pending)
        _, callback = self._pending.pop(handle)
        callback()

    def run_all(self, limit: int = 10000) -> int:
        """Fire callbacks until nothing is pending; return how many fired."""
        fired = 0
        while self._pending:
            assert fired < limit, "scheduler did not drain"
            self.fire_next()
            fired += 1
        return fired


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def speed_config():
    """The default 200 -> 350 wpm ramp over 30 words."""
    return SpeedConfig(start_wpm=200, target_wpm=350, ramp_up_words=30)


@pytest.fixture
def make_controller(scheduler, speed_config):
    """Factory: make_controller(text) -> PlaybackController on the fake clock."""

    def _make(text=SAMPLE_TEXT, config=None, on_complete=None):
        return PlaybackController(
            text,
            config=config if config is not None else speed_config,
            scheduler=scheduler,
            on_complete=on_complete,
        )

    return _make


@pytest.fixture
def words_text():
    """Forty plain five-letter words in one paragraph (multiplier 1.0 each)."""
    return " ".join("word{}".format(chr(ord("a") + i % 26)) for i in range(40))


@pytest.fixture(autouse=True)
def clean_speed_env(monkeypatch):
    """Keep a developer's RSVP_* settings out of the tests."""
    for var in ("RSVP_PRESET", "RSVP_START_WPM", "RSVP_TARGET_WPM", "RSVP_RAMP_UP_WORDS"):
        monkeypatch.delenv(var, raising=False)
