"""Playback controller: the timed state machine that drives presentation.

WHY: Showing one word at a time is trivial; showing it at a pace the reader
can change mid-sentence, with ramp-up, seeking and pause/resume, without
ever double-firing a timer, is not. This module owns that logic so every
surface (terminal, desktop, tests) gets identical behaviour.

HOW: The controller holds the token list, a caller-owned SpeedConfig, the
current index, and a PlaybackStatus (STOPPED, PLAYING, PAUSED). While
PLAYING exactly one "advance" callback is pending on the injected
scheduler. Each advance moves to the next token, reads the speed config
as it is *now*, schedules the following advance, and publishes a
PlaybackState snapshot to listeners.

RULES:
- At most one scheduled advance per controller, ever
- Every mutating call (play, pause, reset, seek_to, set_text, close)
  cancels the pending advance before touching state
- Speed changes apply from the next word; the delay already scheduled for
  the word on screen is never altered
- play() at the last index restarts from 0
- seek_to() clamps, and preserves the playing / not-playing status
- An empty token list makes every operation inert: no token, index 0,
  progress 0.0, never playing
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, List, Optional

from rsvp_reader.core.models import ConfigError, PlaybackState, SpeedConfig, Token
from rsvp_reader.core.timing import effective_wpm, get_preset, token_delay_ms
from rsvp_reader.core.tokenizer import tokenize
from rsvp_reader.playback.scheduler import BaseScheduler, BlockingScheduler

logger = logging.getLogger(__name__)

StateListener = Callable[[PlaybackState], None]


class PlaybackStatus(str, enum.Enum):
    """Controller states.

    RULES:
    - stopped: nothing scheduled; the initial state and the end-of-text state
    - playing: exactly one advance scheduled
    - paused: nothing scheduled; entered only via pause() while playing
    """

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class PlaybackController:
    """Drive RSVP playback of one text through an injected scheduler.

    WHY: Rendering surfaces should only draw; they should never compute
    delays or juggle timers. The controller gives them a small command API
    and pushes a fresh PlaybackState after every transition.

    HOW: Commands mutate index/status and call _publish(). Timing runs
    through self._scheduler: _schedule_advance() stores the only handle,
    _cancel_pending() drops it, and _advance() clears it on entry.

    RULES:
    - The scheduler serializes advances with external commands (one thread)
    - config is read at each scheduling decision, never snapshotted
    - Listeners receive every published state in order
    - The next advance is scheduled before listeners run, so a listener
      that pauses or seeks cancels it like any other caller
    """

    def __init__(
        self,
        text: str = "",
        config: Optional[SpeedConfig] = None,
        scheduler: Optional[BaseScheduler] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self._config = config if config is not None else SpeedConfig()
        self._scheduler = scheduler if scheduler is not None else BlockingScheduler()
        self._on_complete = on_complete
        self._listeners: List[StateListener] = []
        self._handle: Any = None

        self._tokens: List[Token] = tokenize(text)
        self._index = 0
        self._status = PlaybackStatus.STOPPED
        self._current_wpm = self._config.start_wpm
        self._state = self._snapshot()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> List[Token]:
        return list(self._tokens)

    @property
    def total(self) -> int:
        return len(self._tokens)

    @property
    def config(self) -> SpeedConfig:
        """The live speed config; mutating it affects the next advance."""
        return self._config

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    @property
    def has_pending_advance(self) -> bool:
        return self._handle is not None

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener`` with the new PlaybackState after every transition."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start or resume playback from the current word.

        RULES:
        - No-op on an empty text
        - At the last index, restart from 0
        - The current word is published immediately and stays up for its
          full delay at the effective pace for this index
        """
        if not self._tokens:
            return

        self._cancel_pending()
        if self._index >= len(self._tokens) - 1:
            self._index = 0

        self._current_wpm = effective_wpm(self._index, self._config)
        self._status = PlaybackStatus.PLAYING
        logger.debug("Play from index %d at %d wpm", self._index, self._current_wpm)
        self._schedule_advance()
        self._publish()

    def pause(self) -> None:
        """Stop scheduling; keep the current word. Idempotent."""
        self._cancel_pending()
        if self._status is not PlaybackStatus.PLAYING:
            return

        self._status = PlaybackStatus.PAUSED
        logger.debug("Paused at index %d", self._index)
        self._publish()

    def toggle(self) -> None:
        """Pause if playing, otherwise play."""
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        """Return to the first word, stopped, at the starting pace."""
        self._cancel_pending()
        self._index = 0
        self._status = PlaybackStatus.STOPPED
        self._current_wpm = self._config.start_wpm
        logger.debug("Reset")
        self._publish()

    def seek_to(self, target: int) -> None:
        """Jump to ``target`` (clamped), keeping the playing status.

        WHY: Sliders and arrow keys produce out-of-range indices all the
        time; clamping is friendlier than raising.

        RULES:
        - No-op on an empty text
        - While playing: the pending advance is replaced by exactly one
          new advance timed for the word at the new position
        - While stopped or paused: nothing is scheduled, status unchanged
        - NaN lands on 0; infinities clamp to the ends
        """
        if not self._tokens:
            return

        was_playing = self.is_playing
        self._cancel_pending()

        if target != target:  # NaN
            target = 0
        self._index = int(max(0, min(target, len(self._tokens) - 1)))
        self._current_wpm = effective_wpm(self._index, self._config)
        logger.debug("Seek to index %d (playing=%s)", self._index, was_playing)
        if was_playing:
            self._schedule_advance()
        self._publish()

    def seek_by(self, delta: int) -> None:
        """Seek relative to the current word."""
        self.seek_to(self._index + delta)

    def update_config(self, **changes: Any) -> None:
        """Merge speed settings into the live config.

        The change takes effect at the next advance; the word on screen
        keeps the delay it was scheduled with.

        Raises:
            ConfigError: If a value is invalid; the config is unchanged.
        """
        try:
            self._config.replace(**changes)
        except ConfigError:
            logger.warning("Rejected speed settings: %r", changes)
            raise
        logger.debug("Speed settings now %r", self._config.as_dict())

    def apply_preset(self, name: str) -> None:
        """Replace all speed settings with a named preset in one step.

        Raises:
            ValueError: If ``name`` is not a known preset.
        """
        preset = get_preset(name)
        self._config.replace(**preset.as_dict())
        logger.info("Applied speed preset %s", name)

    def set_text(self, text: str) -> None:
        """Replace the text; playback returns to a stopped first word."""
        self._cancel_pending()
        self._tokens = tokenize(text)
        self._index = 0
        self._status = PlaybackStatus.STOPPED
        self._current_wpm = self._config.start_wpm
        logger.info("Loaded text with %d words", len(self._tokens))
        self._publish()

    def close(self) -> None:
        """Cancel any pending advance and detach all listeners."""
        self._cancel_pending()
        if self._status is PlaybackStatus.PLAYING:
            self._status = PlaybackStatus.PAUSED
            self._state = self._snapshot()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        """Move to the next word. Only the scheduler calls this."""
        self._handle = None
        next_index = self._index + 1

        if next_index >= len(self._tokens):
            self._status = PlaybackStatus.STOPPED
            logger.info("Reached end of text after %d words", len(self._tokens))
            self._publish()
            if self._on_complete is not None:
                self._on_complete()
            return

        self._index = next_index
        self._current_wpm = effective_wpm(next_index, self._config)
        self._schedule_advance()
        self._publish()

    def _schedule_advance(self) -> None:
        token = self._tokens[self._index]
        delay = token_delay_ms(token, self._current_wpm)
        self._handle = self._scheduler.call_later(delay, self._advance)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            self._scheduler.cancel(handle)

    def _snapshot(self) -> PlaybackState:
        if not self._tokens:
            return PlaybackState(
                current_token=None,
                current_index=0,
                is_playing=False,
                current_wpm=self._current_wpm,
                progress=0.0,
            )
        return PlaybackState(
            current_token=self._tokens[self._index],
            current_index=self._index,
            is_playing=self._status is PlaybackStatus.PLAYING,
            current_wpm=self._current_wpm,
            progress=self._index / len(self._tokens),
        )

    def _publish(self) -> None:
        self._state = self._snapshot()
        for listener in list(self._listeners):
            listener(self._state)
