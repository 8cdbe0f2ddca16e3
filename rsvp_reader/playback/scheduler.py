"""Single-shot, cancellable timers for the playback controller.

WHY: The controller is a timed state machine, but it must not care whether
it runs inside a tkinter main loop, a blocking terminal player, or a test
with a fake clock. It only needs "call this once after N ms" and "forget
that call".

HOW: BaseScheduler is an ABC with two methods, call_later() and cancel().
Two implementations wrap real event loops:
  TkScheduler: tkinter's widget.after() / after_cancel()
  BlockingScheduler: stdlib sched.scheduler driven on the calling thread

RULES:
- call_later() returns an opaque handle; only that handle may be cancelled
- Callbacks run on the thread that drives the loop; nothing here spawns
  threads, so the controller never needs a lock
- cancel() of a handle whose callback already fired is a no-op
"""

from __future__ import annotations

import sched
import time
from abc import ABC, abstractmethod
from typing import Any, Callable


class BaseScheduler(ABC):
    """Abstract single-shot timer source.

    To host the controller in a new event loop:
    1. Subclass BaseScheduler
    2. Map call_later() to the loop's one-shot timer
    3. Map cancel() to the loop's timer cancellation
    """

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Returns:
            Handle accepted by cancel().
        """

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Prevent a pending callback from running."""


class TkScheduler(BaseScheduler):
    """Scheduler backed by a tkinter widget's ``after`` timers."""

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        return self._widget.after(delay_ms, callback)

    def cancel(self, handle: Any) -> None:
        self._widget.after_cancel(handle)


class BlockingScheduler(BaseScheduler):
    """Scheduler that runs callbacks on the calling thread via ``sched``.

    WHY: The terminal player has no GUI event loop. ``sched.scheduler``
    with a monotonic clock gives the same one-shot/cancel semantics while
    blocking in ``run()`` until nothing is pending.

    RULES:
    - run() returns once the queue is empty (playback stopped or paused)
    - Callbacks may schedule further callbacks; run() keeps draining
    """

    def __init__(
        self,
        timefunc: Callable[[], float] = time.monotonic,
        delayfunc: Callable[[float], Any] = time.sleep,
    ) -> None:
        self._scheduler = sched.scheduler(timefunc, delayfunc)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        return self._scheduler.enter(delay_ms / 1000.0, 0, callback)

    def cancel(self, handle: Any) -> None:
        try:
            self._scheduler.cancel(handle)
        except ValueError:
            # Already popped by run(), e.g. Ctrl-C between pop and callback
            pass

    def empty(self) -> bool:
        return self._scheduler.empty()

    def run(self) -> None:
        """Block until every pending callback has run or been cancelled."""
        self._scheduler.run()
