"""
scheduler.py — Cooperative Repeating Timer
============================================
"Fire this callback every `interval` seconds until cancelled", with no
threads.  Whoever owns the event loop calls tick(); for the web UI that
is the GET /api/state poll, for a desktop app it would be its timer.

    sched = TickScheduler()
    sched.schedule(0.4, controller.advance_one_step)
    …
    sched.tick()        # fires at most once per call, when due
    sched.cancel()      # synchronous: nothing fires after this returns

Only one job exists at a time; schedule() replaces the previous one.
The clock is injectable so tests can drive time by hand.
"""

import time
from typing import Callable, Optional


class TickScheduler:
    """
    Attributes:
        interval : Seconds between firings of the current job (None if idle).
        clock    : Monotonic time source.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.interval: Optional[float] = None
        self._callback: Optional[Callable[[], object]] = None
        self._last_tick: float = 0.0

    def schedule(self, interval: float, callback: Callable[[], object]) -> None:
        self.interval   = interval
        self._callback  = callback
        self._last_tick = self.clock()

    def cancel(self) -> None:
        self.interval  = None
        self._callback = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def tick(self) -> bool:
        """Fire the job once if its interval has elapsed.  Returns True if fired."""
        if self._callback is None or self.interval is None:
            return False
        now = self.clock()
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        self._callback()
        return True
