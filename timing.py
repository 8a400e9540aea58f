# =========  timing.py  =========
"""
Cooperative timer scheduler.

The main loop calls ``run_due()`` once per frame; every timer whose due
time has passed fires on that same thread, so callbacks never overlap.
The clock is injectable – tests drive it by hand instead of sleeping.

Each owner keeps the Timer handle it created and cancels it before
starting a replacement; the scheduler itself never de-duplicates.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional

log = logging.getLogger(__name__)

Clock = Callable[[], float]


class Timer:
    __slots__ = ("due", "interval", "callback", "name", "cancelled", "_seq")

    def __init__(self, due: float, interval: Optional[float],
                 callback: Callable[[], None], name: str, seq: int):
        self.due       = due
        self.interval  = interval        # None → one-shot
        self.callback  = callback
        self.name      = name
        self.cancelled = False
        self._seq      = seq

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled

    def __lt__(self, other: "Timer") -> bool:
        return (self.due, self._seq) < (other.due, other._seq)

    def __repr__(self) -> str:
        kind = f"every {self.interval}s" if self.interval else "once"
        state = "cancelled" if self.cancelled else f"due {self.due:.3f}"
        return f"<Timer {self.name or '?'} {kind} {state}>"


class Scheduler:
    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        self._heap: List[Timer] = []
        self._seq = itertools.count()

    # ── scheduling ─────────────────────────────────────────────────────────
    def call_later(self, delay: float, callback: Callable[[], None],
                   name: str = "") -> Timer:
        t = Timer(self.clock() + max(0.0, delay), None, callback, name,
                  next(self._seq))
        heapq.heappush(self._heap, t)
        return t

    def call_every(self, interval: float, callback: Callable[[], None],
                   name: str = "") -> Timer:
        """First call after one full *interval*, like setInterval."""
        if interval <= 0:
            raise ValueError("interval must be positive")
        t = Timer(self.clock() + interval, interval, callback, name,
                  next(self._seq))
        heapq.heappush(self._heap, t)
        return t

    @staticmethod
    def cancel(timer: Optional[Timer]) -> None:
        if timer is not None:
            timer.cancel()

    # ── introspection ──────────────────────────────────────────────────────
    def _prune(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)

    def next_due(self) -> Optional[float]:
        self._prune()
        return self._heap[0].due if self._heap else None

    def active_timers(self) -> List[Timer]:
        return sorted(t for t in self._heap if not t.cancelled)

    # ── dispatch ───────────────────────────────────────────────────────────
    def run_due(self) -> int:
        """Fire every timer due at the current clock reading; return count."""
        now = self.clock()
        fired = 0
        while True:
            self._prune()
            if not self._heap or self._heap[0].due > now:
                break
            t = heapq.heappop(self._heap)
            if t.interval:
                # reschedule first so the callback may cancel its own timer;
                # missed periods are skipped rather than replayed in a burst
                t.due += t.interval
                if t.due <= now:
                    t.due = now + t.interval
                heapq.heappush(self._heap, t)
            else:
                t.cancelled = True
            fired += 1
            try:
                t.callback()
            except Exception:
                log.exception("timer %r raised", t)
        return fired


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def advance(scheduler: Scheduler, clock: ManualClock, seconds: float) -> None:
    """Move *clock* forward, firing each timer at its exact due time."""
    target = clock.now + seconds
    while True:
        nd = scheduler.next_due()
        if nd is None or nd > target:
            break
        clock.now = max(clock.now, nd)
        scheduler.run_due()
    clock.now = target
