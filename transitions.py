# transitions.py
"""
Fade transition used when the schedule table flips pages.

One run walks

    SHOWING → FADING_OUT → SWAPPING → FADING_IN → SHOWING

with ``delay`` seconds spent fading out and ``delay`` seconds fading in.
The content swap happens at the SWAPPING step.  Phases are published via
``on_phase`` so the view model can mirror them; timing comes from the
injected Scheduler, which keeps the whole sequence testable without sleeps.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from display import FadePhase
from timing import Scheduler, Timer

log = logging.getLogger(__name__)


class FadeTransition:
    def __init__(self, scheduler: Scheduler, delay: float,
                 on_phase: Callable[[FadePhase], None]):
        self.scheduler = scheduler
        self.delay     = delay
        self.on_phase  = on_phase
        self.phase     = FadePhase.SHOWING
        self._pending: Optional[Timer] = None
        self._swap: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self.phase is not FadePhase.SHOWING

    def _set(self, phase: FadePhase) -> None:
        self.phase = phase
        self.on_phase(phase)

    # ── public API ──────────────────────────────────────────────────────────
    def start(self, swap: Callable[[], None]) -> None:
        """Begin a fade; *swap* replaces the content while it is hidden."""
        if self.running:
            # a tick landed mid-fade: the unfinished one is dropped
            log.debug("fade restarted while %s", self.phase.value)
            self.cancel()
        self._swap = swap
        self._set(FadePhase.FADING_OUT)
        self._pending = self.scheduler.call_later(self.delay, self._do_swap,
                                                  name="fade-swap")

    def cancel(self) -> None:
        """Drop any pending step and go straight back to SHOWING."""
        Scheduler.cancel(self._pending)
        self._pending = None
        self._swap = None
        if self.phase is not FadePhase.SHOWING:
            self._set(FadePhase.SHOWING)

    # ── steps ───────────────────────────────────────────────────────────────
    def _do_swap(self) -> None:
        self._set(FadePhase.SWAPPING)
        swap, self._swap = self._swap, None
        if swap is not None:
            swap()
        self._set(FadePhase.FADING_IN)
        self._pending = self.scheduler.call_later(self.delay, self._finish,
                                                  name="fade-finish")

    def _finish(self) -> None:
        self._pending = None
        self._set(FadePhase.SHOWING)
