"""
schedule_pager.py

Today's class table.

    EMPTY        no entries – "no classes today" message, no timer
    SINGLE_PAGE  ≤ page_size entries, static
    PAGINATED    > page_size entries; every ``interval`` the table fades
                 out, swaps to the next page slice, and fades back in

Page 0 is shown straight away on entering PAGINATED; pages wrap forever.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Iterable, List, Optional, Sequence

import config
from display import DisplayState, FadePhase
from models import ScheduleEntry
from timing import Scheduler, Timer
from transitions import FadeTransition

log = logging.getLogger(__name__)


class PagerState(str, enum.Enum):
    EMPTY       = "empty"
    SINGLE_PAGE = "single_page"
    PAGINATED   = "paginated"


def page_count(n: int, size: int) -> int:
    return math.ceil(n / size)


def page_slice(entries: Sequence[ScheduleEntry], page: int,
               size: int) -> List[ScheduleEntry]:
    start = page * size
    return list(entries[start:start + size])


class SchedulePager:
    def __init__(self, display: DisplayState, scheduler: Scheduler,
                 page_size: int = config.PAGE_SIZE,
                 interval: float = config.PAGE_INTERVAL,
                 fade_delay: float = config.FADE_DELAY,
                 empty_text: str = config.NO_SCHEDULE_TEXT):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.display    = display
        self.scheduler  = scheduler
        self.page_size  = page_size
        self.interval   = interval
        self.empty_text = empty_text
        self.fade       = FadeTransition(scheduler, fade_delay, self._on_fade)

        self.state = PagerState.EMPTY
        self.page = 0
        self.pages = 0
        self.timer: Optional[Timer] = None
        self._entries: Optional[List[ScheduleEntry]] = None

    def render(self, entries: Iterable[ScheduleEntry]) -> bool:
        """Return True when the table was re-evaluated."""
        entries = list(entries)
        if self._entries is not None and entries == self._entries:
            return False

        self.stop()
        self._entries = entries
        self.page = 0
        self.pages = page_count(len(entries), self.page_size)

        if not entries:
            self.state = PagerState.EMPTY
            self.display.schedule_rows = []
            self.display.schedule_message = self.empty_text
        elif len(entries) <= self.page_size:
            self.state = PagerState.SINGLE_PAGE
            self.display.schedule_message = None
            self.display.schedule_rows = list(entries)
        else:
            self.state = PagerState.PAGINATED
            self.display.schedule_message = None
            self._show(0)
            self.timer = self.scheduler.call_every(self.interval, self._tick,
                                                   name="schedule-pages")
        log.info("schedule %s (%d entries, %d page(s))",
                 self.state.value, len(entries), self.pages)
        return True

    def stop(self) -> None:
        """Cancel the page timer and any fade that is still in flight."""
        Scheduler.cancel(self.timer)
        self.timer = None
        self.fade.cancel()

    # ── internals ───────────────────────────────────────────────────────────
    def _show(self, page: int) -> None:
        self.display.schedule_rows = page_slice(self._entries or [], page,
                                                self.page_size)

    def _tick(self) -> None:
        self.fade.start(self._next_page)

    def _next_page(self) -> None:
        self.page = (self.page + 1) % self.pages
        self._show(self.page)

    def _on_fade(self, phase: FadePhase) -> None:
        self.display.schedule_fade = phase
