"""
poller.py

Fetches a Snapshot at start-up and then every POLL_INTERVAL seconds and
hands it to the renderers in a fixed order:

    video → ticker → slideshow → settings → schedule

All three endpoints are read before anything is rendered.  If any of them
fails the previous snapshot stays on screen untouched; the next scheduled
poll is the retry.
"""

from __future__ import annotations

import datetime
import logging
from typing import Callable, List, Optional, Tuple

import config
from display import DisplayState
from errors import SignageError
from models import Snapshot
from timing import Scheduler, Timer

log = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


def day_names(when: datetime.date,
              api_names: Tuple[str, ...] = config.API_DAY_NAMES,
              local_names: Tuple[str, ...] = config.LOCAL_DAY_NAMES
              ) -> Tuple[str, str]:
    """(English name for the API, local name for the title) of *when*."""
    idx = (when.weekday() + 1) % 7          # Sunday-first tables
    return api_names[idx], local_names[idx]


class Poller:
    def __init__(self, api, scheduler: Scheduler, display: DisplayState, *,
                 video, ticker, slideshow, settings, schedule,
                 interval: float = config.POLL_INTERVAL,
                 now: Callable[[], datetime.datetime] = datetime.datetime.now,
                 title_fmt: str = config.SCHEDULE_TITLE):
        self.api       = api
        self.scheduler = scheduler
        self.display   = display
        self.video     = video
        self.ticker    = ticker
        self.slideshow = slideshow
        self.settings  = settings
        self.schedule  = schedule
        self.interval  = interval
        self.now       = now
        self.title_fmt = title_fmt

        self.snapshot = Snapshot()
        self.timer: Optional[Timer] = None
        self.listeners: List[SnapshotListener] = []

        # bookkeeping for the web remote
        self.polls = 0
        self.failures = 0
        self.render_errors = 0
        self.last_error = ""
        self.last_success: Optional[datetime.datetime] = None

    # ── lifecycle ──────────────────────────────────────────────────────────
    def start(self) -> None:
        self.stop()
        self.poll_once()
        self.timer = self.scheduler.call_every(self.interval, self.poll_once,
                                               name="poll")

    def stop(self) -> None:
        Scheduler.cancel(self.timer)
        self.timer = None

    def refresh(self) -> bool:
        """Out-of-band poll; the regular cadence is left as it is."""
        return self.poll_once()

    def add_listener(self, fn: SnapshotListener) -> None:
        self.listeners.append(fn)

    # ── one cycle ──────────────────────────────────────────────────────────
    def fetch(self) -> Snapshot:
        now = self.now()
        api_day, local_day = day_names(now.date())
        items    = self.api.fetch_items()
        settings = self.api.fetch_settings()
        schedule = self.api.fetch_schedule(api_day)
        return Snapshot(items=items, schedule=schedule, settings=settings,
                        day=local_day, fetched_at=now)

    def poll_once(self) -> bool:
        self.polls += 1
        try:
            snap = self.fetch()
        except SignageError as e:
            self.failures += 1
            self.last_error = f"{type(e).__name__}: {e}"
            log.warning("poll failed, keeping previous snapshot (%s)",
                        self.last_error)
            return False

        self.apply(snap)
        self.snapshot = snap
        self.last_success = snap.fetched_at
        self.last_error = ""
        return True

    def apply(self, snap: Snapshot) -> None:
        """
        Hand *snap* to each renderer in order.  A renderer that raises is
        logged and skipped; the ones after it still run, so one bad field
        never leaves the rest of the screen on the previous poll.
        """
        log.debug("snapshot: %d items, %d classes on %s",
                  len(snap.items), len(snap.schedule), snap.day)
        self.display.schedule_title = self.title_fmt.format(day=snap.day)
        steps = (
            ("video",     self.video.render,     snap.items),
            ("ticker",    self.ticker.render,    snap.items),
            ("slideshow", self.slideshow.render, snap.items),
            ("settings",  self.settings.apply,   snap.settings),
            ("schedule",  self.schedule.render,  snap.schedule),
        )
        for name, fn, arg in steps:
            try:
                fn(arg)
            except Exception:
                self.render_errors += 1
                log.exception("%s renderer failed on this snapshot", name)
        for fn in self.listeners:
            try:
                fn(snap)
            except Exception:
                log.exception("snapshot listener %r failed", fn)
