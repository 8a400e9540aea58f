"""Shared fakes and factories for the display tests."""

from __future__ import annotations

import datetime
import itertools

from errors import MediaPlaybackBlocked
from models import Category, ContentItem, DisplaySettings, ScheduleEntry

_ids = itertools.count(1)

MONDAY = datetime.datetime(2026, 10, 19, 9, 30)


def item(category, title="", content="", image_url=None, created_at=None,
         start_date=None, end_date=None) -> ContentItem:
    return ContentItem(id=next(_ids), title=title, category=Category(category),
                       content=content, image_url=image_url,
                       start_date=start_date, end_date=end_date,
                       created_at=created_at)


def entries(n: int, day: str = "Monday") -> list[ScheduleEntry]:
    return [ScheduleEntry(id=i, course_name=f"Course {i}", day_of_week=day,
                          start_time=f"{7 + i:02d}:00:00",
                          end_time=f"{8 + i:02d}:00:00",
                          lecturer=f"Lecturer {i}", room=f"R{i}")
            for i in range(n)]


class FakePlayer:
    def __init__(self, block: bool = False):
        self.block = block
        self.loaded: list[str] = []
        self.plays = 0
        self.failed = False

    def load(self, uri: str) -> None:
        self.loaded.append(uri)
        self.failed = False

    def play(self) -> None:
        self.plays += 1
        if self.block:
            raise MediaPlaybackBlocked("autoplay refused")


class FakeAPI:
    """Serves canned data; set ``error`` to make every fetch raise it."""

    def __init__(self, items=None, schedule=None, settings=None):
        self.items = items or []
        self.schedule = schedule or []
        self.settings = settings or DisplaySettings()
        self.error: Exception | None = None
        self.days: list[str] = []
        self.calls: list[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def fetch_items(self):
        self._check("items")
        return list(self.items)

    def fetch_settings(self):
        self._check("settings")
        return self.settings

    def fetch_schedule(self, day: str):
        self._check("schedule")
        self.days.append(day)
        return list(self.schedule)
