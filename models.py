"""
models.py

Records served by the signage backend and the per-poll Snapshot that
bundles them.  ``from_json`` constructors validate shape only; anything
structurally wrong raises ParseFailure so the poller can keep the previous
snapshot.
"""

from __future__ import annotations

import datetime
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from errors import ParseFailure

log = logging.getLogger(__name__)


class Category(str, enum.Enum):
    ANNOUNCEMENT = "announcement"
    EVENT        = "event"
    NEWS         = "news"
    VIDEO        = "video"
    SLIDESHOW    = "slideshow"


# ── helpers ────────────────────────────────────────────────────────────────
def _parse_ts(raw: Any) -> Optional[datetime.datetime]:
    """ISO-8601 → datetime; None for missing or unparseable values."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        return datetime.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        log.debug("ignoring bad timestamp %r", raw)
        return None


def _require(obj: Any, keys: tuple[str, ...], what: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise ParseFailure(f"{what}: expected object, got {type(obj).__name__}")
    missing = [k for k in keys if k not in obj]
    if missing:
        raise ParseFailure(f"{what}: missing {', '.join(missing)}")
    return obj


def _opt_str(value: Any, what: str) -> Optional[str]:
    """Empty → None; anything that is not a string is a shape error."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ParseFailure(f"{what}: expected string, got {type(value).__name__}")
    return value


# ── records ────────────────────────────────────────────────────────────────
@dataclass
class ContentItem:
    id: Any
    title: str
    category: Category
    content: str = ""
    image_url: Optional[str] = None
    start_date: Optional[datetime.datetime] = None
    end_date: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None

    @classmethod
    def from_json(cls, obj: Any) -> Optional["ContentItem"]:
        """Build an item, or return None when its category is unknown."""
        d = _require(obj, ("id", "title", "category"), "item")
        try:
            cat = Category(d["category"])
        except ValueError:
            log.warning("skipping item %s with unknown category %r",
                        d["id"], d["category"])
            return None
        return cls(
            id=d["id"],
            title=str(d["title"] or ""),
            category=cat,
            content=str(d.get("content") or ""),
            image_url=_opt_str(d.get("image_url"), "item image_url"),
            start_date=_parse_ts(d.get("start_date")),
            end_date=_parse_ts(d.get("end_date")),
            created_at=_parse_ts(d.get("created_at")),
        )


@dataclass
class ScheduleEntry:
    id: Any
    course_name: str
    day_of_week: str
    start_time: str
    end_time: str
    lecturer: str = ""
    room: str = ""

    @classmethod
    def from_json(cls, obj: Any) -> "ScheduleEntry":
        d = _require(obj, ("id", "course_name", "day_of_week",
                           "start_time", "end_time"), "schedule entry")
        return cls(
            id=d["id"],
            course_name=str(d["course_name"]),
            day_of_week=str(d["day_of_week"]),
            start_time=str(d["start_time"]),
            end_time=str(d["end_time"]),
            lecturer=str(d.get("lecturer") or ""),
            room=str(d.get("room") or ""),
        )

    @property
    def time_range(self) -> str:
        """``HH:MM - HH:MM`` (seconds dropped)."""
        return f"{self.start_time[:5]} - {self.end_time[:5]}"

    def cells(self) -> tuple[str, str, str, str]:
        return self.time_range, self.course_name, self.lecturer, self.room


@dataclass
class DisplaySettings:
    school_name: Optional[str] = None
    logo_url: Optional[str] = None
    color_bg_page: Optional[str] = None
    color_bg_header: Optional[str] = None
    color_bg_marquee: Optional[str] = None
    color_text_header: Optional[str] = None
    color_text_marquee: Optional[str] = None

    @classmethod
    def from_json(cls, obj: Any) -> "DisplaySettings":
        if obj is None:
            return cls()
        if not isinstance(obj, dict):
            raise ParseFailure(f"settings: expected object, got {type(obj).__name__}")
        known = cls.__dataclass_fields__
        return cls(**{k: _opt_str(obj[k], f"settings {k}")
                      for k in obj if k in known})


@dataclass
class Snapshot:
    """Everything one poll cycle fetched.  Replaced wholesale, never merged."""
    items: List[ContentItem] = field(default_factory=list)
    schedule: List[ScheduleEntry] = field(default_factory=list)
    settings: DisplaySettings = field(default_factory=DisplaySettings)
    day: str = ""
    fetched_at: Optional[datetime.datetime] = None


# ── list parsers ───────────────────────────────────────────────────────────
def parse_items(body: Any) -> List[ContentItem]:
    if not isinstance(body, list):
        raise ParseFailure(f"items: expected array, got {type(body).__name__}")
    return [it for it in map(ContentItem.from_json, body) if it is not None]


def parse_schedule(body: Any) -> List[ScheduleEntry]:
    if not isinstance(body, list):
        raise ParseFailure(f"schedules: expected array, got {type(body).__name__}")
    return [ScheduleEntry.from_json(o) for o in body]
