"""
display.py

The in-memory view model the renderers write and the pygame compositor
reads every frame.  It plays the part of the browser DOM: nothing here
draws, and nothing here talks to the network.
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import config
from models import ScheduleEntry


class FadePhase(str, enum.Enum):
    SHOWING     = "showing"
    FADING_OUT  = "fading_out"     # "fade-exit"
    SWAPPING    = "swapping"
    FADING_IN   = "fading_in"      # "fade-enter"


@dataclass
class Theme:
    page_bg:   str = config.DEFAULT_PAGE_BG
    ticker_bg: str = config.DEFAULT_TICKER_BG
    ticker_fg: str = config.DEFAULT_TICKER_FG
    clock_fg:  str = config.DEFAULT_CLOCK_FG
    caption:   str = config.DEFAULT_CAPTION
    logo_url:  Optional[str] = None


@dataclass
class Slide:
    url: str
    active: bool = False


@dataclass
class DisplayState:
    # video
    video_src: str = ""
    video_loads: int = 0

    # ticker
    ticker_text: str = ""

    # slideshow
    slides: List[Slide] = field(default_factory=list)
    slide_placeholder: Optional[str] = None

    # schedule
    schedule_title: str = ""
    schedule_rows: List[ScheduleEntry] = field(default_factory=list)
    schedule_message: Optional[str] = None
    schedule_fade: FadePhase = FadePhase.SHOWING

    # chrome
    theme: Theme = field(default_factory=Theme)
    clock_text: str = ""

    def active_slide(self) -> Optional[Slide]:
        return next((s for s in self.slides if s.active), None)

    def as_dict(self) -> Dict[str, Any]:
        """JSON-friendly copy for the web remote."""
        d = asdict(self)
        d["schedule_fade"] = self.schedule_fade.value
        d["schedule_rows"] = [" | ".join(r.cells()) for r in self.schedule_rows]
        return d
