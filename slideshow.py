"""
slideshow.py

    IDLE      no images – placeholder text, no timer
    SINGLE    one image, static
    ROTATING  ≥2 images, one active, advanced every SLIDE_INTERVAL

A rebuild only happens when the ordered list of image URLs changes, so an
unchanged poll leaves the active slide and its timer untouched.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Optional, Tuple

import config
from display import DisplayState, Slide
from models import Category, ContentItem
from timing import Scheduler, Timer

log = logging.getLogger(__name__)

SlideKey = Tuple[str, ...]


class SlideState(str, enum.Enum):
    IDLE     = "idle"
    SINGLE   = "single"
    ROTATING = "rotating"


def slide_key(items: Iterable[ContentItem]) -> SlideKey:
    """Ordered image URLs of the slideshow items."""
    return tuple(it.image_url for it in items
                 if it.category is Category.SLIDESHOW and it.image_url)


class SlideshowRenderer:
    def __init__(self, display: DisplayState, scheduler: Scheduler,
                 interval: float = config.SLIDE_INTERVAL,
                 placeholder: str = config.NO_SLIDES_TEXT):
        self.display     = display
        self.scheduler   = scheduler
        self.interval    = interval
        self.placeholder = placeholder

        self.state = SlideState.IDLE
        self.index = 0
        self.timer: Optional[Timer] = None
        self._key: Optional[SlideKey] = None

    def render(self, items: Iterable[ContentItem]) -> bool:
        """Return True when the slide set was rebuilt."""
        key = slide_key(items)
        if key == self._key:
            return False
        self._rebuild(key)
        return True

    def stop(self) -> None:
        Scheduler.cancel(self.timer)
        self.timer = None

    # ── internals ───────────────────────────────────────────────────────────
    def _rebuild(self, key: SlideKey) -> None:
        self.stop()
        self._key = key
        self.index = 0
        self.display.slides = [Slide(url, active=(i == 0))
                               for i, url in enumerate(key)]

        if not key:
            self.state = SlideState.IDLE
            self.display.slide_placeholder = self.placeholder
        elif len(key) == 1:
            self.state = SlideState.SINGLE
            self.display.slide_placeholder = None
        else:
            self.state = SlideState.ROTATING
            self.display.slide_placeholder = None
            self.timer = self.scheduler.call_every(self.interval, self._advance,
                                                   name="slideshow")
        log.info("slideshow %s (%d slide(s))", self.state.value, len(key))

    def _advance(self) -> None:
        slides = self.display.slides
        if len(slides) < 2:
            return
        slides[self.index].active = False
        self.index = (self.index + 1) % len(slides)
        slides[self.index].active = True
