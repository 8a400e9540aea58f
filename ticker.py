"""ticker.py – headline string for the scrolling ticker."""

from __future__ import annotations

from typing import Iterable, List

import config
from display import DisplayState
from models import Category, ContentItem

TICKER_CATEGORIES = (Category.ANNOUNCEMENT, Category.NEWS)


def headlines(items: Iterable[ContentItem],
              sep: str = config.TICKER_SEPARATOR) -> str:
    titles: List[str] = [it.title for it in items
                         if it.category in TICKER_CATEGORIES]
    return sep.join(titles)


def ticker_text(line: str, sep: str = config.TICKER_SEPARATOR) -> str:
    # doubled so the scroll wraps without a visible seam
    return line + sep + line


class TickerRenderer:
    def __init__(self, display: DisplayState,
                 sep: str = config.TICKER_SEPARATOR):
        self.display = display
        self.sep = sep

    def render(self, items: Iterable[ContentItem]) -> None:
        line = headlines(items, self.sep)
        if line:
            self.display.ticker_text = ticker_text(line, self.sep)
