"""
video_renderer.py

Keeps the media player on the snapshot's video item.  The player is only
reloaded when the asset path changes or the pipeline has failed since the
last load; a missing video item leaves whatever is already playing alone.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from display import DisplayState
from errors import MediaPlaybackBlocked
from models import Category, ContentItem

log = logging.getLogger(__name__)


def pick_video(items: Iterable[ContentItem]) -> Optional[ContentItem]:
    """
    Most recently created video item.  Items without ``created_at`` rank
    last; ties keep response order (``max`` returns the first maximum).
    """
    videos = [it for it in items if it.category is Category.VIDEO]
    if not videos:
        return None

    def _rank(it: ContentItem) -> float:
        return it.created_at.timestamp() if it.created_at else float("-inf")

    return max(videos, key=_rank)


def same_source(loaded: str, content: str) -> bool:
    """Suffix match: ``loaded`` is absolute, ``content`` is usually relative."""
    return bool(loaded) and loaded.endswith(content)


class VideoRenderer:
    """
    ``player`` needs ``load(uri)``, ``play()`` and a ``failed`` flag;
    ``play()`` raises MediaPlaybackBlocked when playback is refused.
    """

    def __init__(self, player, display: DisplayState,
                 resolve: Callable[[str], str] = lambda p: p):
        self.player  = player
        self.display = display
        self.resolve = resolve

    def render(self, items: Iterable[ContentItem]) -> bool:
        """Return True when a new source was loaded."""
        item = pick_video(items)
        if item is None or not item.content:
            return False
        if same_source(self.display.video_src, item.content):
            if not self.player.failed:
                return False
            log.warning("player failed on %s, reloading", self.display.video_src)

        src = self.resolve(item.content)
        log.info("video source → %s", src)
        self.player.load(src)
        self.display.video_src = src
        self.display.video_loads += 1
        try:
            self.player.play()
        except MediaPlaybackBlocked as e:
            log.warning("playback blocked for %s: %s", src, e)
        return True
