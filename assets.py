"""
assets.py

Downloaded images (slides, logo) decoded to pygame Surfaces.

``prefetch`` only queues downloads on a small worker pool; the display
thread never waits on the network for an image.  ``collect`` is called
once per frame and decodes whatever has arrived, so drawing only ever
reads from memory.  URLs that drop out of the snapshot are evicted (or
their pending download cancelled); failed downloads are retried on the
next poll.
"""

from __future__ import annotations

import concurrent.futures
import io
import logging
import os
from typing import Callable, Dict, Iterable, Optional

import pygame

from errors import SignageError
from models import Snapshot
from slideshow import slide_key

log = logging.getLogger(__name__)


def _decode(data: bytes, name: str) -> pygame.Surface:
    return pygame.image.load(io.BytesIO(data), os.path.basename(name))


class ImageCache:
    def __init__(self, fetch: Callable[[str], bytes],
                 decode: Callable[[bytes, str], pygame.Surface] = _decode,
                 workers: int = 2):
        self.fetch = fetch
        self.decode = decode
        self._pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="images")
        self._images: Dict[str, pygame.Surface] = {}
        self._pending: Dict[str, concurrent.futures.Future] = {}
        self.errors = 0

    def __len__(self) -> int:
        return len(self._images)

    def get(self, url: Optional[str]) -> Optional[pygame.Surface]:
        return self._images.get(url) if url else None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def prefetch(self, urls: Iterable[str]) -> None:
        wanted = [u for u in dict.fromkeys(urls) if u]
        for url in list(self._images):
            if url not in wanted:
                del self._images[url]
        for url in list(self._pending):
            if url not in wanted:
                self._pending.pop(url).cancel()

        for url in wanted:
            if url in self._images or url in self._pending:
                continue
            self._pending[url] = self._pool.submit(self.fetch, url)

    def collect(self) -> int:
        """Decode finished downloads; returns how many were settled."""
        done = [u for u, f in self._pending.items() if f.done()]
        for url in done:
            fut = self._pending.pop(url)
            if fut.cancelled():
                continue
            try:
                self._images[url] = self.decode(fut.result(), url)
            except SignageError as e:
                self.errors += 1
                log.warning("image %s unavailable: %s", url, e)
            except (pygame.error, ValueError) as e:
                self.errors += 1
                log.warning("image %s could not be decoded: %s", url, e)
        return len(done)

    def wait(self, timeout: Optional[float] = None) -> int:
        """Block until queued downloads finish, then collect them."""
        concurrent.futures.wait(list(self._pending.values()), timeout=timeout)
        return self.collect()

    def on_snapshot(self, snap: Snapshot) -> None:
        urls = list(slide_key(snap.items))
        if snap.settings.logo_url:
            urls.append(snap.settings.logo_url)
        self.prefetch(urls)

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
