"""
renderer.py

Draws the DisplayState onto the pygame window.

    ┌──────────────────────────┬──────────────┐
    │                          │              │
    │          video           │  slideshow   │
    │                          │              │
    ├──────────────────────────┴──────────────┤
    │   schedule title / table (paged, fades) │
    ├─────────────────────────────────────────┤
    │ ticker  »»» scrolling headlines »»»     │
    └─────────────────────────────────────────┘
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

import pygame

import config
from display import DisplayState, FadePhase
from theme import parse_hex_color

_FALLBACK = (0, 0, 0, 255)
_cache: Dict[str, pygame.Color] = {}


def color(value: str) -> pygame.Color:
    c = _cache.get(value)
    if c is None:
        try:
            c = pygame.Color(*parse_hex_color(value))
        except ValueError:
            c = pygame.Color(*_FALLBACK)
        _cache[value] = c
    return c


def render_frame(screen: pygame.Surface, frame, sar: float,
                 rect: Optional[pygame.Rect] = None):
    """
    Scale and letter-/pillar-box a raw RGB frame into ``rect``.
    """
    rect = rect or screen.get_rect()
    screen.fill((0, 0, 0), rect)
    if frame is None:
        return
    surf = pygame.image.frombuffer(frame.tobytes(), frame.shape[1::-1], "RGB")
    vw, vh = surf.get_size()
    scale = min(rect.width / (vw * sar), rect.height / vh)
    surf = pygame.transform.scale(
        surf,
        (int(vw * scale * sar), int(vh * scale))
    )
    x = rect.x + (rect.width - surf.get_width()) // 2
    y = rect.y + (rect.height - surf.get_height()) // 2
    screen.blit(surf, (x, y))


def blit_fit(screen: pygame.Surface, img: pygame.Surface, rect: pygame.Rect):
    iw, ih = img.get_size()
    scale = min(rect.width / iw, rect.height / ih)
    surf = pygame.transform.smoothscale(img, (max(1, int(iw * scale)),
                                              max(1, int(ih * scale))))
    screen.blit(surf, surf.get_rect(center=rect.center))


def fade_alpha(phase: FadePhase, elapsed: float, delay: float) -> int:
    """Table opacity 0‥255 for *elapsed* seconds into *phase*."""
    if phase is FadePhase.SHOWING:
        return 255
    if phase is FadePhase.SWAPPING:
        return 0
    p = max(0.0, min(1.0, elapsed / delay)) if delay > 0 else 1.0
    if phase is FadePhase.FADING_OUT:
        return int(255 * (1.0 - p))
    return int(255 * p)


class Compositor:
    def __init__(self, display: DisplayState,
                 images: Callable[[Optional[str]], Optional[pygame.Surface]],
                 fade_delay: float = config.FADE_DELAY,
                 ticker_speed: float = config.TICKER_SPEED):
        self.display = display
        self.images = images
        self.fade_delay = fade_delay
        self.ticker_speed = ticker_speed

        self._fonts: Dict[int, tuple] = {}
        self._fade_seen = FadePhase.SHOWING
        self._fade_since = time.monotonic()
        self._ticker_src: tuple = ()
        self._ticker_surf: Optional[pygame.Surface] = None
        self._ticker_loop = 1
        self._ticker_start = time.monotonic()

    # ── layout ──────────────────────────────────────────────────────────────
    @staticmethod
    def layout(size: tuple[int, int]) -> Dict[str, pygame.Rect]:
        w, h = size
        ticker_h = max(32, h // 12)
        top_h = int((h - ticker_h) * 0.58)
        video_w = int(w * 0.62)
        return {
            "video":    pygame.Rect(0, 0, video_w, top_h),
            "slides":   pygame.Rect(video_w, 0, w - video_w, top_h),
            "schedule": pygame.Rect(0, top_h, w, h - ticker_h - top_h),
            "ticker":   pygame.Rect(0, h - ticker_h, w, ticker_h),
        }

    def _font_set(self, h: int):
        f = self._fonts.get(h)
        if f is None:
            f = (pygame.font.SysFont("sans", max(14, h // 36)),
                 pygame.font.SysFont("sans", max(18, h // 26), bold=True),
                 pygame.font.SysFont("sans", max(18, h // 22), bold=True))
            self._fonts[h] = f
        return f

    # ── entry point ─────────────────────────────────────────────────────────
    def draw(self, screen: pygame.Surface, frame=None, sar: float = 1.0):
        d = self.display
        rects = self.layout(screen.get_size())
        body, head, ticker = self._font_set(screen.get_height())

        screen.fill(color(d.theme.page_bg))
        render_frame(screen, frame, sar, rects["video"])
        self._draw_slides(screen, rects["slides"], body)
        self._draw_schedule(screen, rects["schedule"], body, head)
        self._draw_ticker(screen, rects["ticker"], ticker)

    # ── panels ──────────────────────────────────────────────────────────────
    def _draw_slides(self, screen, rect, font):
        d = self.display
        slide = d.active_slide()
        img = self.images(slide.url) if slide else None
        if img is not None:
            blit_fit(screen, img, rect.inflate(-16, -16))
        elif d.slide_placeholder:
            txt = font.render(d.slide_placeholder, True, (60, 60, 60))
            screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_schedule(self, screen, rect, body, head):
        d = self.display
        if d.schedule_fade is not self._fade_seen:
            self._fade_seen = d.schedule_fade
            self._fade_since = time.monotonic()

        title = head.render(d.schedule_title, True, (20, 20, 20))
        screen.blit(title, (rect.x + 16, rect.y + 8))
        top = rect.y + 16 + title.get_height()

        table = pygame.Surface((rect.width - 32, rect.bottom - top - 8),
                               pygame.SRCALPHA)
        line_h = body.get_linesize() + 6
        if d.schedule_message:
            msg = body.render(d.schedule_message, True, (60, 60, 60))
            table.blit(msg, msg.get_rect(midtop=(table.get_width() // 2, 8)))
        else:
            col_x = [0, 0.2, 0.55, 0.82]
            tw = table.get_width()
            for row, entry in enumerate(d.schedule_rows):
                y = row * line_h
                if row % 2:
                    table.fill((0, 0, 0, 20), (0, y, tw, line_h))
                for cx, cell in zip(col_x, entry.cells()):
                    table.blit(body.render(cell, True, (20, 20, 20)),
                               (int(cx * tw) + 8, y + 3))

        table.set_alpha(fade_alpha(d.schedule_fade,
                                   time.monotonic() - self._fade_since,
                                   self.fade_delay))
        screen.blit(table, (rect.x + 16, top))

    def _draw_ticker(self, screen, rect, font):
        d = self.display
        theme = d.theme
        screen.fill(color(theme.ticker_bg), rect)
        if not d.ticker_text:
            return

        key = (d.ticker_text, theme.ticker_fg)
        if key != self._ticker_src or self._ticker_surf is None:
            self._ticker_src = key
            self._ticker_surf = font.render(d.ticker_text, True,
                                            color(theme.ticker_fg))
            # text is "line + sep + line": one loop is the "line + sep" prefix
            half = (len(d.ticker_text) + len(config.TICKER_SEPARATOR)) // 2
            self._ticker_loop = max(1, font.size(d.ticker_text[:half])[0])
            self._ticker_start = time.monotonic()

        off = int((time.monotonic() - self._ticker_start) * self.ticker_speed)
        x = rect.x - off % self._ticker_loop
        y = rect.y + (rect.height - self._ticker_surf.get_height()) // 2
        clip = screen.get_clip()
        screen.set_clip(rect)
        while x < rect.right:
            screen.blit(self._ticker_surf, (x, y))
            x += self._ticker_loop
        screen.set_clip(clip)
