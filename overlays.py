"""
overlays.py

Pygame overlays drawn on top of the main layout: clock badge, logo, and
the optional diagnostics panel (toggled with "i").
"""

from __future__ import annotations

import datetime
import time
from typing import Optional

import pygame

from poller import Poller

# ── colours ────────────────────────────────────────────────────────────────
WHITE = (255, 255, 255)
RED   = (255,  50, 50)
BG    = (0, 0, 0, 180)

pygame.font.init()


# ── helpers ────────────────────────────────────────────────────────────────
def _compute_font_sizes(h: int) -> tuple[int, int, int]:
    return max(12, h // 60), max(16, h // 40), max(24, h // 18)


def _fmt_hms(sec: float) -> str:
    sec = int(max(0, sec))
    m, s = divmod(sec, 60)
    h, m = divmod(m, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def _badge(text_surf: pygame.Surface, pad: int) -> pygame.Surface:
    bg = pygame.Surface(
        (text_surf.get_width() + pad * 2, text_surf.get_height() + pad),
        pygame.SRCALPHA,
    )
    bg.fill(BG)
    bg.blit(text_surf, (pad, pad // 2))
    return bg


# ── clock / logo ───────────────────────────────────────────────────────────
def draw_clock(surface: pygame.Surface, text: str, color) -> None:
    sw, sh = surface.get_size()
    _, small_pt, _ = _compute_font_sizes(sh)
    font = pygame.font.SysFont("monospace", small_pt, bold=True)
    badge = _badge(font.render(text, True, color), small_pt // 3)
    surface.blit(badge, (sw - badge.get_width() - 10, 10))


def draw_logo(surface: pygame.Surface, logo: Optional[pygame.Surface]) -> None:
    if logo is None:
        return
    sh = surface.get_height()
    target_h = max(32, sh // 10)
    lw, lh = logo.get_size()
    scaled = pygame.transform.smoothscale(
        logo, (max(1, int(lw * target_h / max(1, lh))), target_h))
    surface.blit(scaled, (10, 10))


# ── diagnostics panel ──────────────────────────────────────────────────────
def overlay_lines(poller: Poller, started: float) -> list[str]:
    snap = poller.snapshot
    last = poller.last_success
    lines = [
        f"Uptime     {_fmt_hms(time.monotonic() - started)}",
        f"Polls      {poller.polls}  failed {poller.failures}",
        f"Last OK    {last.strftime('%H:%M:%S') if last else 'never'}",
        f"Items      {len(snap.items)}",
        f"Classes    {len(snap.schedule)} ({snap.day or '-'})",
        f"Slides     {poller.slideshow.state.value}",
        f"Schedule   {poller.schedule.state.value}"
        + (f" page {poller.schedule.page + 1}/{poller.schedule.pages}"
           if poller.schedule.pages > 1 else ""),
        f"Video      {poller.display.video_src or '-'}",
    ]
    if poller.last_error:
        lines.append(f"Error      {poller.last_error}")
    return lines


def draw_overlay(surface: pygame.Surface, poller: Poller, started: float) -> None:
    sw, sh = surface.get_size()
    tiny_pt, _, _ = _compute_font_sizes(sh)
    ft = pygame.font.SysFont("monospace", tiny_pt)

    lines = overlay_lines(poller, started)
    widest = max(ft.size(t)[0] for t in lines)
    pbg = pygame.Surface(
        (widest + 20, len(lines) * (ft.get_linesize() + 2) + 10),
        pygame.SRCALPHA,
    )
    pbg.fill(BG)
    y = 5
    for t in lines:
        colour = RED if t.startswith("Error") else WHITE
        pbg.blit(ft.render(t, True, colour), (10, y))
        y += ft.get_linesize() + 2
    surface.blit(pbg, (10, sh // 2 - pbg.get_height() // 2))


def clock_text(now: Optional[datetime.datetime] = None) -> str:
    """24-hour ``HH:MM:SS``."""
    return (now or datetime.datetime.now()).strftime("%H:%M:%S")
