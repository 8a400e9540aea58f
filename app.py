#!/usr/bin/env python3
"""
app.py – public signage display

Wires the poller and renderers to one pygame window and one
GStreamer player, then runs the frame loop:

    input → actions → due timers → draw → flip

Everything that changes the display happens on this thread, inside a
scheduler callback or an action handler.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import pygame

import config
from api_client import SignageAPI
from assets import ImageCache
from display import DisplayState
from events import EventManager
from overlays import clock_text, draw_clock, draw_logo, draw_overlay
from poller import Poller
from renderer import Compositor, color
from schedule_pager import SchedulePager
from slideshow import SlideshowRenderer
from theme import SettingsApplier
from ticker import TickerRenderer
from timing import Scheduler, Timer
from video_player import VideoPlayer
from video_renderer import VideoRenderer

log = logging.getLogger(__name__)


# ── main application ───────────────────────────────────────────────────────
class SignageApp:
    def __init__(self, api: Optional[SignageAPI] = None,
                 fullscreen: bool = config.FULLSCREEN):
        # window ----------------------------------------------------------
        pygame.init()
        pygame.mouse.set_visible(False)
        self.fullscreen = fullscreen
        self.screen = self._open_window()
        self.clock = pygame.time.Clock()

        # core state ------------------------------------------------------
        self.display   = DisplayState()
        self.scheduler = Scheduler()
        self.api       = api or SignageAPI()
        self.player    = VideoPlayer()
        self.images    = ImageCache(self.api.fetch_asset)

        self.poller = Poller(
            self.api, self.scheduler, self.display,
            video=VideoRenderer(self.player, self.display, self.api.resolve),
            ticker=TickerRenderer(self.display),
            slideshow=SlideshowRenderer(self.display, self.scheduler),
            settings=SettingsApplier(self.display),
            schedule=SchedulePager(self.display, self.scheduler),
        )
        self.poller.add_listener(self.images.on_snapshot)
        self.compositor = Compositor(self.display, self.images.get)

        # overlay / bookkeeping ------------------------------------------
        self.force_overlay = config.SHOW_OVERLAYS
        self.started = time.monotonic()
        self._caption = ""
        self._clock_timer: Optional[Timer] = None

    def _open_window(self) -> pygame.Surface:
        screen = pygame.display.set_mode(
            (0, 0) if self.fullscreen else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if self.fullscreen else 0,
        )
        pygame.mouse.set_visible(False)
        return screen

    # ── timers ------------------------------------------------------------
    def _tick_clock(self) -> None:
        self.display.clock_text = clock_text()

    def _sync_caption(self) -> None:
        cap = self.display.theme.caption
        if cap != self._caption:
            self._caption = cap
            pygame.display.set_caption(cap)

    # ── actions -----------------------------------------------------------
    def _handle(self, act: dict) -> bool:
        """Apply one action; False means stop the loop."""
        t = act["type"]
        if t == "quit":
            return False
        if t == "refresh":
            self.poller.refresh()
        elif t == "toggle_overlay":
            self.force_overlay ^= True
        elif t == "toggle_fullscreen":
            self.fullscreen ^= True
            self.screen = self._open_window()
        return True

    # ── main loop ---------------------------------------------------------
    def run(self):
        self._tick_clock()
        self._clock_timer = self.scheduler.call_every(
            config.CLOCK_INTERVAL, self._tick_clock, name="clock")
        self.poller.start()

        running = True
        while running:
            for e in pygame.event.get():
                EventManager.handle(e)

            # drain keyboard + remote queue (non-blocking)
            while running and (act := EventManager.poll()):
                running = self._handle(act)

            self.scheduler.run_due()
            self.images.collect()
            self._sync_caption()

            theme = self.display.theme
            frame = self.player.decode_frame()
            self.compositor.draw(self.screen, frame, self.player.sar)
            draw_logo(self.screen, self.images.get(theme.logo_url))
            draw_clock(self.screen, self.display.clock_text, color(theme.clock_fg))
            if self.force_overlay:
                draw_overlay(self.screen, self.poller, self.started)

            pygame.display.flip()
            self.clock.tick(config.FPS)

        self.shutdown()

    def shutdown(self):
        log.info("shutting down")
        Scheduler.cancel(self._clock_timer)
        self.poller.stop()
        self.poller.slideshow.stop()
        self.poller.schedule.stop()
        self.player.close()
        self.images.close()
        pygame.quit()


if __name__ == "__main__":
    SignageApp().run()
