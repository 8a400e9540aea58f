"""
Unit tests for the pygame compositor (headless).
"""

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from display import DisplayState, FadePhase, Slide
from helpers import entries
from renderer import Compositor, color, fade_alpha


class TestFadeAlpha(unittest.TestCase):
    def test_phases(self) -> None:
        self.assertEqual(fade_alpha(FadePhase.SHOWING, 0.3, 0.5), 255)
        self.assertEqual(fade_alpha(FadePhase.SWAPPING, 0.0, 0.5), 0)
        self.assertEqual(fade_alpha(FadePhase.FADING_OUT, 0.0, 0.5), 255)
        self.assertEqual(fade_alpha(FadePhase.FADING_OUT, 0.25, 0.5), 127)
        self.assertEqual(fade_alpha(FadePhase.FADING_OUT, 2.0, 0.5), 0)
        self.assertEqual(fade_alpha(FadePhase.FADING_IN, 0.5, 0.5), 255)
        self.assertEqual(fade_alpha(FadePhase.FADING_IN, 0.0, 0.0), 255)


class TestCompositor(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        pygame.font.init()

    def test_layout_covers_screen(self) -> None:
        r = Compositor.layout((1280, 720))
        self.assertEqual(r["video"].width + r["slides"].width, 1280)
        self.assertEqual(r["video"].height + r["schedule"].height + r["ticker"].height, 720)

    def test_color_fallback(self) -> None:
        self.assertEqual(tuple(color("#003366")), (0, 0x33, 0x66, 255))
        self.assertEqual(tuple(color("bogus")), (0, 0, 0, 255))

    def test_draw_smoke(self) -> None:
        d = DisplayState(ticker_text="A   |   A", schedule_title="Jadwal - Senin",
                         schedule_rows=entries(3), schedule_fade=FadePhase.FADING_IN,
                         slides=[Slide("/a.png", active=True)])
        img = pygame.Surface((40, 30), pygame.SRCALPHA)
        img.fill((200, 0, 0))
        comp = Compositor(d, lambda url: img if url == "/a.png" else None)
        screen = pygame.Surface((640, 360))
        comp.draw(screen)
        d.slides = []
        d.slide_placeholder = "No Images"
        d.schedule_message = "Tidak ada jadwal kuliah hari ini."
        comp.draw(screen)
        ticker = Compositor.layout((640, 360))["ticker"]
        self.assertEqual(tuple(screen.get_at((ticker.x + 1, ticker.bottom - 1)))[:3],
                         (0, 0x33, 0x66))


if __name__ == "__main__":
    unittest.main()
