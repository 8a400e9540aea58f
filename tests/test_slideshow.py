"""
Unit tests for the slideshow state machine.

- identical slide set → no rebuild, same active index, same timer
- k slides: k ticks bring the active index back to where it started
- <2 slides never own a rotation timer
"""

import datetime
import unittest

from display import DisplayState
from helpers import MONDAY, item
from slideshow import SlideshowRenderer, SlideState, slide_key
from timing import ManualClock, Scheduler, advance


def slides(*urls):
    return [item("slideshow", title=u, image_url=u) for u in urls]


class TestSlideshow(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ManualClock()
        self.sched = Scheduler(self.clock)
        self.display = DisplayState()
        self.ss = SlideshowRenderer(self.display, self.sched, interval=5.0,
                                    placeholder="No Images")

    def active(self) -> int:
        return [s.active for s in self.display.slides].index(True)

    def test_idle_placeholder(self) -> None:
        self.assertTrue(self.ss.render([]))
        self.assertEqual(self.ss.state, SlideState.IDLE)
        self.assertEqual(self.display.slide_placeholder, "No Images")
        self.assertEqual(self.display.slides, [])
        self.assertIsNone(self.ss.timer)

    def test_single_has_no_timer(self) -> None:
        self.ss.render(slides("/a.png"))
        self.assertEqual(self.ss.state, SlideState.SINGLE)
        self.assertIsNone(self.ss.timer)
        self.assertTrue(self.display.slides[0].active)
        self.assertIsNone(self.display.slide_placeholder)

    def test_rotation_ring(self) -> None:
        self.ss.render(slides("/a.png", "/b.png", "/c.png"))
        self.assertEqual(self.ss.state, SlideState.ROTATING)
        self.assertEqual(self.active(), 0)
        seen = []
        for _ in range(3):
            advance(self.sched, self.clock, 5.0)
            seen.append(self.active())
        self.assertEqual(seen, [1, 2, 0])
        self.assertEqual(sum(s.active for s in self.display.slides), 1)

    def test_identical_poll_keeps_rotation(self) -> None:
        self.ss.render(slides("/a.png", "/b.png"))
        timer = self.ss.timer
        advance(self.sched, self.clock, 5.0)
        self.assertEqual(self.active(), 1)

        self.assertFalse(self.ss.render(slides("/a.png", "/b.png")))
        self.assertIs(self.ss.timer, timer)
        self.assertEqual(self.active(), 1)
        self.assertEqual(len(self.sched.active_timers()), 1)

    def test_changed_set_rebuilds_with_one_timer(self) -> None:
        self.ss.render(slides("/a.png", "/b.png"))
        old = self.ss.timer
        advance(self.sched, self.clock, 5.0)
        self.assertTrue(self.ss.render(slides("/a.png", "/c.png")))
        self.assertFalse(old.active)
        self.assertEqual(self.active(), 0)
        self.assertEqual(len(self.sched.active_timers()), 1)

    def test_dropping_to_idle_cancels_timer(self) -> None:
        self.ss.render(slides("/a.png", "/b.png"))
        self.ss.render([])
        self.assertEqual(self.sched.active_timers(), [])
        self.assertEqual(self.ss.state, SlideState.IDLE)

    def test_slide_key(self) -> None:
        items = slides("/a.png", "/b.png") + [item("slideshow", title="no image"),
                                              item("news", title="n", image_url="/n.png")]
        self.assertEqual(slide_key(items), ("/a.png", "/b.png"))
        self.assertNotEqual(slide_key(slides("/b.png", "/a.png")),
                            slide_key(slides("/a.png", "/b.png")))

    def test_dated_slides_still_shown(self) -> None:
        old = item("slideshow", image_url="/old.png",
                   end_date=MONDAY - datetime.timedelta(days=30))
        self.ss.render([old])
        self.assertEqual(self.ss.state, SlideState.SINGLE)
        self.assertIsNone(self.display.slide_placeholder)


if __name__ == "__main__":
    unittest.main()
