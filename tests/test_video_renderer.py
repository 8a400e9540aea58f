"""
Unit tests for the video renderer.

- same asset path polled twice → loaded once
- suffix comparison: absolute loaded URL matches relative content
- no video item → keep whatever is playing
- a refused play() is logged, never raised
- a failed pipeline is reloaded even when the path is unchanged
"""

import datetime
import unittest

from display import DisplayState
from helpers import FakePlayer, item
from video_renderer import VideoRenderer, pick_video, same_source

BASE = "http://signage.local:3000"


class TestVideoRenderer(unittest.TestCase):
    def setUp(self) -> None:
        self.display = DisplayState()
        self.player = FakePlayer()
        self.vr = VideoRenderer(self.player, self.display, lambda p: BASE + p)

    def test_same_source_not_reloaded(self) -> None:
        items = [item("video", content="/v1.mp4")]
        self.assertTrue(self.vr.render(items))
        self.assertFalse(self.vr.render([item("video", content="/v1.mp4")]))
        self.assertEqual(self.player.loaded, [BASE + "/v1.mp4"])
        self.assertEqual(self.display.video_loads, 1)
        self.assertEqual(self.player.plays, 1)

    def test_new_source_reloads(self) -> None:
        self.vr.render([item("video", content="/v1.mp4")])
        self.vr.render([item("video", content="/v2.mp4")])
        self.assertEqual(self.player.loaded, [BASE + "/v1.mp4", BASE + "/v2.mp4"])
        self.assertEqual(self.display.video_src, BASE + "/v2.mp4")

    def test_absent_video_keeps_current(self) -> None:
        self.vr.render([item("video", content="/v1.mp4")])
        self.assertFalse(self.vr.render([item("news", title="n")]))
        self.assertFalse(self.vr.render([]))
        self.assertEqual(self.display.video_src, BASE + "/v1.mp4")
        self.assertEqual(len(self.player.loaded), 1)

    def test_empty_content_ignored(self) -> None:
        self.assertFalse(self.vr.render([item("video", content="")]))
        self.assertEqual(self.player.loaded, [])

    def test_blocked_playback_is_swallowed(self) -> None:
        self.player.block = True
        with self.assertLogs("video_renderer", level="WARNING"):
            self.assertTrue(self.vr.render([item("video", content="/v1.mp4")]))
        self.assertEqual(self.display.video_src, BASE + "/v1.mp4")
        # not retried on the next identical poll
        self.vr.render([item("video", content="/v1.mp4")])
        self.assertEqual(self.player.plays, 1)


    def test_failed_player_reloads_same_source(self) -> None:
        self.vr.render([item("video", content="/v1.mp4")])
        self.player.failed = True
        with self.assertLogs("video_renderer", level="WARNING"):
            self.assertTrue(self.vr.render([item("video", content="/v1.mp4")]))
        self.assertEqual(self.player.loaded, [BASE + "/v1.mp4"] * 2)
        self.assertEqual(self.player.plays, 2)
        self.assertFalse(self.player.failed)
        # healthy again: back to skipping identical polls
        self.assertFalse(self.vr.render([item("video", content="/v1.mp4")]))
        self.assertEqual(self.display.video_loads, 2)

class TestPickVideo(unittest.TestCase):
    def test_most_recent_wins(self) -> None:
        old = item("video", content="/old.mp4", created_at=datetime.datetime(2026, 1, 1))
        new = item("video", content="/new.mp4", created_at=datetime.datetime(2026, 5, 1))
        self.assertIs(pick_video([old, new]), new)
        self.assertIs(pick_video([new, old]), new)

    def test_tie_keeps_response_order(self) -> None:
        a = item("video", content="/a.mp4")
        b = item("video", content="/b.mp4")
        self.assertIs(pick_video([a, b]), a)

    def test_none_without_video(self) -> None:
        self.assertIsNone(pick_video([item("news", title="x")]))

    def test_same_source(self) -> None:
        self.assertTrue(same_source(BASE + "/uploads/1.mp4", "/uploads/1.mp4"))
        self.assertFalse(same_source("", "/uploads/1.mp4"))
        self.assertFalse(same_source(BASE + "/uploads/1.mp4", "/uploads/2.mp4"))


if __name__ == "__main__":
    unittest.main()
