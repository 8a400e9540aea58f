# =========  video_player.py  =========
"""
GStreamer-backed VideoPlayer for the signage display.

Public API
----------
load(uri)        point the pipeline at a new source (http(s) URL or file)
play()           start playback; raises MediaPlaybackBlocked on refusal
decode_frame()   → latest frame (HxWx3 uint8) or None before the first one
set_volume(0.0-1.0)
close() / stop()
Properties
----------
.uri   → current source
.sar   → sample-aspect ratio
.failed → True after a pipeline error, until the next load()

The source loops: end-of-stream seeks back to the start.
"""
import logging
import os
import queue
import threading

import gi
import numpy as np
gi.require_version("Gst", "1.0")
from gi.repository import GLib, Gst

from errors import MediaPlaybackBlocked

log = logging.getLogger(__name__)


def _to_uri(src: str) -> str:
    if "://" in src:
        return src
    return Gst.filename_to_uri(os.path.abspath(src))


# ────────────────────────────────────────────────────────────────────────────
class VideoPlayer:
    def __init__(self, muted: bool = True):
        Gst.init(None)

        self.player = Gst.ElementFactory.make("playbin", "player")
        self.player.set_property("video-sink", self._build_sink())
        self.player.set_property("audio-sink",
                                 Gst.ElementFactory.make("autoaudiosink", "aud"))
        # signage boards usually run silent, like a muted <video autoplay>
        self.set_volume(0.0 if muted else 1.0)

        # state
        self._q: "queue.Queue[tuple[bytes, int, int]]" = queue.Queue(maxsize=1)
        self._last = None
        self.sar = 1.0
        self.uri = ""
        self.failed = False

        # bus watch in a side loop
        self._ml = GLib.MainLoop()
        bus = self.player.get_bus()
        bus.add_signal_watch()
        bus.connect("message", self._on_bus_msg)
        self._ml_thread = threading.Thread(target=self._ml.run, daemon=True)
        self._ml_thread.start()

    # ── sink ────────────────────────────────────────────────────────────────
    def _build_sink(self):
        """RGB appsink; newest frame wins."""
        vs = Gst.ElementFactory.make("appsink", "vsink")
        vs.set_property("emit-signals", True)
        vs.set_property("max-buffers", 2)
        vs.set_property("drop", True)
        vs.set_property("sync", True)
        vs.set_property("caps", Gst.Caps.from_string("video/x-raw,format=RGB"))
        vs.connect("new-sample", self._on_sample)
        return vs

    # ── public API ──────────────────────────────────────────────────────────
    def load(self, src: str) -> None:
        self.player.set_state(Gst.State.NULL)
        while not self._q.empty():
            self._q.get_nowait()
        self._last = None
        self.uri = _to_uri(src)
        self.failed = False
        self.player.set_property("uri", self.uri)
        self.player.set_state(Gst.State.PAUSED)

    def play(self) -> None:
        if not self.uri:
            raise MediaPlaybackBlocked("no source loaded")
        ret = self.player.set_state(Gst.State.PLAYING)
        if ret == Gst.StateChangeReturn.FAILURE:
            raise MediaPlaybackBlocked(f"pipeline refused PLAYING for {self.uri}")

    def decode_frame(self):
        item = None
        while True:
            try:
                item = self._q.get_nowait()
            except queue.Empty:
                break
        if item is not None:
            self._last = self._bytes_to_arr(*item)
        return self._last

    def set_volume(self, vol: float):
        self.player.set_property("volume", max(0.0, min(1.0, vol)))

    def close(self):
        self.player.set_state(Gst.State.NULL)
        if self._ml.is_running():
            self._ml.quit()
        if self._ml_thread and threading.current_thread() is not self._ml_thread:
            self._ml_thread.join(timeout=0.5)
        self.uri = ""

    stop = close  # alias

    # ── internals ───────────────────────────────────────────────────────────
    @staticmethod
    def _bytes_to_arr(data: bytes, w: int, h: int):
        # rows may be padded to a 4-byte stride
        stride = len(data) // h
        rows = np.frombuffer(data, np.uint8).reshape((h, stride))
        return np.ascontiguousarray(rows[:, : w * 3].reshape((h, w, 3)))

    def _on_sample(self, sink):
        samp = sink.emit("pull-sample")
        if samp:
            s = samp.get_caps().get_structure(0)
            w, h = s.get_int("width")[1], s.get_int("height")[1]
            if s.has_field("pixel-aspect-ratio"):
                num, den = s.get_fraction("pixel-aspect-ratio")[-2:]
                self.sar = num / den if den else 1.0
            buf = samp.get_buffer()
            ok, mi = buf.map(Gst.MapFlags.READ)
            if ok:
                try:
                    self._q.put_nowait((bytes(mi.data), w, h))
                except queue.Full:
                    pass
                buf.unmap(mi)
        return Gst.FlowReturn.OK

    def _on_bus_msg(self, bus, msg):
        if msg.type == Gst.MessageType.EOS:
            self.player.seek_simple(Gst.Format.TIME, Gst.SeekFlags.FLUSH, 0)
        elif msg.type == Gst.MessageType.ERROR:
            err, dbg = msg.parse_error()
            log.error("GStreamer error on %s: %s (%s)", self.uri, err, dbg)
            self.failed = True
            self.player.set_state(Gst.State.NULL)
        return True
