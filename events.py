#!/usr/bin/env python3
"""
events.py  – central hub

• Translates raw Pygame events to high-level action dicts.
• Exposes a thread-safe queue so *any* external source can inject
  the same actions (web remote, GPIO, HID, etc.).

Actions
-------
{"type": "quit"}
{"type": "refresh"}             poll the backend now
{"type": "toggle_overlay"}      diagnostics panel on/off
{"type": "toggle_fullscreen"}
"""

from __future__ import annotations
import queue
from pygame.locals import *

Action = dict      # alias for readability

ACTIONS = ("quit", "refresh", "toggle_overlay", "toggle_fullscreen")


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard path ────────────────────────────────────────────
    @classmethod
    def handle(cls, event) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls._translate_pygame(event)
        if act:
            cls._fifo.put(act)

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "refresh"})
        """
        if action.get("type") not in ACTIONS:
            raise ValueError(f"unknown action {action!r}")
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def clear(cls) -> None:
        while cls.poll() is not None:
            pass

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def _translate_pygame(event) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}

        if event.type == KEYDOWN:
            if event.key in (K_ESCAPE, K_q):
                return {"type": "quit"}
            if event.key == K_i:
                return {"type": "toggle_overlay"}
            if event.key in (K_r, K_F5):
                return {"type": "refresh"}
            if event.key == K_f:
                return {"type": "toggle_fullscreen"}

        return None
