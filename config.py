# config.py
"""
Configuration settings for the signage display.

Every constant can be overridden from the environment with the same name
prefixed by ``SIGNAGE_`` (e.g. ``SIGNAGE_POLL_INTERVAL=30``).
"""
import os


def _env(name: str, default):
    raw = os.environ.get(f"SIGNAGE_{name}")
    if raw is None:
        return default
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, (int, float)):
        return type(default)(raw)
    return raw


FPS = 30

# ── Backend ────────────────────────────────────────────────────────────────

# Root of the signage backend; relative asset paths ("/uploads/x.mp4") resolve here
BASE_URL = _env("BASE_URL", "http://localhost:3000")
API_PREFIX = "/api"

# Seconds before an HTTP request is abandoned
REQUEST_TIMEOUT = _env("REQUEST_TIMEOUT", 10.0)

# ── Rotation cadence (seconds) ─────────────────────────────────────────────

POLL_INTERVAL  = _env("POLL_INTERVAL", 60.0)
SLIDE_INTERVAL = _env("SLIDE_INTERVAL", 5.0)
PAGE_INTERVAL  = _env("PAGE_INTERVAL", 8.0)
FADE_DELAY     = _env("FADE_DELAY", 0.5)    # each half of the schedule fade
CLOCK_INTERVAL = 1.0

# Schedule rows per page
PAGE_SIZE = _env("PAGE_SIZE", 5)

# ── Texts ──────────────────────────────────────────────────────────────────

TICKER_SEPARATOR   = "   |   "
SCHEDULE_TITLE     = _env("SCHEDULE_TITLE", "Jadwal Perkuliahan - {day}")
NO_SCHEDULE_TEXT   = _env("NO_SCHEDULE_TEXT", "Tidak ada jadwal kuliah hari ini.")
NO_SLIDES_TEXT     = _env("NO_SLIDES_TEXT", "No Images")
DEFAULT_CAPTION    = "Campus Information Center"

# Day names indexed Sunday-first. The API is always queried in English,
# the title is shown in the local table.
API_DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday",
                 "Thursday", "Friday", "Saturday")
LOCAL_DAY_NAMES = ("Minggu", "Senin", "Selasa", "Rabu",
                   "Kamis", "Jumat", "Sabtu")

# ── Theme defaults (before the first settings snapshot arrives) ────────────

DEFAULT_PAGE_BG   = "#f4f4f4"
DEFAULT_TICKER_BG = "#003366"
DEFAULT_TICKER_FG = "#ffffff"
DEFAULT_CLOCK_FG  = "#ffffff"

# ── Display settings ───────────────────────────────────────────────────────

FULLSCREEN = _env("FULLSCREEN", True)
WINDOWED_SIZE = (1280, 720)

# Ticker scroll speed in pixels per second
TICKER_SPEED = _env("TICKER_SPEED", 120.0)

# Show the diagnostics overlay (poll status) on start
SHOW_OVERLAYS = _env("SHOW_OVERLAYS", False)

# ── Web remote / logging ───────────────────────────────────────────────────

WEB_PORT = _env("WEB_PORT", 8080)
DIAG_REFRESH_INTERVAL = 1.0
LOG_FILE = _env("LOG_FILE", "runtime.log")
