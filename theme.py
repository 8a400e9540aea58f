"""
theme.py – maps a settings snapshot onto the display theme.

Each present, valid field overwrites exactly one Theme property.  Absent,
empty or malformed values leave the previous value in place; the logo is
the exception, since a removed logo has to disappear.

Colours are hex only (``#rgb``, ``#rrggbb``, ``#rrggbbaa``), the form the
admin colour pickers produce.  CSS names and ``rgb()`` are treated as
malformed.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from display import DisplayState
from models import DisplaySettings

log = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

# settings field → Theme attribute
COLOR_FIELDS = {
    "color_bg_page":      "page_bg",
    "color_bg_marquee":   "ticker_bg",
    "color_text_marquee": "ticker_fg",
    "color_text_header":  "clock_fg",
}


def valid_color(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if not isinstance(value, str):
        log.warning("ignoring non-text colour %r", value)
        return None
    value = value.strip()
    if _HEX_RE.match(value):
        return value.lower()
    log.warning("ignoring malformed colour %r", value)
    return None


def parse_hex_color(value: str) -> tuple[int, int, int, int]:
    """``#rgb`` / ``#rrggbb`` / ``#rrggbbaa`` → (r, g, b, a)."""
    h = value.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) == 6:
        h += "ff"
    if len(h) != 8:
        raise ValueError(f"not a hex colour: {value!r}")
    r, g, b, a = (int(h[i:i + 2], 16) for i in range(0, 8, 2))
    return r, g, b, a


class SettingsApplier:
    def __init__(self, display: DisplayState):
        self.display = display

    def apply(self, settings: Optional[DisplaySettings]) -> None:
        if settings is None:
            return
        theme = self.display.theme

        for src, dst in COLOR_FIELDS.items():
            color = valid_color(getattr(settings, src))
            if color:
                setattr(theme, dst, color)

        if settings.school_name and isinstance(settings.school_name, str):
            theme.caption = settings.school_name

        theme.logo_url = settings.logo_url or None
