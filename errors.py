"""
errors.py – failure taxonomy for the display.

None of these are fatal: each is caught where it happens, logged, and the
display keeps showing its last good state.
"""

from __future__ import annotations


class SignageError(Exception):
    """Base class for every recoverable display failure."""


class NetworkFailure(SignageError):
    """Request rejected, timed out, or answered with a non-2xx status."""

    def __init__(self, url: str, reason: str, status: int | None = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"{url}: {reason}")


class ParseFailure(SignageError):
    """Response body was not valid JSON or not the expected shape."""


class MediaPlaybackBlocked(SignageError):
    """The media player refused to start playback."""
