"""
api_client.py – read-only client for the signage backend.

    GET /api/items                 → [ContentItem]
    GET /api/schedules?day=<Day>   → [ScheduleEntry], sorted by start_time
    GET /api/settings              → DisplaySettings (or {})

Transport problems surface as NetworkFailure, bad bodies as ParseFailure.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional
from urllib.parse import urljoin

import requests

import config
from errors import NetworkFailure, ParseFailure
from models import (ContentItem, DisplaySettings, ScheduleEntry,
                    parse_items, parse_schedule)

log = logging.getLogger(__name__)


class SignageAPI:
    def __init__(self,
                 base_url: str = config.BASE_URL,
                 session: Optional[requests.Session] = None,
                 timeout: float = config.REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    # ── URL helpers ─────────────────────────────────────────────────────────
    def resolve(self, path: str) -> str:
        """Absolute URL for an API path or a relative asset path."""
        return urljoin(self.base_url, path)

    def _api(self, name: str) -> str:
        return self.resolve(f"{config.API_PREFIX.strip('/')}/{name}")

    # ── transport ───────────────────────────────────────────────────────────
    def _get(self, url: str, **params) -> requests.Response:
        try:
            resp = self.session.get(url, params=params or None, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NetworkFailure(url, f"HTTP {status}", status) from e
        except requests.RequestException as e:
            raise NetworkFailure(url, type(e).__name__) from e
        return resp

    def _get_json(self, url: str, **params) -> Any:
        resp = self._get(url, **params)
        try:
            return resp.json()
        except ValueError as e:
            raise ParseFailure(f"{url}: invalid JSON ({e})") from e

    # ── endpoints ───────────────────────────────────────────────────────────
    def fetch_items(self) -> List[ContentItem]:
        return parse_items(self._get_json(self._api("items")))

    def fetch_schedule(self, day: str) -> List[ScheduleEntry]:
        return parse_schedule(self._get_json(self._api("schedules"), day=day))

    def fetch_settings(self) -> DisplaySettings:
        return DisplaySettings.from_json(self._get_json(self._api("settings")))

    def fetch_asset(self, path: str) -> bytes:
        """Raw bytes of an uploaded image (slides, logo)."""
        return self._get(self.resolve(path)).content
