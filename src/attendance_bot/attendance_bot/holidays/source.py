"""HTTP client for the yearly public-holiday calendar."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

DEFAULT_HOLIDAY_SOURCE_URL = "https://cdn.jsdelivr.net/gh/ruyut/TaiwanCalendar/data/{year}.json"


class HolidaySource(Protocol):
    def fetch_year(self, year: int) -> list[dict[str, Any]]:
        """Return the raw calendar entries for ``year``; raise on failure."""
        raise NotImplementedError


class HttpHolidaySource:
    """Fetches ``[{"date": ..., "isHoliday": ..., "description": ...}, ...]`` per year."""

    def __init__(self, url_template: str = DEFAULT_HOLIDAY_SOURCE_URL, timeout: float = 10.0) -> None:
        self._url_template = url_template
        self._timeout = timeout

    def fetch_year(self, year: int) -> list[dict[str, Any]]:
        response = httpx.get(self._url_template.format(year=year), timeout=self._timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected holiday payload for {year}: {type(data).__name__}")
        return [entry for entry in data if isinstance(entry, dict)]


__all__ = ["HolidaySource", "HttpHolidaySource", "DEFAULT_HOLIDAY_SOURCE_URL"]
