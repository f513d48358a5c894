"""HTTP client for current marine conditions (Open-Meteo marine API)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from ...config import settings
from ...models.domain import MarineConditions
from ..cache import TTLCache

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "wave_height,wave_direction,wind_speed_10m,wind_direction_10m"


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_marine_response(data: dict[str, Any], fetched_at: Optional[datetime] = None) -> Optional[MarineConditions]:
    current = data.get("current")
    if not isinstance(current, dict):
        return None
    return MarineConditions(
        wind_speed_ms=_as_float(current.get("wind_speed_10m")),
        wind_direction_deg=_as_float(current.get("wind_direction_10m")),
        wave_height_m=_as_float(current.get("wave_height")),
        wave_direction_deg=_as_float(current.get("wave_direction")),
        fetched_at=fetched_at or datetime.now(timezone.utc),
    )


class MarineWeatherClient:
    """Fetches wind and wave conditions, caching results per rounded coordinate.

    A failed request falls back to the last cached reading for the same
    location (even if expired) and otherwise returns ``None``; it never raises.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        cache: TTLCache[MarineConditions] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.marine_weather_base_url
        self.timeout = timeout if timeout is not None else settings.weather_timeout_seconds
        self.cache: TTLCache[MarineConditions] = cache or TTLCache(
            ttl_seconds=settings.weather_cache_ttl_seconds,
            max_entries=settings.weather_cache_max_entries,
        )
        self._transport = transport

    @staticmethod
    def cache_key(lat: float, lng: float) -> tuple[float, float]:
        return (round(lat, 2), round(lng, 2))

    def _request(self, lat: float, lng: float) -> Optional[MarineConditions]:
        params = {
            "latitude": lat,
            "longitude": lng,
            "current": CURRENT_FIELDS,
            "wind_speed_unit": "ms",
            "timezone": "UTC",
        }
        with httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport) as client:
            response = client.get(self.base_url, params=params)
            response.raise_for_status()
            return parse_marine_response(response.json())

    def current_conditions(self, lat: float, lng: float) -> Optional[MarineConditions]:
        key = self.cache_key(lat, lng)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            conditions = self._request(lat, lng)
        except (httpx.HTTPError, ValueError) as exc:
            stale = self.cache.get_stale(key)
            logger.warning(
                f"Marine conditions unavailable for ({lat:.3f}, {lng:.3f}): {exc}"
                + (" - serving cached reading" if stale else "")
            )
            return stale

        if conditions is not None:
            self.cache.set(key, conditions)
        return conditions


def check_health(base_url: str | None = None) -> bool:
    """Check the weather provider at a fixed open-ocean coordinate."""

    client = MarineWeatherClient(base_url=base_url, timeout=5.0, cache=TTLCache(ttl_seconds=1))
    try:
        return client._request(0.0, -30.0) is not None
    except (httpx.HTTPError, ValueError):
        return False
