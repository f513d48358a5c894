"""Congestion monitor: refreshes dynamic zone severities from live weather."""

from __future__ import annotations

import functools
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import CongestionZone, MarineConditions, StaticSeverity, ZoneStatus
from ..weather.marine_client import MarineWeatherClient
from .catalog import ZONE_CATALOG
from .severity import resolve_zones

logger = logging.getLogger(__name__)


class CongestionMonitor:
    """Owns the zone catalog and the weather readings used to resolve it.

    ``snapshot()`` resolves zones from weather already in the client's cache
    and never blocks on the network; ``refresh()`` fetches weather for every
    dynamic zone in parallel first.
    """

    def __init__(
        self,
        zones: Sequence[CongestionZone] = ZONE_CATALOG,
        weather_client: Optional[MarineWeatherClient] = None,
        max_parallel_requests: int | None = None,
    ) -> None:
        self.zones = tuple(zones)
        self.weather_client = weather_client or MarineWeatherClient()
        self.max_parallel_requests = max_parallel_requests or settings.weather_max_parallel_requests

    def _dynamic_zones(self) -> list[CongestionZone]:
        return [zone for zone in self.zones if not isinstance(zone.severity_model, StaticSeverity)]

    def _cached_weather(self) -> dict[str, Optional[MarineConditions]]:
        client = self.weather_client
        readings: dict[str, Optional[MarineConditions]] = {}
        for zone in self._dynamic_zones():
            key = client.cache_key(zone.center.lat, zone.center.lng)
            readings[zone.id] = client.cache.get_stale(key)
        return readings

    def snapshot(self, at: Optional[datetime] = None) -> list[ZoneStatus]:
        return resolve_zones(self.zones, self._cached_weather(), at, weather_source="cached-weather")

    def refresh(self, at: Optional[datetime] = None) -> list[ZoneStatus]:
        zones = self._dynamic_zones()
        readings: dict[str, Optional[MarineConditions]] = {}
        if zones:
            start_time = time.time()
            workers = min(self.max_parallel_requests, len(zones))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self.weather_client.current_conditions, zone.center.lat, zone.center.lng): zone
                    for zone in zones
                }
                for future in as_completed(futures):
                    zone = futures[future]
                    readings[zone.id] = future.result()
            missing = [zone_id for zone_id, reading in readings.items() if reading is None]
            logger.info(
                f"Refreshed weather for {len(zones) - len(missing)}/{len(zones)} congestion zones "
                f"in {time.time() - start_time:.1f}s"
            )
            if missing:
                logger.warning(f"No weather for zones {', '.join(sorted(missing))}; using time-based severity")
        return resolve_zones(self.zones, readings, at)


@functools.lru_cache(maxsize=1)
def get_congestion_monitor() -> CongestionMonitor:
    return CongestionMonitor()
