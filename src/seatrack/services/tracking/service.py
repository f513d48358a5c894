"""Vessel tracking service.

Keeps the registry of tracked vessels, merges incoming position reports,
recomputes route progress and arrival estimates, and notifies per-vessel
subscribers after every update.
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ...config import settings
from ...models.domain import (
    ArrivalEstimate,
    Coordinate,
    MarineConditions,
    ProximityWarning,
    Route,
    Waypoint,
    ZoneStatus,
)
from ..carriers import CarrierMatch, detect_carrier
from ..congestion.attribution import proximity_warning
from ..congestion.monitor import CongestionMonitor, get_congestion_monitor
from ..eta.estimator import estimate_arrival
from ..routing.progress import split_by_position
from ..routing.service import RouteService, get_route_service
from .ais import PositionReport, parse_ais_message
from .subscriptions import Subscriber, SubscriptionRegistry

logger = logging.getLogger(__name__)

SIMULATED_PREFIX = "SIM"

WeatherLookup = Callable[[float, float], Optional[MarineConditions]]


class VesselNotFoundError(KeyError):
    """Raised when an operation references an MMSI that is not tracked."""


@dataclass(slots=True)
class TrackedVessel:
    mmsi: str
    name: Optional[str] = None
    vessel_type: Optional[str] = None
    origin_name: Optional[str] = None
    origin: Optional[Coordinate] = None
    destination_name: Optional[str] = None
    destination: Optional[Coordinate] = None
    position: Optional[Coordinate] = None
    speed_knots: Optional[float] = None
    course_deg: Optional[float] = None
    heading_deg: Optional[float] = None
    route: Route = ()
    estimate: Optional[ArrivalEstimate] = None
    proximity: Optional[ProximityWarning] = None
    weather: Optional[MarineConditions] = None
    carrier: Optional[CarrierMatch] = None
    bl_number: Optional[str] = None
    voyage: Optional[str] = None
    registered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def next_waypoint(self) -> Optional[Waypoint]:
        """First route point still ahead of the vessel (or after the origin when no position is known)."""

        if len(self.route) < 2:
            return None
        if self.position is None:
            return self.route[1]
        remaining = split_by_position(self.route, self.position).remaining
        return remaining[1] if len(remaining) > 1 else None

    @property
    def is_simulated(self) -> bool:
        return self.mmsi.upper().startswith(SIMULATED_PREFIX)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class VesselTracker:
    def __init__(
        self,
        route_service: Optional[RouteService] = None,
        congestion_monitor: Optional[CongestionMonitor] = None,
        weather_lookup: Optional[WeatherLookup] = None,
        subscriptions: Optional[SubscriptionRegistry] = None,
        default_speed_knots: float | None = None,
        max_ais_subscriptions: int | None = None,
    ) -> None:
        self.route_service = route_service or RouteService()
        self.congestion_monitor = congestion_monitor or CongestionMonitor()
        self.weather_lookup = weather_lookup
        self.subscriptions = subscriptions or SubscriptionRegistry()
        self.default_speed_knots = default_speed_knots or settings.default_speed_knots
        self.max_ais_subscriptions = max_ais_subscriptions or settings.max_ais_subscriptions
        self._vessels: dict[str, TrackedVessel] = {}
        self._ais_mmsi: set[str] = set()
        self._lock = threading.RLock()
        self._vessel_locks: dict[str, threading.Lock] = {}

    def _vessel_lock(self, mmsi: str) -> threading.Lock:
        """Serializes read-modify-write cycles on one vessel without blocking the registry."""

        with self._lock:
            return self._vessel_locks.setdefault(mmsi, threading.Lock())

    def register(
        self,
        mmsi: str,
        *,
        name: Optional[str] = None,
        vessel_type: Optional[str] = None,
        origin_name: Optional[str] = None,
        origin: Optional[Coordinate] = None,
        destination_name: Optional[str] = None,
        destination: Optional[Coordinate] = None,
        position: Optional[Coordinate] = None,
        speed_knots: Optional[float] = None,
        bl_number: Optional[str] = None,
        carrier_name: Optional[str] = None,
        container_number: Optional[str] = None,
        voyage: Optional[str] = None,
    ) -> TrackedVessel:
        key = str(mmsi).strip()
        if not key:
            raise ValueError("MMSI is required to track a vessel.")

        timestamp = _now()
        vessel = TrackedVessel(
            mmsi=key,
            name=name.strip().upper() if name else None,
            vessel_type=vessel_type,
            origin_name=origin_name,
            origin=origin,
            destination_name=destination_name,
            destination=destination,
            position=position,
            speed_knots=speed_knots,
            carrier=detect_carrier(bl_number, carrier_name, container_number),
            bl_number=bl_number,
            voyage=voyage,
            registered_at=timestamp,
            updated_at=timestamp,
        )
        with self._vessel_lock(key):
            self._recompute(vessel, self.congestion_monitor.snapshot())
            with self._lock:
                self._vessels[key] = vessel
                if not vessel.is_simulated:
                    self._ais_mmsi.add(key)
        logger.info(f"Tracking vessel {vessel.name or key} ({key}), route with {len(vessel.route)} points")
        self._publish(vessel)
        return vessel

    def get(self, mmsi: str) -> TrackedVessel:
        with self._lock:
            vessel = self._vessels.get(str(mmsi))
        if vessel is None:
            raise VesselNotFoundError(str(mmsi))
        return vessel

    def list(self) -> list[TrackedVessel]:
        with self._lock:
            return list(self._vessels.values())

    def search(self, query: str) -> list[TrackedVessel]:
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            vessel
            for vessel in self.list()
            if needle in (vessel.name or "").lower() or needle in vessel.mmsi
        ]

    def remove(self, mmsi: str) -> bool:
        key = str(mmsi)
        with self._vessel_lock(key), self._lock:
            removed = self._vessels.pop(key, None) is not None
            self._ais_mmsi.discard(key)
        if removed:
            self.subscriptions.unsubscribe_vessel(key)
            logger.info(f"Stopped tracking vessel {key}")
        return removed

    def ais_filter(self) -> list[str]:
        """MMSIs to request from the AIS feed, capped at the configured limit."""

        with self._lock:
            return sorted(self._ais_mmsi)[: self.max_ais_subscriptions]

    def apply_position(self, report: PositionReport) -> TrackedVessel:
        """Merge a position report into the vessel record, creating it if unknown."""

        with self._vessel_lock(report.mmsi):
            vessel = self._merge_report(report)
            self._recompute(vessel, self.congestion_monitor.snapshot())
            with self._lock:
                self._vessels[vessel.mmsi] = vessel
        self._publish(vessel)
        return vessel

    def _merge_report(self, report: PositionReport) -> TrackedVessel:
        with self._lock:
            existing = self._vessels.get(report.mmsi)
        vessel = replace(existing) if existing else TrackedVessel(mmsi=report.mmsi, registered_at=_now())

        if report.has_position:
            vessel.position = Coordinate(lat=report.latitude, lng=report.longitude)
        if report.speed_knots is not None:
            vessel.speed_knots = report.speed_knots
        if report.course_deg is not None:
            vessel.course_deg = report.course_deg
        if report.heading_deg is not None:
            vessel.heading_deg = report.heading_deg
        if report.name:
            vessel.name = report.name
        if report.ship_type:
            vessel.vessel_type = report.ship_type
        if report.destination and not vessel.destination_name:
            vessel.destination_name = report.destination
        vessel.updated_at = report.received_at or _now()
        return vessel

    def ingest_ais(self, message: dict[str, Any]) -> Optional[TrackedVessel]:
        report = parse_ais_message(message)
        if report is None:
            logger.debug("Ignoring AIS message without MMSI")
            return None
        return self.apply_position(report)

    def refresh_estimate(self, mmsi: str, *, with_weather: bool = False) -> TrackedVessel:
        """Recompute route progress and ETA, optionally fetching weather at the vessel position."""

        with self._vessel_lock(str(mmsi)):
            vessel = replace(self.get(mmsi))
            if with_weather and self.weather_lookup and vessel.position is not None:
                vessel.weather = self.weather_lookup(vessel.position.lat, vessel.position.lng)
            self._recompute(vessel, self.congestion_monitor.snapshot())
            with self._lock:
                self._vessels[vessel.mmsi] = vessel
        return vessel

    def _recompute(self, vessel: TrackedVessel, zones: list[ZoneStatus]) -> None:
        if vessel.position is not None:
            vessel.proximity = proximity_warning(vessel.position, zones)

        start = vessel.origin or vessel.position
        if start is None or vessel.destination is None:
            return

        vessel.route = self.route_service.calculate_route(
            start,
            vessel.destination,
            vessel.origin_name,
            vessel.destination_name,
        )
        if vessel.position is None:
            return

        vessel.estimate = estimate_arrival(
            vessel.route,
            vessel.position,
            vessel.speed_knots,
            vessel_type=vessel.vessel_type,
            weather=vessel.weather,
            zones=zones,
            default_speed_knots=self.default_speed_knots,
        )

    def subscribe(self, mmsi: str, callback: Subscriber) -> int:
        return self.subscriptions.subscribe(mmsi, callback)

    def unsubscribe(self, token: int) -> bool:
        return self.subscriptions.unsubscribe(token)

    def _publish(self, vessel: TrackedVessel) -> None:
        self.subscriptions.publish(vessel.mmsi, replace(vessel))


@functools.lru_cache(maxsize=1)
def get_tracker() -> VesselTracker:
    monitor = get_congestion_monitor()
    # Shares the monitor's weather cache
    weather_lookup = monitor.weather_client.current_conditions if settings.weather_adjusted_eta else None
    return VesselTracker(
        route_service=get_route_service(),
        congestion_monitor=monitor,
        weather_lookup=weather_lookup,
    )
