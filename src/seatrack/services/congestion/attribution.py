"""Zone proximity checks and route delay attribution."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import (
    Coordinate,
    DelayAttribution,
    ProximityWarning,
    Route,
    RouteDelay,
    ZoneStatus,
)
from ..geospatial import distance_km, within_radius


def _attribution(status: ZoneStatus) -> DelayAttribution:
    return DelayAttribution(
        zone_id=status.zone.id,
        zone_name=status.zone.name,
        delay_minutes=status.delay_minutes,
        severity=status.severity,
    )


def proximity_warning(position: Coordinate, zones: Sequence[ZoneStatus]) -> Optional[ProximityWarning]:
    """Report the first zone (in the given order) whose radius contains ``position``.

    Overlapping zones are not ranked; only the first match is returned.
    """
    for status in zones:
        dist_km = distance_km(position, status.zone.center)
        if dist_km * 1000.0 <= status.zone.radius_m:
            return ProximityWarning(
                attribution=_attribution(status),
                distance_km=dist_km,
                description=status.zone.description,
                factors=status.zone.delay_factors,
                trend=status.condition.trend,
                warnings=status.condition.warnings,
                data_source=status.data_source,
            )
    return None


def attribute_route_delay(remaining: Route, zones: Sequence[ZoneStatus]) -> RouteDelay:
    """Sum the delay of every zone the route passes through, once per zone.

    Attributions are ordered by when the route first enters each zone.
    """
    if not remaining or not zones:
        return RouteDelay(total_delay_minutes=0)

    counted: set[str] = set()
    delays: list[DelayAttribution] = []
    for waypoint in remaining:
        for status in zones:
            zone = status.zone
            if zone.id in counted:
                continue
            if within_radius(waypoint.coordinate, zone.center, zone.radius_m):
                counted.add(zone.id)
                delays.append(_attribution(status))

    total = sum(item.delay_minutes for item in delays)
    return RouteDelay(total_delay_minutes=total, delays=tuple(delays))
