"""Sea route synthesis.

A route is built by delegating to a router callable (an HTTP maritime router,
the rule-based chokepoint router, or anything with the same shape), bounding
the resulting polyline to a point budget and pinning the endpoints to the
exact requested coordinates. A failed router degrades to a straight
origin → destination route; synthesis itself never raises.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar, Union

from ...models.domain import Coordinate, Route, Waypoint, WaypointKind
from .regions import plan_via_chokepoints

DEFAULT_MAX_POINTS = 80

RoutePoint = Union[Coordinate, Waypoint]
RouteProvider = Callable[[Coordinate, Coordinate], Optional[Sequence[RoutePoint]]]

T = TypeVar("T")


@dataclass(frozen=True)
class RouteOutcome:
    """Synthesized route plus how it was obtained.

    ``source`` is ``"router"`` when the router's polyline was used and
    ``"fallback"`` when the straight two-point route was substituted;
    ``error`` carries the router failure in that case.
    """

    route: Route
    source: str
    error: Optional[str] = None
    raw_point_count: int = 0

    @property
    def degraded(self) -> bool:
        return self.source == "fallback"


def downsample(points: Sequence[T], max_points: int = DEFAULT_MAX_POINTS) -> list[T]:
    """Fixed-stride sample that always keeps the first and last point."""

    count = len(points)
    if count == 0:
        return []
    stride = max(1, math.ceil(count / max_points))
    return [point for index, point in enumerate(points) if index % stride == 0 or index == count - 1]


def _coordinate_of(point: RoutePoint) -> Coordinate:
    return point.coordinate if isinstance(point, Waypoint) else point


def _label_route(
    points: Sequence[RoutePoint],
    origin: Coordinate,
    destination: Coordinate,
    origin_name: Optional[str],
    destination_name: Optional[str],
) -> Route:
    last = len(points) - 1
    waypoints: list[Waypoint] = []
    for index, point in enumerate(points):
        if index == 0:
            waypoints.append(Waypoint(origin, origin_name or "Origin", WaypointKind.ORIGIN))
        elif index == last:
            waypoints.append(Waypoint(destination, destination_name or "Destination", WaypointKind.DESTINATION))
        else:
            name = point.display_name if isinstance(point, Waypoint) else f"Waypoint {index}"
            waypoints.append(Waypoint(_coordinate_of(point), name, WaypointKind.WAYPOINT))
    return tuple(waypoints)


def pin_endpoints(
    route: Route,
    origin: Coordinate,
    destination: Coordinate,
    origin_name: Optional[str] = None,
    destination_name: Optional[str] = None,
) -> Route:
    """Replace the first and last points of ``route`` with the requested endpoints and names."""

    if len(route) < 2:
        return route
    return (
        Waypoint(origin, origin_name or "Origin", WaypointKind.ORIGIN),
        *route[1:-1],
        Waypoint(destination, destination_name or "Destination", WaypointKind.DESTINATION),
    )


def straight_route(
    origin: Coordinate,
    destination: Coordinate,
    origin_name: Optional[str] = None,
    destination_name: Optional[str] = None,
) -> Route:
    return _label_route([origin, destination], origin, destination, origin_name, destination_name)


def synthesize_route_with_outcome(
    origin: Coordinate,
    destination: Coordinate,
    origin_name: Optional[str] = None,
    destination_name: Optional[str] = None,
    router: Optional[RouteProvider] = None,
    max_points: int = DEFAULT_MAX_POINTS,
) -> RouteOutcome:
    provider = router or plan_via_chokepoints
    try:
        points = provider(origin, destination)
    except Exception as exc:  # router failures are reported through the outcome
        return RouteOutcome(
            route=straight_route(origin, destination, origin_name, destination_name),
            source="fallback",
            error=f"{type(exc).__name__}: {exc}",
        )

    if not points or len(points) < 2:
        return RouteOutcome(
            route=straight_route(origin, destination, origin_name, destination_name),
            source="fallback",
            error=f"router returned {len(points) if points else 0} point(s)",
            raw_point_count=len(points) if points else 0,
        )

    sampled = downsample(list(points), max_points)
    route = _label_route(sampled, origin, destination, origin_name, destination_name)
    return RouteOutcome(route=route, source="router", raw_point_count=len(points))


def synthesize_route(
    origin: Coordinate,
    destination: Coordinate,
    origin_name: Optional[str] = None,
    destination_name: Optional[str] = None,
    router: Optional[RouteProvider] = None,
    max_points: int = DEFAULT_MAX_POINTS,
) -> Route:
    """Build a route from ``origin`` to ``destination``.

    The first and last waypoints always sit exactly on the requested
    coordinates, whatever the router snapped to.
    """
    return synthesize_route_with_outcome(
        origin,
        destination,
        origin_name=origin_name,
        destination_name=destination_name,
        router=router,
        max_points=max_points,
    ).route
