"""Route progress tracking against a live position."""

from __future__ import annotations

from ...models.domain import Coordinate, Route, RouteSplit, Waypoint, WaypointKind
from ..geospatial import distance_km

CURRENT_POSITION_NAME = "Current Position"


def current_waypoint(position: Coordinate) -> Waypoint:
    return Waypoint(coordinate=position, display_name=CURRENT_POSITION_NAME, kind=WaypointKind.CURRENT)


def closest_point_index(route: Route, position: Coordinate) -> int:
    """Index of the route point nearest to ``position``; earliest index wins ties."""

    closest_index = 0
    min_distance = float("inf")
    for index, waypoint in enumerate(route):
        dist = distance_km(position, waypoint.coordinate)
        if dist < min_distance:
            min_distance = dist
            closest_index = index
    return closest_index


def split_by_position(route: Route, current: Coordinate) -> RouteSplit:
    """Partition ``route`` into completed and remaining legs around ``current``.

    Both halves contain the current position as a ``current`` waypoint:
    ``completed`` ends with it and ``remaining`` starts with it. Routes with
    fewer than two points are returned untouched as ``remaining``.
    """
    route = tuple(route)
    if len(route) < 2:
        return RouteSplit(completed=(), remaining=route, closest_index=None)

    closest_index = closest_point_index(route, current)
    marker = current_waypoint(current)
    completed = (*route[: closest_index + 1], marker)
    remaining = (marker, *route[closest_index + 1 :])
    return RouteSplit(completed=completed, remaining=remaining, closest_index=closest_index)
