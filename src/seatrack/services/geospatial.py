"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0
KM_TO_NM = 0.539957


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres."""

    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def route_distance_km(points: Iterable[Coordinate]) -> float:
    """Sum of the haversine legs between consecutive points."""

    total = 0.0
    previous: Coordinate | None = None
    for point in points:
        if previous is not None:
            total += distance_km(previous, point)
        previous = point
    return total


def km_to_nm(kilometres: float) -> float:
    return kilometres * KM_TO_NM


def within_radius(point: Coordinate, center: Coordinate, radius_m: float) -> bool:
    """Return True if ``point`` lies inside the circle of ``radius_m`` metres around ``center``."""

    return distance_km(point, center) * 1000.0 <= radius_m


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Arithmetic midpoint of two coordinates (used only as a coarse route hint)."""

    return Coordinate(lat=(a.lat + b.lat) / 2, lng=(a.lng + b.lng) / 2)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upwards (2.5 -> 3) instead of to the nearest even digit."""

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
