import math

import pytest

from seatrack.models.domain import Coordinate
from seatrack.services.geospatial import (
    distance_km,
    haversine_km,
    km_to_nm,
    midpoint,
    round_half_up,
    route_distance_km,
    within_radius,
)

PORTS = [
    Coordinate(22.5726, 88.3639),
    Coordinate(36.8508, -76.2859),
    Coordinate(1.2897, 103.8501),
    Coordinate(51.9244, 4.4777),
    Coordinate(-33.9249, 18.4241),
]


def test_haversine_zero_for_same_point():
    assert haversine_km(10.0, 20.0, 10.0, 20.0) == 0.0


def test_one_degree_of_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(6371.0 * math.pi / 180.0)


def test_distance_is_symmetric():
    for a in PORTS:
        for b in PORTS:
            assert distance_km(a, b) == pytest.approx(distance_km(b, a))


def test_triangle_inequality():
    for a in PORTS:
        for b in PORTS:
            for c in PORTS:
                assert distance_km(a, c) <= distance_km(a, b) + distance_km(b, c) + 1e-6


def test_route_distance_sums_legs():
    points = [Coordinate(0.0, 0.0), Coordinate(0.0, 1.0), Coordinate(0.0, 2.0)]
    assert route_distance_km(points) == pytest.approx(2 * haversine_km(0.0, 0.0, 0.0, 1.0))
    assert route_distance_km(points[:1]) == 0.0
    assert route_distance_km([]) == 0.0


def test_within_radius_boundary():
    center = Coordinate(0.0, 0.0)
    near = Coordinate(0.0, 0.5)
    radius_m = distance_km(center, near) * 1000.0
    assert within_radius(near, center, radius_m + 1)
    assert not within_radius(near, center, radius_m - 1)


def test_km_to_nm():
    assert km_to_nm(100.0) == pytest.approx(53.9957)


def test_midpoint():
    assert midpoint(Coordinate(0.0, 0.0), Coordinate(10.0, 20.0)) == Coordinate(5.0, 10.0)


def test_round_half_up():
    assert round_half_up(0.5) == 1.0
    assert round_half_up(1.5) == 2.0
    assert round_half_up(2.5) == 3.0
    assert round_half_up(2.4) == 2.0
    assert round_half_up(7.25, 1) == 7.3
