import pytest

from seatrack.models.domain import Coordinate, Waypoint, WaypointKind
from seatrack.services.routing.regions import REGION_RULES, match_rule, plan_via_chokepoints
from seatrack.services.routing.synthesizer import (
    downsample,
    straight_route,
    synthesize_route,
    synthesize_route_with_outcome,
)

KOLKATA = Coordinate(22.5726, 88.3639)
NORFOLK = Coordinate(36.8508, -76.2859)
MUMBAI = Coordinate(19.0760, 72.8777)
NEW_YORK = Coordinate(40.7128, -74.0060)
DUBAI = Coordinate(25.2048, 55.2708)
SHANGHAI = Coordinate(31.2304, 121.4737)
COLOMBO = Coordinate(6.9271, 79.8612)
ROTTERDAM = Coordinate(51.9244, 4.4777)
LOS_ANGELES = Coordinate(33.7405, -118.2720)


def _failing_router(origin, destination):
    raise ConnectionError("routing service down")


def _polyline(count: int) -> list[Coordinate]:
    return [Coordinate(0.01 + i * 0.1, 0.02 + i * 0.1) for i in range(count)]


def test_router_failure_falls_back_to_straight_route():
    outcome = synthesize_route_with_outcome(KOLKATA, NORFOLK, "Kolkata", "Norfolk", router=_failing_router)

    assert outcome.degraded
    assert "routing service down" in outcome.error
    route = outcome.route
    assert len(route) == 2
    assert route[0] == Waypoint(KOLKATA, "Kolkata", WaypointKind.ORIGIN)
    assert route[1] == Waypoint(NORFOLK, "Norfolk", WaypointKind.DESTINATION)


@pytest.mark.parametrize("result", [None, [], [Coordinate(0.0, 0.0)]])
def test_too_few_router_points_fall_back(result):
    outcome = synthesize_route_with_outcome(KOLKATA, NORFOLK, router=lambda o, d: result)

    assert outcome.degraded
    assert [w.display_name for w in outcome.route] == ["Origin", "Destination"]


def test_downsample_keeps_endpoints_within_budget():
    points = list(range(200))
    sampled = downsample(points, 80)

    assert sampled[0] == 0
    assert sampled[-1] == 199
    assert len(sampled) <= 80
    assert sampled[:3] == [0, 3, 6]


def test_downsample_short_input_is_unchanged():
    assert downsample([1, 2, 3], 80) == [1, 2, 3]
    assert downsample([], 80) == []


def test_endpoints_pinned_to_requested_coordinates():
    origin = Coordinate(0.0, 0.0)
    destination = Coordinate(20.0, 20.0)
    route = synthesize_route(origin, destination, router=lambda o, d: _polyline(500), max_points=80)

    assert len(route) <= 80
    assert route[0].coordinate == origin
    assert route[-1].coordinate == destination
    assert route[0].kind is WaypointKind.ORIGIN
    assert route[-1].kind is WaypointKind.DESTINATION
    assert all(w.kind is WaypointKind.WAYPOINT for w in route[1:-1])
    assert route[1].display_name == "Waypoint 1"


def test_rule_based_router_routes_india_to_us_east_through_suez():
    rule = match_rule(MUMBAI, NEW_YORK)
    assert rule is not None and rule.name == "india_to_us_east"

    route = synthesize_route(MUMBAI, NEW_YORK, "Mumbai", "New York")
    names = [w.display_name for w in route]

    assert names[0] == "Mumbai"
    assert names[-1] == "New York"
    assert "Suez Canal (South)" in names
    assert names.index("Bab el-Mandeb") < names.index("Gibraltar") < names.index("Mid-Atlantic")
    assert len(route) == 7


REGION_CASES = [
    ("india_to_us_east", MUMBAI, NEW_YORK),
    ("gulf_to_us_east", DUBAI, NEW_YORK),
    ("asia_to_us_east", SHANGHAI, NEW_YORK),
    ("asia_to_us_west", SHANGHAI, LOS_ANGELES),
    ("gulf_to_europe", DUBAI, ROTTERDAM),
    ("india_to_europe", MUMBAI, ROTTERDAM),
    ("india_to_europe", COLOMBO, ROTTERDAM),
    ("asia_to_europe", SHANGHAI, ROTTERDAM),
    ("europe_to_india", ROTTERDAM, MUMBAI),
    ("europe_to_asia", ROTTERDAM, SHANGHAI),
]


def test_region_cases_cover_every_rule():
    assert {name for name, _, _ in REGION_CASES} == {rule.name for rule in REGION_RULES}


@pytest.mark.parametrize("expected, origin, destination", REGION_CASES)
def test_first_matching_rule(expected, origin, destination):
    rule = match_rule(origin, destination)
    assert rule is not None
    assert rule.name == expected


def test_india_to_europe_goes_straight_to_suez():
    route = synthesize_route(MUMBAI, ROTTERDAM, "Mumbai", "Rotterdam")

    assert [w.display_name for w in route] == [
        "Mumbai",
        "Bab el-Mandeb",
        "Suez Canal (South)",
        "Suez Canal (North)",
        "Gibraltar",
        "Rotterdam",
    ]


def test_europe_to_india_does_not_detour_through_singapore():
    names = [w.display_name for w in synthesize_route(ROTTERDAM, COLOMBO)]

    assert "Singapore" not in names
    assert "Malacca Strait" not in names
    assert names[-2] == "Bab el-Mandeb"


def test_unmatched_regions_use_midpoint_hint():
    sydney = Coordinate(-33.8688, 151.2093)
    auckland = Coordinate(-36.8485, 174.7633)

    points = plan_via_chokepoints(sydney, auckland)
    assert [p.display_name for p in points] == ["Origin", "En Route", "Destination"]

    route = synthesize_route(sydney, auckland)
    assert route[1].display_name == "En Route"
    assert route[1].lat == pytest.approx((sydney.lat + auckland.lat) / 2)


def test_straight_route_default_names():
    route = straight_route(KOLKATA, NORFOLK)
    assert [w.to_dict()["name"] for w in route] == ["Origin", "Destination"]
    assert route[0].to_dict() == {"lat": KOLKATA.lat, "lng": KOLKATA.lng, "name": "Origin", "type": "origin"}
