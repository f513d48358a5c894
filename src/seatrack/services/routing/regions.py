"""Rule-based sea router built on known maritime chokepoints.

The router classifies origin and destination into coarse regions and splices
the chokepoints of the first matching rule between them. It is the
lower-fidelity substitute used when no maritime routing service is
configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ...models.domain import Coordinate, Waypoint, WaypointKind
from ..geospatial import midpoint


def _chokepoint(lat: float, lng: float, name: str) -> Waypoint:
    return Waypoint(coordinate=Coordinate(lat=lat, lng=lng), display_name=name, kind=WaypointKind.WAYPOINT)


CHOKEPOINTS: dict[str, Waypoint] = {
    "singapore": _chokepoint(1.2897, 103.8501, "Singapore"),
    "malacca_strait": _chokepoint(4.2105, 100.2808, "Malacca Strait"),
    "bab_el_mandeb": _chokepoint(12.5833, 43.3333, "Bab el-Mandeb"),
    "suez_south": _chokepoint(29.9511, 32.5503, "Suez Canal (South)"),
    "suez_north": _chokepoint(31.2653, 32.3019, "Suez Canal (North)"),
    "gibraltar": _chokepoint(35.9667, -5.5000, "Gibraltar"),
    "cape_of_good_hope": _chokepoint(-34.3568, 18.4740, "Cape of Good Hope"),
    "panama_atlantic": _chokepoint(9.3817, -79.9181, "Panama (Atlantic)"),
    "panama_pacific": _chokepoint(8.9500, -79.5667, "Panama (Pacific)"),
    "hormuz": _chokepoint(26.0, 56.0, "Strait of Hormuz"),
    "shanghai": _chokepoint(31.2304, 121.4737, "Shanghai"),
    "mid_atlantic": _chokepoint(38.0, -30.0, "Mid-Atlantic"),
    "north_pacific": _chokepoint(35.0, 150.0, "North Pacific"),
    "eastern_pacific": _chokepoint(40.0, -150.0, "Eastern Pacific"),
}


# Region predicates on a single coordinate

def in_asia(point: Coordinate) -> bool:
    return 60 < point.lng < 145


def in_south_asia(point: Coordinate) -> bool:
    # Indian subcontinent and Sri Lanka, west of the Malacca approaches
    return 60 < point.lng < 95


def in_gulf(point: Coordinate) -> bool:
    return 15 < point.lat < 32 and 45 < point.lng < 60


def in_europe(point: Coordinate) -> bool:
    return point.lat > 35 and -15 < point.lng < 35


def in_us_east(point: Coordinate) -> bool:
    return -85 < point.lng < -65 and 25 < point.lat < 45


def in_us_west(point: Coordinate) -> bool:
    return point.lng < -115 and 25 < point.lat < 50


def west_of_suez(point: Coordinate) -> bool:
    return point.lng < 30


RegionPredicate = Callable[[Coordinate, Coordinate], bool]


@dataclass(frozen=True)
class RegionRule:
    name: str
    matches: RegionPredicate
    via: tuple[str, ...]

    def waypoints(self) -> list[Waypoint]:
        return [CHOKEPOINTS[key] for key in self.via]


_SUEZ_WESTBOUND = ("bab_el_mandeb", "suez_south", "suez_north", "gibraltar")

# Evaluated in order; the first matching rule wins.
REGION_RULES: tuple[RegionRule, ...] = (
    RegionRule(
        name="india_to_us_east",
        matches=lambda o, d: in_south_asia(o) and in_us_east(d),
        via=(*_SUEZ_WESTBOUND, "mid_atlantic"),
    ),
    RegionRule(
        name="gulf_to_us_east",
        matches=lambda o, d: in_gulf(o) and in_us_east(d),
        via=("hormuz", *_SUEZ_WESTBOUND, "mid_atlantic"),
    ),
    RegionRule(
        name="asia_to_us_east",
        matches=lambda o, d: in_asia(o) and in_us_east(d),
        via=("singapore", "malacca_strait", *_SUEZ_WESTBOUND, "mid_atlantic"),
    ),
    RegionRule(
        name="asia_to_us_west",
        matches=lambda o, d: in_asia(o) and in_us_west(d),
        via=("shanghai", "north_pacific", "eastern_pacific"),
    ),
    RegionRule(
        name="gulf_to_europe",
        matches=lambda o, d: in_gulf(o) and in_europe(d),
        via=("hormuz", *_SUEZ_WESTBOUND),
    ),
    RegionRule(
        name="india_to_europe",
        matches=lambda o, d: in_south_asia(o) and in_europe(d),
        via=_SUEZ_WESTBOUND,
    ),
    RegionRule(
        name="asia_to_europe",
        matches=lambda o, d: in_asia(o) and in_europe(d),
        via=("singapore", "malacca_strait", *_SUEZ_WESTBOUND),
    ),
    RegionRule(
        name="europe_to_india",
        matches=lambda o, d: in_south_asia(d) and west_of_suez(o),
        via=("gibraltar", "suez_north", "suez_south", "bab_el_mandeb"),
    ),
    RegionRule(
        name="europe_to_asia",
        matches=lambda o, d: in_asia(d) and west_of_suez(o),
        via=("gibraltar", "suez_north", "suez_south", "bab_el_mandeb", "singapore"),
    ),
)


def match_rule(
    origin: Coordinate,
    destination: Coordinate,
    rules: Sequence[RegionRule] = REGION_RULES,
) -> RegionRule | None:
    for rule in rules:
        if rule.matches(origin, destination):
            return rule
    return None


def plan_via_chokepoints(origin: Coordinate, destination: Coordinate) -> list[Waypoint]:
    """Return origin, chokepoints and destination as a coarse sea route.

    Origin and destination are plain route points here; the synthesizer
    assigns the final names and kinds.
    """
    rule = match_rule(origin, destination)
    if rule is not None:
        via = rule.waypoints()
    else:
        via = [Waypoint(coordinate=midpoint(origin, destination), display_name="En Route")]

    start = Waypoint(coordinate=origin, display_name="Origin", kind=WaypointKind.ORIGIN)
    end = Waypoint(coordinate=destination, display_name="Destination", kind=WaypointKind.DESTINATION)
    return [start, *via, end]
