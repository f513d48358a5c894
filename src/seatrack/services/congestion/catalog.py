"""Reference catalog of maritime congestion zones.

Geometry never changes; only the dynamic severity of a zone is refreshed.
Catalog order matters: proximity warnings report the first containing zone.
"""

from __future__ import annotations

from ...models.domain import Coordinate, CongestionZone, DynamicSeverity


def _zone(
    zone_id: str,
    name: str,
    description: str,
    lat: float,
    lng: float,
    radius_m: float,
    base_delay: float,
    factors: tuple[str, ...],
    activity_bias: float = 0.0,
) -> CongestionZone:
    return CongestionZone(
        id=zone_id,
        name=name,
        description=description,
        center=Coordinate(lat=lat, lng=lng),
        radius_m=radius_m,
        severity_model=DynamicSeverity(base_delay_minutes=base_delay, activity_bias=activity_bias),
        delay_factors=factors,
    )


ZONE_CATALOG: tuple[CongestionZone, ...] = (
    _zone(
        "suez", "Suez Canal",
        "Major trade route connecting Mediterranean and Red Sea.",
        30.0, 32.3, 120_000, 30,
        ("Canal capacity", "Security situation", "Insurance costs"),
        activity_bias=0.25,
    ),
    _zone(
        "panama", "Panama Canal",
        "Critical Atlantic-Pacific transit point affected by water levels.",
        9.1, -79.7, 100_000, 60,
        ("Water levels", "Draft restrictions", "Booking availability"),
        activity_bias=0.2,
    ),
    _zone(
        "singapore", "Singapore Strait",
        "World's busiest transshipment hub.",
        1.2, 103.8, 80_000, 20,
        ("Transshipment volume", "Terminal operations"),
        activity_bias=0.1,
    ),
    _zone(
        "malacca", "Malacca Strait",
        "Major shipping lane connecting Indian and Pacific oceans.",
        2.5, 100.5, 100_000, 15,
        ("Traffic density", "Narrow passage"),
    ),
    _zone(
        "gibraltar", "Strait of Gibraltar",
        "Mediterranean-Atlantic gateway.",
        35.9, -5.5, 60_000, 10,
        ("Cross-traffic", "Weather conditions"),
    ),
    _zone(
        "cape", "Cape of Good Hope",
        "Alternative route for vessels avoiding Suez.",
        -34.3, 18.5, 150_000, 20,
        ("Weather patterns", "Rerouting traffic"),
    ),
    _zone(
        "hormuz", "Strait of Hormuz",
        "Critical oil tanker route in Persian Gulf.",
        26.5, 56.2, 80_000, 30,
        ("Geopolitical situation", "Security protocols"),
    ),
    _zone(
        "bab-el-mandeb", "Bab el-Mandeb",
        "Red Sea entrance strait.",
        12.6, 43.3, 100_000, 45,
        ("Security situation", "Insurance requirements"),
        activity_bias=0.25,
    ),
    _zone(
        "rotterdam", "Port of Rotterdam",
        "Europe's largest port.",
        51.9, 4.5, 40_000, 15,
        ("Terminal capacity", "Weather delays"),
    ),
    _zone(
        "shanghai", "Port of Shanghai",
        "World's busiest container port.",
        31.2, 121.8, 50_000, 25,
        ("Volume congestion", "Customs processing"),
        activity_bias=0.1,
    ),
    _zone(
        "la-lb", "LA/Long Beach",
        "Major US West Coast gateway.",
        33.75, -118.2, 45_000, 15,
        ("Berth availability", "Truck capacity"),
    ),
    _zone(
        "kolkata", "Kolkata Port",
        "Major Indian port serving Eastern India.",
        22.55, 88.35, 30_000, 10,
        ("Tidal restrictions", "River navigation"),
    ),
    _zone(
        "norfolk", "Port of Norfolk",
        "Major US East Coast container terminal.",
        36.85, -76.3, 30_000, 10,
        ("Terminal scheduling", "Rail connections"),
    ),
)


def get_zone(zone_id: str) -> CongestionZone | None:
    for zone in ZONE_CATALOG:
        if zone.id == zone_id:
            return zone
    return None
