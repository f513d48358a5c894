"""Arrival time estimation along the remaining part of a route."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from ...models.domain import ArrivalEstimate, Coordinate, MarineConditions, Route, ZoneStatus
from ..congestion.attribution import attribute_route_delay
from ..geospatial import km_to_nm, round_half_up, route_distance_km
from ..routing.progress import split_by_position

DEFAULT_SPEED_KNOTS = 12.0

# Matched in order by case-insensitive substring against the vessel type.
VESSEL_TYPE_SPEEDS: tuple[tuple[str, float], ...] = (
    ("container", 18.0),
    ("bulk", 13.0),
    ("tanker", 13.0),
)

WIND_THRESHOLD_MS = 15.0
WIND_RAMP_MS = 10.0
WIND_MAX_REDUCTION = 0.30
# Beaufort 10 and above: vessels heave to at minimum steerage speed.
# The factor steps from the wind ramp (0.7) straight down to the floor here.
STORM_WIND_MS = 25.0
WAVE_THRESHOLD_M = 2.0
WAVE_RAMP_M = 2.0
WAVE_MAX_REDUCTION = 0.20
MIN_SPEED_FACTOR = 0.5


def speed_for_vessel_type(vessel_type: Optional[str], default: float = DEFAULT_SPEED_KNOTS) -> float:
    if vessel_type:
        lowered = vessel_type.lower()
        for keyword, speed in VESSEL_TYPE_SPEEDS:
            if keyword in lowered:
                return speed
    return default


def resolve_speed(
    speed_knots: Optional[float],
    vessel_type: Optional[str] = None,
    default: float = DEFAULT_SPEED_KNOTS,
) -> float:
    """Reported speed when positive, otherwise the vessel-type average, otherwise ``default``."""

    if speed_knots is not None and speed_knots > 0:
        return float(speed_knots)
    return speed_for_vessel_type(vessel_type, default)


def weather_speed_factor(weather: Optional[MarineConditions]) -> float:
    """Multiplicative speed factor in [0.5, 1] for the given marine conditions."""

    if weather is None:
        return 1.0

    wind_factor = 1.0
    wind = weather.wind_speed_ms
    if wind is not None and wind >= STORM_WIND_MS:
        return MIN_SPEED_FACTOR
    if wind is not None and wind > WIND_THRESHOLD_MS:
        wind_factor -= WIND_MAX_REDUCTION * min(1.0, (wind - WIND_THRESHOLD_MS) / WIND_RAMP_MS)

    wave_factor = 1.0
    wave = weather.wave_height_m
    if wave is not None and wave > WAVE_THRESHOLD_M:
        wave_factor -= WAVE_MAX_REDUCTION * min(1.0, (wave - WAVE_THRESHOLD_M) / WAVE_RAMP_M)

    return max(MIN_SPEED_FACTOR, wind_factor * wave_factor)


def adjust_speed_for_weather(speed_knots: float, weather: Optional[MarineConditions]) -> float:
    return speed_knots * weather_speed_factor(weather)


def remaining_distance_nm(remaining: Route) -> float:
    if len(remaining) < 2:
        return 0.0
    return km_to_nm(route_distance_km(waypoint.coordinate for waypoint in remaining))


def estimate_arrival(
    route: Route,
    current_position: Coordinate,
    speed_knots: Optional[float],
    *,
    vessel_type: Optional[str] = None,
    weather: Optional[MarineConditions] = None,
    zones: Optional[Sequence[ZoneStatus]] = None,
    now: Optional[datetime] = None,
    default_speed_knots: float = DEFAULT_SPEED_KNOTS,
) -> ArrivalEstimate:
    """Estimate arrival for a vessel at ``current_position`` travelling along ``route``.

    Remaining distance is measured from the current position along the
    remaining route points. Speed falls back to the vessel-type average and is
    reduced for wind and waves; delay of every congestion zone on the
    remaining route is added once. A degenerate route yields a zero-distance
    estimate due now.
    """
    moment = now or datetime.now(timezone.utc)
    remaining = split_by_position(route, current_position).remaining

    distance_nm = remaining_distance_nm(remaining)
    base_speed = resolve_speed(speed_knots, vessel_type, default_speed_knots)
    effective_speed = adjust_speed_for_weather(base_speed, weather)

    hours = distance_nm / effective_speed if effective_speed > 0 else 0.0

    delay_minutes = 0.0
    passed = ()
    if zones and len(remaining) >= 2:
        route_delay = attribute_route_delay(remaining, zones)
        delay_minutes = route_delay.total_delay_minutes
        passed = route_delay.delays
        hours += delay_minutes / 60.0

    return ArrivalEstimate(
        eta=moment + timedelta(hours=hours),
        distance_remaining_nm=int(round_half_up(distance_nm)),
        hours_remaining=int(round_half_up(hours)),
        effective_speed_knots=round_half_up(effective_speed, 1),
        bottleneck_delay_minutes=int(round_half_up(delay_minutes)),
        bottlenecks_passed=passed,
    )
