"""Zone severity evaluation.

Dynamic zones combine a deterministic time-of-day / day-of-week activity
heuristic with live marine weather. Weather can only raise the severity the
activity heuristic established.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from ...models.domain import (
    CongestionZone,
    DynamicSeverity,
    MarineConditions,
    Severity,
    StaticSeverity,
    ZoneCondition,
    ZoneStatus,
)
from ..geospatial import round_half_up

BASE_ACTIVITY = 0.5
PEAK_HOURS_BONUS = 0.2
WEEKEND_PENALTY = 0.15
PEAK_WINDOWS_UTC = ((6, 10), (14, 18))

HIGH_ACTIVITY = 0.75
MEDIUM_ACTIVITY = 0.5


@dataclass(frozen=True)
class WeatherBand:
    threshold: float
    delay_minutes: int
    floor: Optional[Severity]
    warning: Optional[str]


# Strongest band first; the first band a reading reaches applies.
WIND_BANDS_MS = (
    WeatherBand(20.0, 90, Severity.HIGH, "Storm winds: {value:.0f} m/s"),
    WeatherBand(15.0, 45, Severity.MEDIUM, "Strong winds: {value:.0f} m/s"),
    WeatherBand(12.0, 15, None, "Moderate winds: {value:.0f} m/s"),
)
WAVE_BANDS_M = (
    WeatherBand(4.0, 60, Severity.HIGH, "High seas: {value:.1f}m waves"),
    WeatherBand(3.0, 30, Severity.MEDIUM, "Rough seas: {value:.1f}m waves"),
    WeatherBand(2.0, 10, None, None),
)


def _utc(at: Optional[datetime]) -> datetime:
    if at is None:
        return datetime.now(timezone.utc)
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at.astimezone(timezone.utc)


def activity_level(model: DynamicSeverity, at: Optional[datetime] = None) -> float:
    """Expected vessel activity in [0, 1] for the zone at ``at`` (UTC)."""

    moment = _utc(at)
    level = BASE_ACTIVITY
    if any(start <= moment.hour <= end for start, end in PEAK_WINDOWS_UTC):
        level += PEAK_HOURS_BONUS
    # Saturday=5, Sunday=6
    if moment.weekday() >= 5:
        level -= WEEKEND_PENALTY
    level += model.activity_bias
    return min(1.0, max(0.0, level))


def traffic_trend(at: Optional[datetime] = None) -> str:
    hour = _utc(at).hour
    if 4 <= hour <= 8:
        return "increasing"
    if 18 <= hour <= 22:
        return "decreasing"
    return "stable"


def match_band(reading: Optional[float], bands: Sequence[WeatherBand]) -> Optional[WeatherBand]:
    if reading is None:
        return None
    for band in bands:
        if reading >= band.threshold:
            return band
    return None


def evaluate_dynamic_severity(
    model: DynamicSeverity,
    weather: Optional[MarineConditions] = None,
    at: Optional[datetime] = None,
) -> ZoneCondition:
    base_delay = model.base_delay_minutes
    activity = activity_level(model, at)
    severity = Severity.LOW
    delay = base_delay
    warnings: list[str] = []

    if activity >= HIGH_ACTIVITY:
        severity = Severity.HIGH
        delay += round_half_up(base_delay * 0.5)
        warnings.append("High traffic period")
    elif activity >= MEDIUM_ACTIVITY:
        severity = Severity.MEDIUM
        delay += round_half_up(base_delay * 0.25)

    if weather is not None:
        readings = (
            (weather.wind_speed_ms, WIND_BANDS_MS),
            (weather.wave_height_m, WAVE_BANDS_M),
        )
        for reading, bands in readings:
            band = match_band(reading, bands)
            if band is None:
                continue
            delay += band.delay_minutes
            if band.floor is not None:
                severity = severity.escalate(band.floor)
            if band.warning:
                warnings.append(band.warning.format(value=reading))

    return ZoneCondition(
        severity=severity,
        estimated_delay_minutes=delay,
        activity_level=int(round_half_up(activity * 100)),
        trend=traffic_trend(at),
        warnings=tuple(warnings),
    )


def evaluate_zone(
    zone: CongestionZone,
    weather: Optional[MarineConditions] = None,
    at: Optional[datetime] = None,
) -> ZoneCondition:
    model = zone.severity_model
    if isinstance(model, StaticSeverity):
        return ZoneCondition(severity=model.severity, estimated_delay_minutes=model.estimated_delay_minutes)
    return evaluate_dynamic_severity(model, weather, at)


def resolve_zone(
    zone: CongestionZone,
    weather: Optional[MarineConditions] = None,
    at: Optional[datetime] = None,
    weather_source: str = "live-weather",
) -> ZoneStatus:
    moment = _utc(at)
    if isinstance(zone.severity_model, StaticSeverity):
        source = "static"
    elif weather is not None:
        source = weather_source
    else:
        source = "time-based"
    return ZoneStatus(
        zone=zone,
        condition=evaluate_zone(zone, weather, moment),
        weather=weather,
        data_source=source,
        last_updated=(weather.fetched_at if weather and weather.fetched_at else moment),
    )


def resolve_zones(
    zones: Sequence[CongestionZone],
    weather_by_zone: Optional[Mapping[str, Optional[MarineConditions]]] = None,
    at: Optional[datetime] = None,
    weather_source: str = "live-weather",
) -> list[ZoneStatus]:
    """Snapshot every zone at one evaluation moment, preserving catalog order.

    ``weather_source`` labels zones that have a reading: ``live-weather`` for a
    fresh fetch, ``cached-weather`` for readings served from the cache.
    """

    moment = _utc(at)
    lookup = weather_by_zone or {}
    return [resolve_zone(zone, lookup.get(zone.id), moment, weather_source) for zone in zones]
