"""Congestion zone (bottleneck) response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..models.domain import MarineConditions, ProximityWarning, ZoneStatus
from .base import CamelModel


class WeatherModel(CamelModel):
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    wave_height: Optional[float] = None
    wave_direction: Optional[float] = None
    fetched_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, weather: Optional[MarineConditions]) -> Optional["WeatherModel"]:
        if weather is None:
            return None
        return cls(
            wind_speed=weather.wind_speed_ms,
            wind_direction=weather.wind_direction_deg,
            wave_height=weather.wave_height_m,
            wave_direction=weather.wave_direction_deg,
            fetched_at=weather.fetched_at,
        )


class BottleneckModel(CamelModel):
    id: str
    name: str
    description: str
    lat: float
    lng: float
    radius_km: float
    severity: str
    estimated_delay_minutes: float
    activity_level: Optional[int] = None
    trend: str = "stable"
    warnings: List[str] = []
    delay_factors: List[str] = []
    data_source: str
    weather: Optional[WeatherModel] = None
    last_updated: Optional[datetime] = None

    @classmethod
    def from_domain(cls, status: ZoneStatus) -> "BottleneckModel":
        zone = status.zone
        return cls(
            id=zone.id,
            name=zone.name,
            description=zone.description,
            lat=zone.center.lat,
            lng=zone.center.lng,
            radius_km=zone.radius_km,
            severity=status.severity.value,
            estimated_delay_minutes=status.delay_minutes,
            activity_level=status.condition.activity_level,
            trend=status.condition.trend,
            warnings=list(status.condition.warnings),
            delay_factors=list(zone.delay_factors),
            data_source=status.data_source,
            weather=WeatherModel.from_domain(status.weather),
            last_updated=status.last_updated,
        )


class BottlenecksResponse(CamelModel):
    bottlenecks: List[BottleneckModel]
    count: int
    refreshed: bool = False


class ProximityModel(CamelModel):
    zone_id: str
    zone: str
    delay: int
    severity: str
    distance_km: float
    description: str
    factors: List[str] = []
    trend: str = "stable"
    warnings: List[str] = []
    data_source: str = "time-based"

    @classmethod
    def from_domain(cls, warning: Optional[ProximityWarning]) -> Optional["ProximityModel"]:
        if warning is None:
            return None
        attribution = warning.attribution
        return cls(
            zone_id=attribution.zone_id,
            zone=attribution.zone_name,
            delay=int(attribution.delay_minutes),
            severity=attribution.severity.value,
            distance_km=warning.distance_km,
            description=warning.description,
            factors=list(warning.factors),
            trend=warning.trend,
            warnings=list(warning.warnings),
            data_source=warning.data_source,
        )


class ProximityResponse(CamelModel):
    near_bottleneck: bool
    warning: Optional[ProximityModel] = None
