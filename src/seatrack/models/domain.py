"""Domain models for routes, congestion zones and arrival estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union


class WaypointKind(str, Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"
    WAYPOINT = "waypoint"
    CURRENT = "current"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def escalate(self, floor: "Severity") -> "Severity":
        """Return the higher of this severity and ``floor``."""
        return floor if floor.rank > self.rank else self


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees (WGS84)."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Waypoint:
    coordinate: Coordinate
    display_name: str
    kind: WaypointKind = WaypointKind.WAYPOINT

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lng(self) -> float:
        return self.coordinate.lng

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "name": self.display_name, "type": self.kind.value}


Route = Tuple[Waypoint, ...]


@dataclass(frozen=True, slots=True)
class RouteSplit:
    completed: Route
    remaining: Route
    closest_index: Optional[int]


@dataclass(frozen=True, slots=True)
class MarineConditions:
    """Current marine weather at a coordinate; any reading may be missing."""

    wind_speed_ms: Optional[float] = None
    wind_direction_deg: Optional[float] = None
    wave_height_m: Optional[float] = None
    wave_direction_deg: Optional[float] = None
    fetched_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class StaticSeverity:
    severity: Severity
    estimated_delay_minutes: float


@dataclass(frozen=True, slots=True)
class DynamicSeverity:
    """Severity derived from time-of-day activity and live weather.

    ``activity_bias`` is added to the activity heuristic for zones with known
    persistent congestion.
    """

    base_delay_minutes: float
    activity_bias: float = 0.0


SeverityModel = Union[StaticSeverity, DynamicSeverity]


@dataclass(frozen=True, slots=True)
class CongestionZone:
    id: str
    name: str
    description: str
    center: Coordinate
    radius_m: float
    severity_model: SeverityModel
    delay_factors: Tuple[str, ...] = ()

    @property
    def radius_km(self) -> float:
        return self.radius_m / 1000.0


@dataclass(frozen=True, slots=True)
class ZoneCondition:
    severity: Severity
    estimated_delay_minutes: float
    activity_level: Optional[int] = None
    trend: str = "stable"
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ZoneStatus:
    """A zone with severity and delay resolved for one evaluation moment."""

    zone: CongestionZone
    condition: ZoneCondition
    weather: Optional[MarineConditions] = None
    data_source: str = "time-based"
    last_updated: Optional[datetime] = None

    @property
    def severity(self) -> Severity:
        return self.condition.severity

    @property
    def delay_minutes(self) -> float:
        return self.condition.estimated_delay_minutes


@dataclass(frozen=True, slots=True)
class DelayAttribution:
    zone_id: str
    zone_name: str
    delay_minutes: float
    severity: Severity


@dataclass(frozen=True, slots=True)
class ProximityWarning:
    attribution: DelayAttribution
    distance_km: float
    description: str
    factors: Tuple[str, ...] = ()
    trend: str = "stable"
    warnings: Tuple[str, ...] = ()
    data_source: str = "time-based"


@dataclass(frozen=True, slots=True)
class RouteDelay:
    total_delay_minutes: float
    delays: Tuple[DelayAttribution, ...] = ()


@dataclass(frozen=True, slots=True)
class ArrivalEstimate:
    eta: datetime
    distance_remaining_nm: int
    hours_remaining: int
    effective_speed_knots: float
    bottleneck_delay_minutes: int
    bottlenecks_passed: Tuple[DelayAttribution, ...] = field(default_factory=tuple)
