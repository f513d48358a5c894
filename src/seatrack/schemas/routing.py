"""Routing and arrival estimate request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..models.domain import (
    ArrivalEstimate,
    Coordinate,
    DelayAttribution,
    Route,
    Waypoint,
    WaypointKind,
)
from .base import CamelModel, CoordinateModel


class WaypointModel(CamelModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    name: str = "Waypoint"
    type: WaypointKind = WaypointKind.WAYPOINT

    @classmethod
    def from_domain(cls, waypoint: Waypoint) -> "WaypointModel":
        return cls(lat=waypoint.lat, lng=waypoint.lng, name=waypoint.display_name, type=waypoint.kind)

    def to_domain(self) -> Waypoint:
        return Waypoint(coordinate=Coordinate(lat=self.lat, lng=self.lng), display_name=self.name, kind=self.type)


def route_to_models(route: Route) -> List[WaypointModel]:
    return [WaypointModel.from_domain(waypoint) for waypoint in route]


class RouteRequest(CamelModel):
    origin: CoordinateModel
    destination: CoordinateModel
    origin_name: Optional[str] = None
    destination_name: Optional[str] = None
    use_cache: bool = Field(default=True, description="Reuse a cached route for the same rounded endpoints.")


class RouteResponse(CamelModel):
    route: List[WaypointModel]
    point_count: int
    distance_nm: int


class DelayModel(CamelModel):
    zone_id: str
    zone: str
    delay: int
    severity: str

    @classmethod
    def from_domain(cls, attribution: DelayAttribution) -> "DelayModel":
        return cls(
            zone_id=attribution.zone_id,
            zone=attribution.zone_name,
            delay=int(attribution.delay_minutes),
            severity=attribution.severity.value,
        )


class ArrivalEstimateModel(CamelModel):
    eta: datetime
    distance_remaining: int
    hours_remaining: int
    effective_speed: float
    bottleneck_delay_minutes: int
    bottlenecks_passed: List[DelayModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, estimate: ArrivalEstimate) -> "ArrivalEstimateModel":
        return cls(
            eta=estimate.eta,
            distance_remaining=estimate.distance_remaining_nm,
            hours_remaining=estimate.hours_remaining,
            effective_speed=estimate.effective_speed_knots,
            bottleneck_delay_minutes=estimate.bottleneck_delay_minutes,
            bottlenecks_passed=[DelayModel.from_domain(item) for item in estimate.bottlenecks_passed],
        )


class EtaRequest(CamelModel):
    """Ad-hoc arrival estimate.

    Either pass an explicit ``route`` or ``origin`` and ``destination`` to have
    one synthesized.
    """

    current_position: CoordinateModel
    route: Optional[List[WaypointModel]] = None
    origin: Optional[CoordinateModel] = None
    destination: Optional[CoordinateModel] = None
    origin_name: Optional[str] = None
    destination_name: Optional[str] = None
    speed_knots: Optional[float] = Field(default=None, ge=0.0, le=60.0)
    vessel_type: Optional[str] = None
    include_bottlenecks: bool = True
    include_weather: bool = False


class RouteProgressModel(CamelModel):
    completed: List[WaypointModel]
    remaining: List[WaypointModel]
    closest_index: Optional[int] = None


class EtaResponse(CamelModel):
    estimate: ArrivalEstimateModel
    progress: RouteProgressModel
