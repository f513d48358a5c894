"""Vessel tracking request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..models.domain import Coordinate
from ..services.tracking.service import TrackedVessel
from .base import CamelModel, CoordinateModel
from .carriers import CarrierMatchModel
from .congestion import ProximityModel, WeatherModel
from .routing import ArrivalEstimateModel, WaypointModel, route_to_models


def _coordinate(model: Optional[CoordinateModel]) -> Optional[Coordinate]:
    if model is None:
        return None
    return Coordinate(lat=model.lat, lng=model.lng)


class VesselRegistration(CamelModel):
    mmsi: str = Field(..., min_length=1, max_length=32)
    name: Optional[str] = None
    vessel_type: Optional[str] = None
    origin_name: Optional[str] = None
    origin: Optional[CoordinateModel] = None
    destination_name: Optional[str] = None
    destination: Optional[CoordinateModel] = None
    position: Optional[CoordinateModel] = None
    speed_knots: Optional[float] = Field(default=None, ge=0.0, le=60.0)
    bl_number: Optional[str] = None
    carrier_name: Optional[str] = None
    container_number: Optional[str] = None
    voyage: Optional[str] = None

    def register_kwargs(self) -> dict:
        return {
            "name": self.name,
            "vessel_type": self.vessel_type,
            "origin_name": self.origin_name,
            "origin": _coordinate(self.origin),
            "destination_name": self.destination_name,
            "destination": _coordinate(self.destination),
            "position": _coordinate(self.position),
            "speed_knots": self.speed_knots,
            "bl_number": self.bl_number,
            "carrier_name": self.carrier_name,
            "container_number": self.container_number,
            "voyage": self.voyage,
        }


class PositionUpdate(CamelModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    speed_knots: Optional[float] = Field(default=None, ge=0.0, le=60.0)
    course: Optional[float] = Field(default=None, ge=0.0, le=360.0)
    heading: Optional[float] = Field(default=None, ge=0.0, le=511.0)
    name: Optional[str] = None
    destination: Optional[str] = None


class VesselModel(CamelModel):
    mmsi: str
    name: Optional[str] = None
    vessel_type: Optional[str] = None
    origin_name: Optional[str] = None
    origin: Optional[CoordinateModel] = None
    destination_name: Optional[str] = None
    destination: Optional[CoordinateModel] = None
    position: Optional[CoordinateModel] = None
    speed_knots: Optional[float] = None
    course: Optional[float] = None
    heading: Optional[float] = None
    route: List[WaypointModel] = []
    next_waypoint: Optional[WaypointModel] = None
    estimate: Optional[ArrivalEstimateModel] = None
    proximity: Optional[ProximityModel] = None
    weather: Optional[WeatherModel] = None
    carrier: Optional[CarrierMatchModel] = None
    bl_number: Optional[str] = None
    voyage: Optional[str] = None
    simulated: bool = False
    registered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, vessel: TrackedVessel) -> "VesselModel":
        def point(coordinate: Optional[Coordinate]) -> Optional[CoordinateModel]:
            if coordinate is None:
                return None
            return CoordinateModel(lat=coordinate.lat, lng=coordinate.lng)

        next_waypoint = vessel.next_waypoint
        return cls(
            mmsi=vessel.mmsi,
            name=vessel.name,
            vessel_type=vessel.vessel_type,
            origin_name=vessel.origin_name,
            origin=point(vessel.origin),
            destination_name=vessel.destination_name,
            destination=point(vessel.destination),
            position=point(vessel.position),
            speed_knots=vessel.speed_knots,
            course=vessel.course_deg,
            heading=vessel.heading_deg,
            route=route_to_models(vessel.route),
            next_waypoint=WaypointModel.from_domain(next_waypoint) if next_waypoint else None,
            estimate=ArrivalEstimateModel.from_domain(vessel.estimate) if vessel.estimate else None,
            proximity=ProximityModel.from_domain(vessel.proximity),
            weather=WeatherModel.from_domain(vessel.weather),
            carrier=CarrierMatchModel.from_domain(vessel.carrier),
            bl_number=vessel.bl_number,
            voyage=vessel.voyage,
            simulated=vessel.is_simulated,
            registered_at=vessel.registered_at,
            updated_at=vessel.updated_at,
        )


class VesselListResponse(CamelModel):
    vessels: List[VesselModel]
    count: int
