"""Vessel tracking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...schemas.vessels import PositionUpdate, VesselListResponse, VesselModel, VesselRegistration
from ...services.export.geojson import route_feature_collection
from ...services.routing.progress import split_by_position
from ...services.tracking.ais import PositionReport
from ...services.tracking.service import VesselNotFoundError, get_tracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vessels", tags=["vessels"])


def _not_found(mmsi: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Vessel {mmsi} is not tracked")


@router.post("", response_model=VesselModel, status_code=status.HTTP_201_CREATED)
def register_vessel(payload: VesselRegistration) -> VesselModel:
    try:
        vessel = get_tracker().register(payload.mmsi, **payload.register_kwargs())
        return VesselModel.from_domain(vessel)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error registering vessel {payload.mmsi}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to register vessel: {str(exc)}",
        ) from exc


@router.get("", response_model=VesselListResponse, status_code=status.HTTP_200_OK)
def list_vessels() -> VesselListResponse:
    vessels = [VesselModel.from_domain(vessel) for vessel in get_tracker().list()]
    return VesselListResponse(vessels=vessels, count=len(vessels))


@router.get("/search", response_model=VesselListResponse, status_code=status.HTTP_200_OK)
def search_vessels(q: str = Query(..., min_length=1, description="Vessel name or MMSI fragment")) -> VesselListResponse:
    vessels = [VesselModel.from_domain(vessel) for vessel in get_tracker().search(q)]
    return VesselListResponse(vessels=vessels, count=len(vessels))


@router.get("/{mmsi}", response_model=VesselModel, status_code=status.HTTP_200_OK)
def get_vessel(
    mmsi: str,
    refresh: bool = Query(default=True, description="Recompute the estimate, fetching weather at the vessel position"),
) -> VesselModel:
    tracker = get_tracker()
    try:
        if refresh:
            vessel = tracker.refresh_estimate(mmsi, with_weather=settings.weather_adjusted_eta)
        else:
            vessel = tracker.get(mmsi)
    except VesselNotFoundError as exc:
        raise _not_found(mmsi) from exc
    return VesselModel.from_domain(vessel)


@router.post("/{mmsi}/position", response_model=VesselModel, status_code=status.HTTP_200_OK)
def update_position(mmsi: str, payload: PositionUpdate) -> VesselModel:
    report = PositionReport(
        mmsi=mmsi,
        latitude=payload.lat,
        longitude=payload.lng,
        speed_knots=payload.speed_knots,
        course_deg=payload.course,
        heading_deg=payload.heading,
        name=payload.name,
        destination=payload.destination,
    )
    try:
        return VesselModel.from_domain(get_tracker().apply_position(report))
    except Exception as exc:
        logger.exception(f"Error applying position for vessel {mmsi}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update vessel position: {str(exc)}",
        ) from exc


@router.delete("/{mmsi}", status_code=status.HTTP_200_OK)
def remove_vessel(mmsi: str) -> dict:
    if not get_tracker().remove(mmsi):
        raise _not_found(mmsi)
    return {"success": True, "message": f"Stopped tracking vessel {mmsi}"}


@router.get("/{mmsi}/geojson", status_code=status.HTTP_200_OK)
def vessel_geojson(mmsi: str) -> dict:
    """Route, travelled leg and bottlenecks of a tracked vessel as GeoJSON."""
    tracker = get_tracker()
    try:
        vessel = tracker.get(mmsi)
    except VesselNotFoundError as exc:
        raise _not_found(mmsi) from exc

    completed = None
    if vessel.position is not None and vessel.route:
        completed = split_by_position(vessel.route, vessel.position).completed
    return route_feature_collection(vessel.route, tracker.congestion_monitor.snapshot(), completed)
