"""Congestion zone (bottleneck) endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...models.domain import Coordinate
from ...schemas.congestion import BottleneckModel, BottlenecksResponse, ProximityModel, ProximityResponse
from ...services.congestion.attribution import proximity_warning
from ...services.congestion.monitor import get_congestion_monitor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bottlenecks", tags=["bottlenecks"])


@router.get("", response_model=BottlenecksResponse, status_code=status.HTTP_200_OK)
def list_bottlenecks(
    refresh: bool = Query(default=False, description="Fetch live weather for every zone before resolving"),
) -> BottlenecksResponse:
    try:
        monitor = get_congestion_monitor()
        zones = monitor.refresh() if refresh else monitor.snapshot()
        return BottlenecksResponse(
            bottlenecks=[BottleneckModel.from_domain(zone) for zone in zones],
            count=len(zones),
            refreshed=refresh,
        )
    except Exception as exc:
        logger.exception(f"Error resolving bottlenecks: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to resolve bottlenecks: {str(exc)}",
        ) from exc


@router.get("/proximity", response_model=ProximityResponse, status_code=status.HTTP_200_OK)
def proximity(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
) -> ProximityResponse:
    """Report the bottleneck containing the given position, if any."""
    warning = proximity_warning(Coordinate(lat=lat, lng=lng), get_congestion_monitor().snapshot())
    return ProximityResponse(near_bottleneck=warning is not None, warning=ProximityModel.from_domain(warning))


@router.get("/{zone_id}", response_model=BottleneckModel, status_code=status.HTTP_200_OK)
def get_bottleneck(zone_id: str) -> BottleneckModel:
    for zone in get_congestion_monitor().snapshot():
        if zone.zone.id == zone_id:
            return BottleneckModel.from_domain(zone)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bottleneck '{zone_id}' not found")
