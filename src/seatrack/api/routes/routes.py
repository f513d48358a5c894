"""Route calculation and arrival estimate endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...models.domain import Coordinate
from ...schemas.routing import (
    ArrivalEstimateModel,
    EtaRequest,
    EtaResponse,
    RouteProgressModel,
    RouteRequest,
    RouteResponse,
    route_to_models,
)
from ...services.congestion.monitor import get_congestion_monitor
from ...services.eta.estimator import estimate_arrival
from ...services.geospatial import km_to_nm, round_half_up, route_distance_km
from ...services.routing.progress import split_by_position
from ...services.routing.service import get_route_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/calculate", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def calculate(payload: RouteRequest) -> RouteResponse:
    try:
        route = get_route_service().calculate_route(
            Coordinate(lat=payload.origin.lat, lng=payload.origin.lng),
            Coordinate(lat=payload.destination.lat, lng=payload.destination.lng),
            payload.origin_name,
            payload.destination_name,
            use_cache=payload.use_cache,
        )
        distance_km = route_distance_km(waypoint.coordinate for waypoint in route)
        return RouteResponse(
            route=route_to_models(route),
            point_count=len(route),
            distance_nm=int(round_half_up(km_to_nm(distance_km))),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error calculating route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate route: {str(exc)}",
        ) from exc


@router.post("/eta", response_model=EtaResponse, status_code=status.HTTP_200_OK)
def eta(payload: EtaRequest) -> EtaResponse:
    """Estimate arrival for a position on an explicit or synthesized route."""
    try:
        if payload.route:
            route = tuple(waypoint.to_domain() for waypoint in payload.route)
        elif payload.origin and payload.destination:
            route = get_route_service().calculate_route(
                Coordinate(lat=payload.origin.lat, lng=payload.origin.lng),
                Coordinate(lat=payload.destination.lat, lng=payload.destination.lng),
                payload.origin_name,
                payload.destination_name,
            )
        else:
            raise ValueError("Provide either a route or both origin and destination.")

        position = Coordinate(lat=payload.current_position.lat, lng=payload.current_position.lng)
        monitor = get_congestion_monitor()
        zones = monitor.snapshot() if payload.include_bottlenecks else None
        weather = (
            monitor.weather_client.current_conditions(position.lat, position.lng)
            if payload.include_weather
            else None
        )

        estimate = estimate_arrival(
            route,
            position,
            payload.speed_knots,
            vessel_type=payload.vessel_type,
            weather=weather,
            zones=zones,
        )
        split = split_by_position(route, position)
        return EtaResponse(
            estimate=ArrivalEstimateModel.from_domain(estimate),
            progress=RouteProgressModel(
                completed=route_to_models(split.completed),
                remaining=route_to_models(split.remaining),
                closest_index=split.closest_index,
            ),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error estimating arrival: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to estimate arrival: {str(exc)}",
        ) from exc
