"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/weather", status_code=status.HTTP_200_OK)
def health_weather() -> dict:
    """Check the marine weather provider."""
    from ...services.weather.marine_client import check_health as weather_health_check

    try:
        return {"service": "marine-weather", "healthy": weather_health_check()}
    except Exception as e:
        return {"service": "marine-weather", "healthy": False, "error": str(e)}


@router.get("/health/sea-route", status_code=status.HTTP_200_OK)
def health_sea_route() -> dict:
    """Check the sea-route service, when one is configured."""
    if not settings.sea_route_base_url:
        return {"service": "sea-route", "configured": False, "healthy": False, "fallback": "chokepoint rules"}

    from ...services.routing.sea_route_client import check_health as sea_route_health_check

    try:
        return {"service": "sea-route", "configured": True, "healthy": sea_route_health_check()}
    except Exception as e:
        return {"service": "sea-route", "configured": True, "healthy": False, "error": str(e)}
