"""HTTP client for a maritime routing service returning GeoJSON LineStrings."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from shapely.geometry import LineString, MultiLineString, shape

from ...config import settings
from ...models.domain import Coordinate

logger = logging.getLogger(__name__)


class SeaRouteError(RuntimeError):
    """Raised when the routing service cannot produce a usable polyline."""


def _format_point(point: Coordinate) -> str:
    # GeoJSON axis order: longitude first
    return f"{point.lng},{point.lat}"


def parse_linestring(payload: dict[str, Any]) -> list[Coordinate]:
    """Extract route coordinates from a GeoJSON Feature, FeatureCollection or geometry."""

    geometry: Any = payload
    if payload.get("type") == "FeatureCollection":
        features = payload.get("features") or []
        if not features:
            raise SeaRouteError("Routing response contains no features.")
        geometry = features[0].get("geometry")
    elif payload.get("type") == "Feature":
        geometry = payload.get("geometry")

    if not geometry:
        raise SeaRouteError("Routing response is missing a geometry.")

    try:
        line = shape(geometry)
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        raise SeaRouteError(f"Routing response geometry is invalid: {exc}") from exc

    if isinstance(line, MultiLineString):
        coords = [xy for part in line.geoms for xy in part.coords]
    elif isinstance(line, LineString):
        coords = list(line.coords)
    else:
        raise SeaRouteError(f"Expected a LineString geometry, got {line.geom_type}.")

    return [Coordinate(lat=float(xy[1]), lng=float(xy[0])) for xy in coords]


class SeaRouteClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.sea_route_base_url
        if not self.base_url:
            raise ValueError("Sea route base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.sea_route_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.sea_route_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.sea_route_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def route(self, origin: Coordinate, destination: Coordinate) -> list[Coordinate]:
        """Request a sea route polyline between two coordinates."""

        url = f"{self.base_url}/route"
        params = {"origin": _format_point(origin), "destination": _format_point(destination)}

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return parse_linestring(response.json())
                except httpx.HTTPStatusError as exc:
                    # 4xx means the pair itself is unroutable; retrying will not help
                    if exc.response.status_code < 500:
                        raise SeaRouteError(
                            f"Routing service rejected {params['origin']} -> {params['destination']}: "
                            f"HTTP {exc.response.status_code}"
                        ) from exc
                    attempt += 1
                    if attempt > self.max_retries:
                        raise SeaRouteError(f"Routing service failed: HTTP {exc.response.status_code}") from exc
                    time.sleep(self.backoff_seconds * attempt)
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise SeaRouteError(
                            f"Routing service at {self.base_url} unreachable after {self.max_retries} retries: {exc}"
                        ) from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Sea route request failed, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except ValueError as exc:
                    raise SeaRouteError(f"Routing service returned malformed JSON: {exc}") from exc
        finally:
            client.close()

    __call__ = route


def check_health(base_url: str | None = None) -> bool:
    """Check the routing service with a short, well-known sea passage."""

    base = base_url or settings.sea_route_base_url
    if not base:
        return False
    try:
        client = SeaRouteClient(base_url=base, timeout=5.0, max_retries=0)
        points = client.route(Coordinate(lat=1.2897, lng=103.8501), Coordinate(lat=4.2105, lng=100.2808))
        return len(points) >= 2
    except SeaRouteError:
        return False
