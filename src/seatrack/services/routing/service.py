"""Routing orchestration service."""

from __future__ import annotations

import functools
import logging
from typing import Optional

from ...config import settings
from ...models.domain import Coordinate, Route
from ..cache import TTLCache
from .sea_route_client import SeaRouteClient
from .synthesizer import RouteOutcome, RouteProvider, pin_endpoints, synthesize_route_with_outcome

logger = logging.getLogger(__name__)

RouteKey = tuple[float, float, float, float]


def route_cache_key(origin: Coordinate, destination: Coordinate, precision: int | None = None) -> RouteKey:
    digits = settings.route_cache_precision if precision is None else precision
    return (
        round(origin.lat, digits),
        round(origin.lng, digits),
        round(destination.lat, digits),
        round(destination.lng, digits),
    )


def _default_router() -> Optional[RouteProvider]:
    if not settings.sea_route_base_url:
        return None
    return SeaRouteClient()


class RouteService:
    """Calculates routes through the configured router and caches them per endpoint pair.

    With no sea-route service configured the rule-based chokepoint router is
    used. Cached routes are keyed by rounded endpoints, so a route is reused
    for nearby requests with its endpoints replaced by the requested ones.
    """

    def __init__(
        self,
        router: Optional[RouteProvider] = None,
        cache: Optional[TTLCache[Route]] = None,
        max_points: int | None = None,
    ) -> None:
        self.router = router
        self.cache: TTLCache[Route] = cache or TTLCache(
            ttl_seconds=settings.route_cache_ttl_seconds,
            max_entries=settings.route_cache_max_entries,
        )
        self.max_points = max_points or settings.route_max_points

    def calculate_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        origin_name: Optional[str] = None,
        destination_name: Optional[str] = None,
        *,
        use_cache: bool = True,
    ) -> Route:
        key = route_cache_key(origin, destination)
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return pin_endpoints(cached, origin, destination, origin_name, destination_name)

        outcome = self._synthesize(origin, destination, origin_name, destination_name)
        # Degraded routes are retried on the next request
        if not outcome.degraded:
            self.cache.set(key, outcome.route)
        return outcome.route

    def _synthesize(
        self,
        origin: Coordinate,
        destination: Coordinate,
        origin_name: Optional[str],
        destination_name: Optional[str],
    ) -> RouteOutcome:
        outcome = synthesize_route_with_outcome(
            origin,
            destination,
            origin_name=origin_name,
            destination_name=destination_name,
            router=self.router,
            max_points=self.max_points,
        )
        label = f"{origin_name or (origin.lat, origin.lng)} -> {destination_name or (destination.lat, destination.lng)}"
        if outcome.degraded:
            logger.warning(f"Sea routing failed for {label}: {outcome.error}. Using straight-line fallback.")
        else:
            logger.info(
                f"Route {label}: {outcome.raw_point_count} router points sampled to {len(outcome.route)}"
            )
        return outcome


@functools.lru_cache(maxsize=1)
def get_route_service() -> RouteService:
    return RouteService(router=_default_router())
