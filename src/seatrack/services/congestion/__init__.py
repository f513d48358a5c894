"""Congestion zone services."""

from .attribution import attribute_route_delay, proximity_warning
from .catalog import ZONE_CATALOG, get_zone
from .severity import activity_level, evaluate_zone, resolve_zone, resolve_zones

__all__ = [
    "ZONE_CATALOG",
    "get_zone",
    "activity_level",
    "evaluate_zone",
    "resolve_zone",
    "resolve_zones",
    "proximity_warning",
    "attribute_route_delay",
]
