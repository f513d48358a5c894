"""GeoJSON export of vessel routes and congestion zones."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from shapely.geometry import LineString, Point, mapping

from ...models.domain import Route, ZoneStatus


def _line(route: Route) -> LineString:
    # GeoJSON uses lng,lat order (x,y)
    return LineString([(waypoint.lng, waypoint.lat) for waypoint in route])


def _feature(geometry: Any, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "Feature", "geometry": mapping(geometry), "properties": properties}


def route_feature_collection(
    route: Route,
    zones: Sequence[ZoneStatus] = (),
    completed: Optional[Route] = None,
) -> Dict[str, Any]:
    """Build a FeatureCollection for a route, its waypoints and congestion zones.

    Args:
        route: Full route, origin to destination
        zones: Resolved congestion zones to include as points
        completed: Part of the route already travelled, if known

    Returns:
        GeoJSON FeatureCollection dictionary
    """
    features: List[Dict[str, Any]] = []

    if len(route) >= 2:
        features.append(_feature(_line(route), {"kind": "route", "points": len(route)}))
    if completed is not None and len(completed) >= 2:
        features.append(_feature(_line(completed), {"kind": "completed", "points": len(completed)}))

    for index, waypoint in enumerate(route):
        features.append(
            _feature(
                Point(waypoint.lng, waypoint.lat),
                {
                    "kind": "waypoint",
                    "index": index,
                    "name": waypoint.display_name,
                    "type": waypoint.kind.value,
                },
            )
        )

    for status in zones:
        zone = status.zone
        features.append(
            _feature(
                Point(zone.center.lng, zone.center.lat),
                {
                    "kind": "bottleneck",
                    "id": zone.id,
                    "name": zone.name,
                    "radiusKm": zone.radius_km,
                    "severity": status.severity.value,
                    "delayMinutes": status.delay_minutes,
                },
            )
        )

    return {"type": "FeatureCollection", "features": features}


def save_feature_collection(collection: Dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)
