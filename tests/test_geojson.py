import json
from pathlib import Path

from seatrack.models.domain import Coordinate, CongestionZone, Severity, StaticSeverity, Waypoint, WaypointKind
from seatrack.services.congestion import resolve_zones
from seatrack.services.export.geojson import route_feature_collection, save_feature_collection
from seatrack.services.routing.progress import split_by_position


def _route() -> tuple[Waypoint, ...]:
    return (
        Waypoint(Coordinate(1.29, 103.85), "Singapore", WaypointKind.ORIGIN),
        Waypoint(Coordinate(6.0, 80.0), "Waypoint 1"),
        Waypoint(Coordinate(12.6, 43.3), "Waypoint 2"),
        Waypoint(Coordinate(31.2, 32.3), "Port Said", WaypointKind.DESTINATION),
    )


def _zone() -> CongestionZone:
    return CongestionZone(
        id="suez",
        name="Suez Canal",
        description="Canal",
        center=Coordinate(30.0, 32.3),
        radius_m=120_000,
        severity_model=StaticSeverity(Severity.MEDIUM, 30),
    )


def test_route_feature_collection():
    route = _route()
    completed = split_by_position(route, Coordinate(7.0, 79.0)).completed

    collection = route_feature_collection(route, resolve_zones([_zone()]), completed)
    features = collection["features"]
    kinds = [f["properties"]["kind"] for f in features]

    assert collection["type"] == "FeatureCollection"
    assert kinds == ["route", "completed"] + ["waypoint"] * 4 + ["bottleneck"]
    assert features[0]["geometry"]["type"] == "LineString"
    assert tuple(features[0]["geometry"]["coordinates"][0]) == (103.85, 1.29)
    assert features[2]["properties"]["name"] == "Singapore"
    assert features[2]["properties"]["type"] == "origin"
    bottleneck = features[-1]["properties"]
    assert bottleneck["severity"] == "medium"
    assert bottleneck["radiusKm"] == 120.0


def test_short_route_has_no_line(tmp_path: Path):
    route = _route()[:1]
    collection = route_feature_collection(route)

    assert [f["geometry"]["type"] for f in collection["features"]] == ["Point"]

    output = tmp_path / "exports" / "route.geojson"
    save_feature_collection(collection, output)
    assert json.loads(output.read_text(encoding="utf-8"))["type"] == "FeatureCollection"
