import httpx
import pytest

from seatrack.models.domain import Coordinate
from seatrack.services.routing.sea_route_client import SeaRouteClient, SeaRouteError, parse_linestring

ORIGIN = Coordinate(1.29, 103.85)
DESTINATION = Coordinate(4.21, 100.28)

LINE = {"type": "LineString", "coordinates": [[103.85, 1.29], [102.0, 2.5], [100.28, 4.21]]}


def _client(handler, **kwargs) -> SeaRouteClient:
    return SeaRouteClient(
        base_url="http://router.test",
        max_retries=kwargs.pop("max_retries", 2),
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_parse_feature_collection_swaps_axis_order():
    payload = {"type": "FeatureCollection", "features": [{"type": "Feature", "geometry": LINE, "properties": {}}]}
    points = parse_linestring(payload)

    assert points[0] == Coordinate(lat=1.29, lng=103.85)
    assert points[-1] == Coordinate(lat=4.21, lng=100.28)


def test_parse_multilinestring_concatenates_parts():
    payload = {
        "type": "Feature",
        "geometry": {"type": "MultiLineString", "coordinates": [[[0, 0], [1, 1]], [[1, 1], [2, 2]]]},
    }
    assert len(parse_linestring(payload)) == 4


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "FeatureCollection", "features": []},
        {"type": "Feature", "geometry": None},
        {"type": "Point", "coordinates": [1, 2]},
    ],
)
def test_parse_rejects_unusable_payloads(payload):
    with pytest.raises(SeaRouteError):
        parse_linestring(payload)


def test_route_requests_lng_lat_pairs():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"type": "Feature", "geometry": LINE})

    points = _client(handler).route(ORIGIN, DESTINATION)

    assert len(points) == 3
    assert seen[0].url.path == "/route"
    assert seen[0].url.params["origin"] == "103.85,1.29"
    assert seen[0].url.params["destination"] == "100.28,4.21"


def test_client_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(422, json={"error": "unroutable"})

    with pytest.raises(SeaRouteError, match="HTTP 422"):
        _client(handler).route(ORIGIN, DESTINATION)
    assert len(calls) == 1


def test_server_errors_are_retried_then_raised():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    with pytest.raises(SeaRouteError):
        _client(handler, max_retries=2).route(ORIGIN, DESTINATION)
    assert len(calls) == 3


def test_network_error_recovers_on_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=LINE)

    points = _client(handler)(ORIGIN, DESTINATION)

    assert len(calls) == 2
    assert len(points) == 3


def test_missing_base_url_is_rejected(monkeypatch):
    from seatrack.config import settings

    monkeypatch.setattr(settings, "sea_route_base_url", None)
    with pytest.raises(ValueError):
        SeaRouteClient()
