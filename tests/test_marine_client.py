import httpx

from seatrack.services.cache import TTLCache
from seatrack.services.weather.marine_client import MarineWeatherClient, parse_marine_response

PAYLOAD = {
    "latitude": 30.0,
    "longitude": 32.25,
    "current": {
        "time": "2024-01-03T08:00",
        "wave_height": 2.4,
        "wave_direction": 310,
        "wind_speed_10m": 16.2,
        "wind_direction_10m": 295,
    },
}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_parse_marine_response():
    conditions = parse_marine_response(PAYLOAD)

    assert conditions.wind_speed_ms == 16.2
    assert conditions.wave_height_m == 2.4
    assert conditions.wind_direction_deg == 295.0
    assert conditions.fetched_at is not None
    assert parse_marine_response({"hourly": {}}) is None


def test_current_conditions_requests_metric_wind_and_caches():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=PAYLOAD)

    client = MarineWeatherClient(base_url="http://weather.test/v1/marine", transport=httpx.MockTransport(handler))

    first = client.current_conditions(30.001, 32.3)
    second = client.current_conditions(30.002, 32.3)

    assert first == second
    assert len(requests) == 1
    params = requests[0].url.params
    assert params["wind_speed_unit"] == "ms"
    assert "wave_height" in params["current"]


def test_failure_serves_stale_reading():
    clock = FakeClock()
    state = {"fail": False}

    def handler(request: httpx.Request) -> httpx.Response:
        if state["fail"]:
            return httpx.Response(500)
        return httpx.Response(200, json=PAYLOAD)

    client = MarineWeatherClient(
        base_url="http://weather.test/v1/marine",
        cache=TTLCache(ttl_seconds=60, clock=clock),
        transport=httpx.MockTransport(handler),
    )
    fresh = client.current_conditions(30.0, 32.3)

    clock.now = 120
    state["fail"] = True
    assert client.current_conditions(30.0, 32.3) == fresh


def test_failure_without_cache_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = MarineWeatherClient(base_url="http://weather.test/v1/marine", transport=httpx.MockTransport(handler))

    assert client.current_conditions(0.0, 0.0) is None
