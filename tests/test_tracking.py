import threading

import pytest

from seatrack.models.domain import (
    Coordinate,
    CongestionZone,
    MarineConditions,
    Severity,
    StaticSeverity,
)
from seatrack.services.cache import TTLCache
from seatrack.services.congestion.monitor import CongestionMonitor
from seatrack.services.routing.service import RouteService
from seatrack.services.tracking.ais import PositionReport, parse_ais_message
from seatrack.services.tracking.service import VesselNotFoundError, VesselTracker
from seatrack.services.tracking.subscriptions import ALL_VESSELS, SubscriptionRegistry

COLOMBO = Coordinate(6.9271, 79.8612)
ROTTERDAM = Coordinate(51.9244, 4.4777)


def _ais_message(mmsi=477123400, lat=12.6, lng=43.3, name="EVER GIVEN   ", sog=12.5):
    return {
        "MessageType": "PositionReport",
        "MetaData": {"MMSI": mmsi, "ShipName": name, "latitude": lat, "longitude": lng},
        "Message": {
            "PositionReport": {
                "UserID": mmsi,
                "Latitude": lat,
                "Longitude": lng,
                "Sog": sog,
                "Cog": 310.5,
                "TrueHeading": 309,
            }
        },
    }


def _gate_zone() -> CongestionZone:
    return CongestionZone(
        id="bab-el-mandeb",
        name="Bab el-Mandeb",
        description="Strait between Yemen and Djibouti",
        center=Coordinate(12.6, 43.3),
        radius_m=80_000,
        severity_model=StaticSeverity(Severity.HIGH, 120),
    )


def _straight_router(origin, destination):
    return [origin, Coordinate(12.6, 43.3), Coordinate(31.0, 32.3), destination]


class PausingMonitor(CongestionMonitor):
    """Holds the next snapshot call until released, pausing an update mid-flight."""

    def __init__(self):
        super().__init__(zones=[_gate_zone()])
        self.armed = False
        self.paused = threading.Event()
        self.resume = threading.Event()

    def snapshot(self, at=None):
        if self.armed:
            self.armed = False
            self.paused.set()
            self.resume.wait(timeout=5)
        return super().snapshot(at)


def _tracker(weather_lookup=None, max_ais_subscriptions=50, monitor=None) -> VesselTracker:
    return VesselTracker(
        route_service=RouteService(router=_straight_router, cache=TTLCache(ttl_seconds=60)),
        congestion_monitor=monitor or CongestionMonitor(zones=[_gate_zone()]),
        weather_lookup=weather_lookup,
        max_ais_subscriptions=max_ais_subscriptions,
    )


def test_parse_ais_position_report():
    report = parse_ais_message(_ais_message())

    assert report.mmsi == "477123400"
    assert report.has_position
    assert (report.latitude, report.longitude) == (12.6, 43.3)
    assert report.speed_knots == 12.5
    assert report.course_deg == 310.5
    assert report.heading_deg == 309.0
    assert report.name == "EVER GIVEN"


def test_parse_ais_ignores_messages_without_mmsi():
    assert parse_ais_message({"MessageType": "PositionReport", "MetaData": {}, "Message": {}}) is None
    assert parse_ais_message("not a message") is None


def test_parse_ais_drops_partial_position():
    message = _ais_message()
    del message["MetaData"]["longitude"]
    del message["Message"]["PositionReport"]["Longitude"]

    report = parse_ais_message(message)

    assert report is not None
    assert not report.has_position


def test_failing_subscriber_does_not_block_others():
    registry = SubscriptionRegistry()
    received = []

    def broken(mmsi, update):
        raise RuntimeError("subscriber crashed")

    registry.subscribe("111", broken)
    registry.subscribe("111", lambda mmsi, update: received.append((mmsi, update)))
    registry.subscribe(ALL_VESSELS, lambda mmsi, update: received.append(("*", update)))
    registry.subscribe("222", lambda mmsi, update: received.append(("other", update)))

    delivered = registry.publish("111", "moved")

    assert delivered == 2
    assert received == [("111", "moved"), ("*", "moved")]
    assert registry.subscribed_vessels() == {"111", "222"}


def test_unsubscribe():
    registry = SubscriptionRegistry()
    token = registry.subscribe("111", lambda mmsi, update: None)
    registry.subscribe("111", lambda mmsi, update: None)

    assert registry.unsubscribe(token)
    assert not registry.unsubscribe(token)
    assert registry.unsubscribe_vessel("111") == 1
    assert len(registry) == 0


def test_register_builds_route_estimate_and_carrier():
    tracker = _tracker()
    vessel = tracker.register(
        "477123400",
        name="ever given",
        vessel_type="Container Ship",
        origin_name="Colombo",
        origin=COLOMBO,
        destination_name="Rotterdam",
        destination=ROTTERDAM,
        position=COLOMBO,
        bl_number="MAEU123456789",
    )

    assert vessel.name == "EVER GIVEN"
    assert [w.display_name for w in vessel.route] == ["Colombo", "Waypoint 1", "Waypoint 2", "Rotterdam"]
    assert vessel.estimate is not None
    assert vessel.estimate.effective_speed_knots == 18.0
    assert vessel.estimate.bottleneck_delay_minutes == 120
    assert vessel.carrier.id == "maersk"
    assert vessel.next_waypoint.display_name == "Waypoint 1"
    assert tracker.get("477123400") is vessel


def test_simulated_vessels_are_not_subscribed_to_ais():
    tracker = _tracker(max_ais_subscriptions=2)
    for mmsi in ("SIM001", "300000003", "300000001", "300000002"):
        tracker.register(mmsi, destination=ROTTERDAM)

    assert tracker.ais_filter() == ["300000001", "300000002"]


def test_apply_position_updates_estimate_and_notifies():
    tracker = _tracker()
    tracker.register("477123400", origin=COLOMBO, destination=ROTTERDAM, position=COLOMBO, speed_knots=14.0)
    updates = []
    tracker.subscribe("477123400", lambda mmsi, vessel: updates.append(vessel))

    vessel = tracker.ingest_ais(_ais_message())

    assert vessel.position == Coordinate(12.6, 43.3)
    assert vessel.speed_knots == 12.5
    assert vessel.proximity is not None
    assert vessel.proximity.attribution.zone_id == "bab-el-mandeb"
    assert vessel.estimate.effective_speed_knots == 12.5
    assert len(updates) == 1
    assert updates[0].position == vessel.position
    assert updates[0] is not vessel


def test_unknown_vessel_report_creates_record():
    tracker = _tracker()
    vessel = tracker.apply_position(PositionReport(mmsi="999", latitude=1.0, longitude=2.0))

    assert tracker.get("999") is vessel
    assert vessel.route == ()
    assert vessel.estimate is None


def test_refresh_estimate_uses_weather_lookup():
    storm = MarineConditions(wind_speed_ms=26.0)
    tracker = _tracker(weather_lookup=lambda lat, lng: storm)
    tracker.register("477123400", origin=COLOMBO, destination=ROTTERDAM, position=COLOMBO, speed_knots=14.0)

    vessel = tracker.refresh_estimate("477123400", with_weather=True)

    assert vessel.weather is storm
    assert vessel.estimate.effective_speed_knots == 7.0


def test_search_and_remove():
    tracker = _tracker()
    tracker.register("477123400", name="Ever Given")
    tracker.register("311000111", name="Maersk Essen")

    assert [v.mmsi for v in tracker.search("ever")] == ["477123400"]
    assert [v.mmsi for v in tracker.search("3110")] == ["311000111"]
    assert tracker.search("  ") == []

    assert tracker.remove("477123400")
    assert not tracker.remove("477123400")
    with pytest.raises(VesselNotFoundError):
        tracker.get("477123400")
    assert tracker.ais_filter() == ["311000111"]


def test_register_requires_mmsi():
    with pytest.raises(ValueError):
        _tracker().register("  ")


def test_concurrent_reports_keep_each_others_fields():
    monitor = PausingMonitor()
    tracker = _tracker(monitor=monitor)
    tracker.register("477123400", origin=COLOMBO, destination=ROTTERDAM, position=COLOMBO)

    monitor.armed = True
    speed_update = threading.Thread(
        target=tracker.apply_position, args=(PositionReport(mmsi="477123400", speed_knots=11.0),)
    )
    speed_update.start()
    assert monitor.paused.wait(timeout=5)

    course_update = threading.Thread(
        target=tracker.apply_position, args=(PositionReport(mmsi="477123400", course_deg=275.0),)
    )
    course_update.start()
    course_update.join(timeout=0.2)

    monitor.resume.set()
    speed_update.join(timeout=5)
    course_update.join(timeout=5)

    vessel = tracker.get("477123400")
    assert vessel.speed_knots == 11.0
    assert vessel.course_deg == 275.0


def test_remove_during_update_is_not_undone():
    monitor = PausingMonitor()
    tracker = _tracker(monitor=monitor)
    tracker.register("477123400", origin=COLOMBO, destination=ROTTERDAM, position=COLOMBO)
    removed = []

    monitor.armed = True
    update = threading.Thread(target=tracker.refresh_estimate, args=("477123400",))
    update.start()
    assert monitor.paused.wait(timeout=5)

    remover = threading.Thread(target=lambda: removed.append(tracker.remove("477123400")))
    remover.start()
    remover.join(timeout=0.2)

    monitor.resume.set()
    update.join(timeout=5)
    remover.join(timeout=5)

    assert removed == [True]
    with pytest.raises(VesselNotFoundError):
        tracker.get("477123400")
    assert tracker.ais_filter() == []
