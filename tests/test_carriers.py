from seatrack.services.carriers import CARRIERS, detect_carrier, get_carrier, tracking_url


def test_catalog_has_unique_ids():
    ids = [carrier.id for carrier in CARRIERS]
    assert len(ids) == 13
    assert len(set(ids)) == len(ids)


def test_bl_prefix_detection():
    match = detect_carrier(bl_number="maeu 123456789")

    assert match.id == "maersk"
    assert match.detected_from == "bl_prefix"
    assert match.prefix == "MAEU"
    assert match.tracking_url == "https://www.maersk.com/tracking/maeu%20123456789"


def test_bl_prefix_beats_carrier_name():
    match = detect_carrier(bl_number="MSCU7654321", carrier_name="Maersk")
    assert match.id == "msc"


def test_exact_name_and_alias_detection():
    exact = detect_carrier(carrier_name="Hapag-Lloyd")
    assert exact.id == "hapag_lloyd"
    assert exact.detected_from == "carrier_name"

    alias = detect_carrier(carrier_name="Mediterranean Shipping Company S.A.")
    assert alias.id == "msc"
    assert alias.detected_from == "carrier_alias"
    assert alias.tracking_url is None


def test_container_prefix_detection():
    match = detect_carrier(container_number="OOLU 1234567")

    assert match.id == "oocl"
    assert match.detected_from == "container_prefix"
    assert match.tracking_url.endswith("ref=OOLU%201234567")


def test_no_match():
    assert detect_carrier() is None
    assert detect_carrier(bl_number="XXXX1", carrier_name="Unknown Lines", container_number="ABCD1234567") is None


def test_tracking_url_lookup():
    assert tracking_url("zim", "ZIMU123") == "https://www.zim.com/tools/track-a-shipment?consnumber=ZIMU123"
    assert tracking_url("zim", None) is None
    assert tracking_url("nope", "X") is None
    assert get_carrier("one").color == "#FF1493"
