"""Parsing of AIS stream messages into position reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass(slots=True)
class PositionReport:
    """A single vessel update; fields the message did not carry stay ``None``."""

    mmsi: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    speed_knots: Optional[float] = None
    course_deg: Optional[float] = None
    heading_deg: Optional[float] = None
    name: Optional[str] = None
    ship_type: Optional[str] = None
    destination: Optional[str] = None
    received_at: Optional[datetime] = None

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_ais_message(message: dict[str, Any]) -> Optional[PositionReport]:
    """Convert an AISStream-style envelope into a ``PositionReport``.

    The envelope carries ``MetaData`` plus ``Message[MessageType]``. Messages
    without an MMSI are ignored.
    """
    if not isinstance(message, dict):
        return None
    meta = message.get("MetaData") or {}
    message_type = message.get("MessageType")
    body: dict[str, Any] = {}
    if message_type:
        body = (message.get("Message") or {}).get(message_type) or {}

    mmsi = _first(meta.get("MMSI"), body.get("UserID"), body.get("MMSI"), body.get("ShipMMSI"))
    if mmsi is None:
        return None

    latitude = _to_float(_first(meta.get("latitude"), meta.get("Latitude"), body.get("Latitude")))
    longitude = _to_float(_first(meta.get("longitude"), meta.get("Longitude"), body.get("Longitude")))
    if latitude is None or longitude is None:
        latitude = longitude = None

    ship_type = _first(meta.get("ShipType"), body.get("Type"))

    return PositionReport(
        mmsi=str(mmsi).strip(),
        latitude=latitude,
        longitude=longitude,
        speed_knots=_to_float(body.get("Sog")),
        course_deg=_to_float(body.get("Cog")),
        heading_deg=_to_float(body.get("TrueHeading")),
        name=_clean(_first(meta.get("ShipName"), body.get("Name"))),
        ship_type=str(ship_type) if ship_type is not None else None,
        destination=_clean(_first(meta.get("Destination"), meta.get("ShipDestination"), body.get("Destination"))),
        received_at=datetime.now(timezone.utc),
    )
