"""Carrier catalog and detection schemas."""

from __future__ import annotations

from typing import List, Optional

from ..services.carriers import Carrier, CarrierMatch
from .base import CamelModel


class CarrierModel(CamelModel):
    id: str
    name: str
    aliases: List[str]
    prefixes: List[str]
    color: str

    @classmethod
    def from_domain(cls, carrier: Carrier) -> "CarrierModel":
        return cls(
            id=carrier.id,
            name=carrier.name,
            aliases=list(carrier.aliases),
            prefixes=list(carrier.prefixes),
            color=carrier.color,
        )


class CarrierMatchModel(CamelModel):
    id: str
    name: str
    detected_from: str
    prefix: Optional[str] = None
    tracking_url: Optional[str] = None
    color: str

    @classmethod
    def from_domain(cls, match: Optional[CarrierMatch]) -> Optional["CarrierMatchModel"]:
        if match is None:
            return None
        return cls(
            id=match.id,
            name=match.name,
            detected_from=match.detected_from,
            prefix=match.prefix,
            tracking_url=match.tracking_url,
            color=match.color,
        )


class CarrierListResponse(CamelModel):
    carriers: List[CarrierModel]


class CarrierDetectResponse(CamelModel):
    detected: bool
    carrier: Optional[CarrierMatchModel] = None
