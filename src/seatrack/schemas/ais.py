"""AIS ingestion schemas."""

from __future__ import annotations

from typing import List, Optional

from .base import CamelModel
from .vessels import VesselModel


class AisIngestResponse(CamelModel):
    accepted: bool
    vessel: Optional[VesselModel] = None


class AisFilterResponse(CamelModel):
    mmsi: List[str]
    count: int
