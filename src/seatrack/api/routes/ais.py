"""AIS stream ingestion endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, status

from ...schemas.ais import AisFilterResponse, AisIngestResponse
from ...schemas.vessels import VesselModel
from ...services.tracking.service import get_tracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ais", tags=["ais"])


@router.post("", response_model=AisIngestResponse, status_code=status.HTTP_200_OK)
def ingest(message: Dict[str, Any] = Body(...)) -> AisIngestResponse:
    """Apply one raw AIS stream message (MetaData + Message envelope)."""
    try:
        vessel = get_tracker().ingest_ais(message)
    except Exception as exc:
        logger.exception(f"Error ingesting AIS message: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to ingest AIS message: {str(exc)}",
        ) from exc
    if vessel is None:
        return AisIngestResponse(accepted=False)
    return AisIngestResponse(accepted=True, vessel=VesselModel.from_domain(vessel))


@router.get("/filter", response_model=AisFilterResponse, status_code=status.HTTP_200_OK)
def subscription_filter() -> AisFilterResponse:
    """MMSIs the AIS feed subscription should request."""
    mmsi = get_tracker().ais_filter()
    return AisFilterResponse(mmsi=mmsi, count=len(mmsi))
