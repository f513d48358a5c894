"""Carrier catalog and detection endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from ...schemas.carriers import CarrierDetectResponse, CarrierListResponse, CarrierMatchModel, CarrierModel
from ...services.carriers import CARRIERS, detect_carrier

router = APIRouter(prefix="/carriers", tags=["carriers"])


@router.get("", response_model=CarrierListResponse, status_code=status.HTTP_200_OK)
def list_carriers() -> CarrierListResponse:
    return CarrierListResponse(carriers=[CarrierModel.from_domain(carrier) for carrier in CARRIERS])


@router.get("/detect", response_model=CarrierDetectResponse, status_code=status.HTTP_200_OK)
def detect(
    bl: Optional[str] = Query(default=None, description="Bill of lading number"),
    carrier: Optional[str] = Query(default=None, description="Carrier name as written on documents"),
    container: Optional[str] = Query(default=None, description="Container number"),
) -> CarrierDetectResponse:
    match = detect_carrier(bl, carrier, container)
    return CarrierDetectResponse(detected=match is not None, carrier=CarrierMatchModel.from_domain(match))
