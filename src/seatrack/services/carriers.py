"""Shipping carrier detection from bill of lading, carrier name or container number."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class Carrier:
    id: str
    name: str
    aliases: tuple[str, ...]
    prefixes: tuple[str, ...]
    tracking_url_template: str
    color: str

    def tracking_url(self, reference: str) -> str:
        return self.tracking_url_template.format(ref=quote(reference, safe=""))


@dataclass(frozen=True, slots=True)
class CarrierMatch:
    id: str
    name: str
    detected_from: str
    prefix: Optional[str]
    tracking_url: Optional[str]
    color: str


CARRIERS: tuple[Carrier, ...] = (
    Carrier("maersk", "Maersk", ("maersk", "sealand", "safmarine", "maersk line"),
            ("MAEU", "MSKU", "SEAU", "SAFM"), "https://www.maersk.com/tracking/{ref}", "#00243D"),
    Carrier("msc", "MSC", ("msc", "mediterranean shipping company", "mediterranean shipping"),
            ("MSCU", "MEDU"), "https://www.msc.com/track-a-shipment?agencyPath=msc&trackingNumber={ref}", "#002B5C"),
    Carrier("cma_cgm", "CMA CGM", ("cma cgm", "cma-cgm", "apl", "anl"),
            ("CMAU", "APLU", "ANLU"),
            "https://www.cma-cgm.com/ebusiness/tracking/search?SearchBy=BL&Reference={ref}", "#002F6C"),
    Carrier("hapag_lloyd", "Hapag-Lloyd", ("hapag-lloyd", "hapag lloyd", "hapag"),
            ("HLCU", "HLXU"), "https://www.hapag-lloyd.com/en/online-business/track/track-by-booking-solution.html?blno={ref}",
            "#FF6600"),
    Carrier("one", "ONE (Ocean Network Express)", ("ocean network express", "one line"),
            ("ONEY", "ONEU"), "https://ecomm.one-line.com/one-ecom/manage-shipment/cargo-tracking?trakNoParam={ref}",
            "#FF1493"),
    Carrier("evergreen", "Evergreen", ("evergreen", "evergreen line", "evergreen marine"),
            ("EISU", "EGHU", "EMCU"), "https://www.shipmentlink.com/servlet/TDB1_CargoTracking.do?BkgNo={ref}", "#006400"),
    Carrier("oocl", "OOCL", ("oocl", "orient overseas container line"),
            ("OOLU",), "https://www.oocl.com/eng/ourservices/eservices/cargotracking/Pages/cargotracking.aspx?ref={ref}",
            "#003366"),
    Carrier("cosco", "COSCO", ("cosco", "cosco shipping"),
            ("COSU", "CBHU"), "https://elines.coscoshipping.com/ebusiness/cargoTracking?trackingType=BOOKING&number={ref}",
            "#003399"),
    Carrier("yang_ming", "Yang Ming", ("yang ming", "yangming"),
            ("YMLU", "YMMU"),
            "https://www.yangming.com/e-service/track_trace/track_trace_cargo_tracking.aspx?rdolType=BL&txtTrackNo={ref}",
            "#FFD700"),
    Carrier("pil", "PIL (Pacific International Lines)", ("pil", "pacific international lines"),
            ("PCIU",), "https://www.pilship.com/en--/120.html?SESSION_BKGNO={ref}", "#0066CC"),
    Carrier("zim", "ZIM", ("zim", "zim integrated shipping"),
            ("ZIMU",), "https://www.zim.com/tools/track-a-shipment?consnumber={ref}", "#00529B"),
    Carrier("wan_hai", "Wan Hai Lines", ("wan hai", "wanhai"),
            ("WHLU",), "https://www.wanhai.com/views/cargoTrack/CargoTrack.xhtml?file=cargo_tracking&key={ref}", "#003366"),
    Carrier("hyundai", "HMM (Hyundai Merchant Marine)", ("hmm", "hyundai", "hyundai merchant marine"),
            ("HDMU",), "https://www.hmm21.com/cms/business/ebiz/trackTrace/trackTrace/index.jsp?blNo={ref}", "#FF6600"),
)

_WHITESPACE = re.compile(r"\s+")


def get_carrier(carrier_id: str) -> Optional[Carrier]:
    for carrier in CARRIERS:
        if carrier.id == carrier_id:
            return carrier
    return None


def _normalize_reference(reference: str) -> str:
    return _WHITESPACE.sub("", reference).upper()


def detect_from_bl(bl_number: Optional[str]) -> Optional[tuple[Carrier, str]]:
    if not bl_number:
        return None
    normalized = _normalize_reference(bl_number)
    for carrier in CARRIERS:
        for prefix in carrier.prefixes:
            if normalized.startswith(prefix):
                return carrier, prefix
    return None


def detect_from_name(carrier_name: Optional[str]) -> Optional[tuple[Carrier, str]]:
    """Match an exact carrier name first, then any alias contained in the text."""

    if not carrier_name:
        return None
    lowered = carrier_name.strip().lower()
    for carrier in CARRIERS:
        if lowered == carrier.name.lower():
            return carrier, "carrier_name"
        for alias in carrier.aliases:
            if alias in lowered:
                return carrier, "carrier_alias"
    return None


def detect_from_container(container_number: Optional[str]) -> Optional[tuple[Carrier, str]]:
    if not container_number:
        return None
    prefix = _normalize_reference(container_number)[:4]
    for carrier in CARRIERS:
        if prefix in carrier.prefixes:
            return carrier, prefix
    return None


def detect_carrier(
    bl_number: Optional[str] = None,
    carrier_name: Optional[str] = None,
    container_number: Optional[str] = None,
) -> Optional[CarrierMatch]:
    """Identify the carrier, trying the most reliable evidence first.

    Order: bill of lading prefix, carrier name / alias, container prefix.
    """
    reference = bl_number or container_number or ""

    by_bl = detect_from_bl(bl_number)
    if by_bl:
        carrier, prefix = by_bl
        return _match(carrier, "bl_prefix", prefix, reference)

    by_name = detect_from_name(carrier_name)
    if by_name:
        carrier, source = by_name
        return _match(carrier, source, None, reference)

    by_container = detect_from_container(container_number)
    if by_container:
        carrier, prefix = by_container
        return _match(carrier, "container_prefix", prefix, reference)

    return None


def _match(carrier: Carrier, detected_from: str, prefix: Optional[str], reference: str) -> CarrierMatch:
    return CarrierMatch(
        id=carrier.id,
        name=carrier.name,
        detected_from=detected_from,
        prefix=prefix,
        tracking_url=carrier.tracking_url(reference) if reference else None,
        color=carrier.color,
    )


def tracking_url(carrier_id: str, reference: Optional[str]) -> Optional[str]:
    carrier = get_carrier(carrier_id)
    if carrier is None or not reference:
        return None
    return carrier.tracking_url(reference)
