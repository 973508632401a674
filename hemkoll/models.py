"""Data models

Portal records are plain dataclasses that the scrapers build up pass by
pass. The API speaks the unified ``Listing`` model, serialised with the
camelCase keys the frontend reads (``priceRaw``, ``sourceUrl`` ...).
"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic.alias_generators import to_camel

Confidence = Literal["low", "medium", "high"]
Source = Literal["hemnet", "booli"]

UNKNOWN_ADDRESS = "Okänd adress"


# === Portal records ===

@dataclass(slots=True)
class ListingDocument:
    """A PDF-like attachment linked from a listing page"""
    title: str
    url: str


@dataclass(slots=True)
class HemnetListing:
    """Hemnet listing as recovered from the URL slug and the proxied page"""
    hemnet_url: str
    listing_id: str = ""
    address: str = ""
    area: str = ""
    price: str = ""
    price_raw: int = 0
    avgift: str = ""
    rooms: str = ""
    sqm: str = ""
    floor: str = ""
    brf_name: str = ""
    construction_year: str = ""
    image_url: str = ""
    property_type: str = ""
    confidence: Confidence = "low"


@dataclass(slots=True)
class BooliListing:
    """Booli listing as extracted from the listing page"""
    booli_url: str
    listing_id: str = ""
    address: str = ""
    area: str = ""
    price: str = ""
    price_raw: int = 0
    avgift: str = ""
    rooms: str = ""
    sqm: str = ""
    floor: str = ""
    brf_name: str = ""
    brf_url: str = ""
    construction_year: str = ""
    energy_class: str = ""
    image_url: str = ""
    property_type: str = "Lägenhet"
    documents: list[ListingDocument] = field(default_factory=list)
    confidence: Confidence = "low"
    # Booli's own market valuation
    estimate_price: int = 0
    estimate_low: int = 0
    estimate_high: int = 0
    estimate_price_per_sqm: int = 0
    estimate_formatted: str = ""


# === Request ===

class ScrapeRequest(BaseModel):
    """Listing URL submitted by the frontend"""
    url: StrictStr


# === Response ===

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentItem(_CamelModel):
    title: str
    url: str


class Listing(_CamelModel):
    """Unified listing returned by POST /api/scrape"""
    address: str
    area: str = ""
    price: str = ""
    price_raw: int = 0
    avgift: str = ""
    rooms: str = ""
    sqm: str = ""
    floor: str = ""
    construction_year: str = ""
    energy_class: str = ""
    brf_name: str = ""
    brf_url: str = ""
    image_url: str = ""
    documents: list[DocumentItem] = []
    source_url: str
    source: Source
    listing_id: str = ""
    property_type: str = ""
    confidence: Confidence = "low"
    estimate_price: int = 0
    estimate_low: int = 0
    estimate_high: int = 0
    estimate_price_per_sqm: int = 0
    estimate_formatted: str = ""
    valuation: str = "–"


class ErrorResponse(BaseModel):
    error: str
