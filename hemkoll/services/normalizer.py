"""Map portal records onto the unified Listing the frontend renders"""

from hemkoll.models import UNKNOWN_ADDRESS, BooliListing, DocumentItem, HemnetListing, Listing


def format_valuation(price_raw: int, estimate: int = 0, low: int = 0, high: int = 0) -> str:
    """Short valuation label in millions, e.g. '9.5–10.5M'

    Booli's own estimate wins; otherwise a rough +5..15% band over the
    asking price; '–' when nothing is known.
    """
    if estimate > 0:
        if low and high:
            return f"{low / 1_000_000:.1f}–{high / 1_000_000:.1f}M"
        return f"~{estimate / 1_000_000:.1f}M"
    if price_raw > 0:
        millions = price_raw / 1_000_000
        return f"{millions * 1.05:.1f}–{millions * 1.15:.1f}M"
    return "–"


def _non_negative(value: int) -> int:
    return value if value and value > 0 else 0


def normalize_hemnet(listing: HemnetListing) -> Listing:
    price_raw = _non_negative(listing.price_raw)
    return Listing(
        address=listing.address or UNKNOWN_ADDRESS,
        area=listing.area,
        price=listing.price if price_raw else "",
        price_raw=price_raw,
        avgift=listing.avgift,
        rooms=listing.rooms,
        sqm=listing.sqm,
        floor=listing.floor,
        construction_year=listing.construction_year,
        brf_name=listing.brf_name,
        image_url=listing.image_url,
        source_url=listing.hemnet_url,
        source="hemnet",
        listing_id=listing.listing_id,
        property_type=listing.property_type,
        confidence=listing.confidence,
        valuation=format_valuation(price_raw),
    )


def normalize_booli(listing: BooliListing) -> Listing:
    price_raw = _non_negative(listing.price_raw)
    estimate = _non_negative(listing.estimate_price)
    low = _non_negative(listing.estimate_low)
    high = _non_negative(listing.estimate_high)

    documents = []
    seen = set()
    for doc in listing.documents:
        if doc.url in seen:
            continue
        seen.add(doc.url)
        documents.append(DocumentItem(title=doc.title, url=doc.url))

    return Listing(
        address=listing.address or UNKNOWN_ADDRESS,
        area=listing.area,
        price=listing.price if price_raw else "",
        price_raw=price_raw,
        avgift=listing.avgift,
        rooms=listing.rooms,
        sqm=listing.sqm,
        floor=listing.floor,
        construction_year=listing.construction_year,
        energy_class=listing.energy_class,
        brf_name=listing.brf_name,
        brf_url=listing.brf_url,
        image_url=listing.image_url,
        documents=documents,
        source_url=listing.booli_url,
        source="booli",
        listing_id=listing.listing_id,
        property_type=listing.property_type,
        confidence=listing.confidence,
        estimate_price=estimate,
        estimate_low=low,
        estimate_high=high,
        estimate_price_per_sqm=_non_negative(listing.estimate_price_per_sqm),
        estimate_formatted=listing.estimate_formatted if estimate else "",
        valuation=format_valuation(price_raw, estimate, low, high),
    )
