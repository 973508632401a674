"""Hemnet URL slug parser

Hemnet sits behind a bot challenge, so the listing URL itself is the only
source we can always read. The slug encodes most of the headline fields:

    /bostad/{type}-{rooms}rum-{area}-{municipality}-{street}-{id}
    /bostad/lagenhet-3rum-sodermalm-stockholms-kommun-gotgatan-12-123456

Municipalities are found by substring search over MUNICIPALITIES in table
order. A municipality name that also occurs inside the street part can be
picked up there instead; this is a known limitation of the heuristic.
"""

import re
from urllib.parse import unquote, urlparse

from hemkoll.models import UNKNOWN_ADDRESS, HemnetListing
from hemkoll.scrapers.errors import InvalidUrlError
from hemkoll.scrapers.html_tools import title_case_slug
from hemkoll.scrapers.patterns import MUNICIPALITIES, NEIGHBOURHOODS, PROPERTY_TYPES

HEMNET_DOMAIN = "hemnet.se"
LISTING_PREFIX = "/bostad/"

_ID_RE = re.compile(r"-(\d+)$")
_ROOMS_RE = re.compile(r"^(\d+(?:,\d+)?)\s*rum-", re.IGNORECASE)
_HALF_ROOMS_RE = re.compile(r"^(\d+)halft\s*rum-", re.IGNORECASE)
_MUNICIPALITY_FALLBACK_RE = re.compile(r"^(.*?)-([\w-]+-(?:kommun|stad))-(.*)$")


def parse_hemnet_url(url: str) -> HemnetListing:
    """Decompose a Hemnet listing URL into a slug-only HemnetListing

    Raises InvalidUrlError when the URL is not a Hemnet listing page.
    Unrecognised slug parts never raise; they just leave fields empty.
    """
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if host != HEMNET_DOMAIN and not host.endswith("." + HEMNET_DOMAIN):
        raise InvalidUrlError("URL must be a hemnet.se listing")

    path = unquote(parsed.path)
    if not path.startswith(LISTING_PREFIX):
        raise InvalidUrlError("URL must be a Hemnet listing page (hemnet.se/bostad/...)")

    slug = path[len(LISTING_PREFIX):].strip("/")

    # Listing id is the trailing number
    listing_id = ""
    remaining = slug
    m = _ID_RE.search(slug)
    if m:
        listing_id = m.group(1)
        remaining = slug[: m.start()]

    # Property type
    property_type = ""
    for key, label in PROPERTY_TYPES.items():
        if remaining.startswith(key + "-"):
            property_type = label
            remaining = remaining[len(key) + 1:]
            break

    # Rooms: "3rum", "2,5rum", or the older "2halftrum"
    rooms = ""
    m = _ROOMS_RE.match(remaining)
    if m:
        rooms = f"{m.group(1)} rum"
        remaining = remaining[m.end():]
    else:
        m = _HALF_ROOMS_RE.match(remaining)
        if m:
            rooms = f"{m.group(1)},5 rum"
            remaining = remaining[m.end():]

    # Municipality splits area (before) from street address (after)
    municipality = ""
    area_slug = ""
    for key, label in MUNICIPALITIES.items():
        idx = remaining.find(key)
        if idx != -1:
            area_slug = remaining[:idx].rstrip("-")
            municipality = label
            remaining = remaining[idx + len(key):].lstrip("-")
            break

    if not municipality:
        m = _MUNICIPALITY_FALLBACK_RE.match(remaining)
        if m:
            area_slug = m.group(1)
            name = re.sub(r"-(?:kommun|stad)$", "", m.group(2))
            municipality = title_case_slug(name)
            remaining = m.group(3)

    area = NEIGHBOURHOODS.get(area_slug) or title_case_slug(area_slug)
    street_address = title_case_slug(remaining)

    return HemnetListing(
        hemnet_url=url,
        listing_id=listing_id,
        address=street_address or UNKNOWN_ADDRESS,
        area=", ".join(part for part in (area, municipality) if part),
        rooms=rooms,
        property_type=property_type,
        confidence="medium" if street_address and municipality else "low",
    )
