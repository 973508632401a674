"""Booli listing page parser

Booli has no bot protection, so the listing page is fetched directly. A
failed fetch is an error for the caller, not a degraded result.

Page structure:
- og:title: "Lägenhet till salu på Kungsholmsgatan 20, Kungsholmen, Stockholm – Booli"
  (also "snart till salu på ...")
- og:description: "Lägenhet till salu på Kungsholmsgatan 20, 3 rum, 81 m², säljs av ..."
- several <script type="application/ld+json">: BreadcrumbList whose last
  item links the bostadsrättsförening, Product/RealEstateListing with offers.price
- embedded client state: "estimate": {"price": {"raw": 10000000, "formatted": "10 000 000 kr"},
  "low": {"value": "9 540 000"}, "high": {"value": "10 500 000"} ...}
- fact list text: "Utropspris", "Avgift", "Boarea", "Byggår", "våning 3 av 5", "Energiklass C"
- attachments: <a href="...pdf">Årsredovisning 2023</a>
"""

import asyncio
import logging
import re
from urllib.parse import urljoin, urlparse

import httpx

from hemkoll.config import ACCEPT_LANGUAGE, BOOLI_TIMEOUT, USER_AGENT
from hemkoll.models import BooliListing, ListingDocument
from hemkoll.scrapers.errors import FetchError, InvalidUrlError
from hemkoll.scrapers.html_tools import (
    collapse_ws,
    extract_meta,
    first_match,
    format_kronor,
    iter_json_ld,
    make_soup,
    offer_price,
    parse_kronor,
    regex_rule,
)
from hemkoll.scrapers.http_client import fetch_html

logger = logging.getLogger(__name__)

BOOLI_DOMAIN = "booli.se"
BOOLI_ORIGIN = "https://www.booli.se"
BRF_MARKER = "bostadsrattsforening"
MIN_PLAUSIBLE_PRICE = 100_000
DOCUMENT_NAMES = ("Objektsbeskrivning", "Årsredovisning", "Planritning", "Energideklaration", "Stadgar")

_LISTING_PATH_RE = re.compile(r"/bostad/(\d+)")
_TITLE_RE = re.compile(r"(?:snart till salu|till salu)\s+på\s+(.+?)\s*[–—\-]\s*Booli", re.IGNORECASE)


def _kronor(m):
    return parse_kronor(m.group(1)) or None


def _plausible_price(m):
    price = parse_kronor(m.group(1))
    return price if price > MIN_PLAUSIBLE_PRICE else None


# --- embedded valuation ---
ESTIMATE_RAW_RE = re.compile(r'"estimate"\s*:\s*\{[^}]*"price"\s*:\s*\{[^}]*"raw"\s*:\s*(\d+)[^}]*\}[^}]*\}')
ESTIMATE_FORMATTED_RULES = (
    regex_rule("estimate-formatted", r'"estimate".{0,500}?"formatted"\s*:\s*"([^"]+)"', flags=re.DOTALL),
)
ESTIMATE_LOW_RULES = (
    regex_rule("estimate-low-value", r'"estimate".{0,800}?"low"\s*:\s*\{[^}]*"value"\s*:\s*"([^"]+)"', _kronor, flags=re.DOTALL),
)
ESTIMATE_HIGH_RULES = (
    regex_rule("estimate-high-value", r'"estimate".{0,800}?"high"\s*:\s*\{[^}]*"value"\s*:\s*"([^"]+)"', _kronor, flags=re.DOTALL),
    regex_rule("estimate-high-formatted", r'"estimate".{0,800}?"high"\s*:\s*\{[^}]*"formatted"\s*:\s*"([^"]+)"', _kronor, flags=re.DOTALL),
)
ESTIMATE_TEXT_RULES = (
    regex_rule("estimate-text", r"(?:värdering|Uppskattat\s*värde).{0,200}?(\d[\d\s]*)\s*kr", _plausible_price),
)
PRICE_PER_SQM_RULES = (
    regex_rule("price-per-sqm", r"(\d[\d\s]*)\s*kr/m²", _kronor),
)

# --- asking price, in order of trust ---
PRICE_RULES = (
    regex_rule("utropspris", r"Utropspris.*?(\d[\d\s]*)\s*kr", _plausible_price),
    regex_rule("begart-pris", r"Begärt pris.*?(\d[\d\s]*)\s*kr", _plausible_price),
    regex_rule("slutpris", r"Slutpris.*?(\d[\d\s]*)\s*kr", _plausible_price),
    regex_rule("pris-near-kr", r"Pris.{0,80}?(\d[\d\s]{4,})\s*kr", _plausible_price),
)

# --- facts ---
AVGIFT_RULES = (
    regex_rule("avgift-label", r"Avgift.{0,60}?(\d[\d\s]*)\s*kr/mån", lambda m: collapse_ws(m.group(1)) + " kr/mån"),
    regex_rule("avgift-attr", r"avgift[^>]*>\s*(\d[\d\s]*)\s*kr", lambda m: collapse_ws(m.group(1)) + " kr/mån"),
)
SQM_RULES = (
    regex_rule("boarea", r"Boarea.{0,40}?(\d+(?:,\d+)?)\s*m²", lambda m: f"{m.group(1)} m²"),
    regex_rule("sqm", r"(\d+(?:,\d+)?)\s*m²", lambda m: f"{m.group(1)} m²"),
)
ROOMS_RULES = (
    regex_rule("rum-label", r"Rum.{0,40}?(\d+(?:,\d+)?)\s*rum\b", lambda m: f"{m.group(1)} rum"),
    regex_rule("rooms", r"(\d+(?:,\d+)?)\s*rum\b", lambda m: f"{m.group(1)} rum"),
)
YEAR_RULES = (
    regex_rule("byggar", r"Byggår.{0,40}?(\d{4})"),
)
FLOOR_RULES = (
    regex_rule("vaning", r"våning\s*(\d+)\s*av\s*(\d+)", lambda m: f"{m.group(1)} av {m.group(2)}"),
)
ENERGY_RULES = (
    regex_rule("energiklass", r"(?i:energiklass)\s*:?\s*([A-G])\b", flags=0),
)


def parse_booli_url(url: str) -> str:
    """Validate a Booli listing URL and return its listing id"""
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if host != BOOLI_DOMAIN and not host.endswith("." + BOOLI_DOMAIN):
        raise InvalidUrlError("URL must be a booli.se listing")

    m = _LISTING_PATH_RE.search(parsed.path)
    if not m:
        raise InvalidUrlError("URL must be a Booli listing page (booli.se/bostad/...)")
    return m.group(1)


def _apply_og_tags(listing: BooliListing, soup) -> None:
    og_image = extract_meta(soup, "og:image")
    if og_image:
        listing.image_url = og_image

    og_title = extract_meta(soup, "og:title")
    if og_title:
        m = _TITLE_RE.search(og_title)
        if m:
            parts = [p.strip() for p in m.group(1).split(",")]
            listing.address = parts[0]
            if len(parts) >= 3:
                listing.area = f"{parts[1]}, {parts[2]}"
            elif len(parts) == 2:
                listing.area = parts[1]

    # Fallback: page heading
    if not listing.address:
        h1 = soup.find("h1")
        if h1:
            listing.address = collapse_ws(h1.get_text(" ", strip=True))

    og_desc = extract_meta(soup, "og:description")
    if og_desc:
        m = re.search(r"(\d+(?:,\d+)?)\s*rum", og_desc)
        if m:
            listing.rooms = f"{m.group(1)} rum"
        m = re.search(r"(\d+(?:,\d+)?)\s*m²", og_desc)
        if m:
            listing.sqm = f"{m.group(1)} m²"

        desc = og_desc.lower()
        if desc.startswith("villa"):
            listing.property_type = "Villa"
        elif desc.startswith("radhus"):
            listing.property_type = "Radhus"
        elif desc.startswith("lägenhet"):
            listing.property_type = "Lägenhet"


def _apply_json_ld(listing: BooliListing, soup) -> None:
    for ld in iter_json_ld(soup):
        if not isinstance(ld, dict):
            continue

        # BreadcrumbList links the housing association
        if ld.get("@type") == "BreadcrumbList" and isinstance(ld.get("itemListElement"), list):
            for item in ld["itemListElement"]:
                if not isinstance(item, dict):
                    continue
                link = item.get("item")
                if isinstance(link, dict):
                    link = link.get("@id")
                if isinstance(link, str) and BRF_MARKER in link and not listing.brf_url:
                    listing.brf_name = str(item.get("name") or "")
                    listing.brf_url = link

        if not listing.price_raw:
            price = offer_price(ld) if "offers" in ld else 0
            if price > 0:
                listing.price_raw = price
                listing.price = format_kronor(price)


def _apply_estimate(listing: BooliListing, html: str) -> None:
    m = ESTIMATE_RAW_RE.search(html)
    raw_price = int(m.group(1)) if m else 0
    if raw_price > 0:
        listing.estimate_price = raw_price
        listing.estimate_formatted = first_match(ESTIMATE_FORMATTED_RULES, html) or format_kronor(raw_price)
        listing.estimate_low = first_match(ESTIMATE_LOW_RULES, html) or 0
        listing.estimate_high = first_match(ESTIMATE_HIGH_RULES, html) or 0

    # Fallback: valuation quoted in the visible text
    if not listing.estimate_price:
        value = first_match(ESTIMATE_TEXT_RULES, html)
        if value:
            listing.estimate_price = value
            listing.estimate_formatted = format_kronor(value)

    if not listing.estimate_price_per_sqm:
        listing.estimate_price_per_sqm = first_match(PRICE_PER_SQM_RULES, html) or 0


def _apply_facts(listing: BooliListing, html: str) -> None:
    if not listing.price_raw:
        price = first_match(PRICE_RULES, html)
        if price:
            listing.price_raw = price
            listing.price = format_kronor(price)

    if not listing.avgift:
        listing.avgift = first_match(AVGIFT_RULES, html) or ""
    if not listing.sqm:
        listing.sqm = first_match(SQM_RULES, html) or ""
    if not listing.rooms:
        listing.rooms = first_match(ROOMS_RULES, html) or ""
    if not listing.construction_year:
        listing.construction_year = first_match(YEAR_RULES, html) or ""
    if not listing.floor:
        listing.floor = first_match(FLOOR_RULES, html) or ""
    if not listing.energy_class:
        listing.energy_class = first_match(ENERGY_RULES, html) or ""


def _apply_documents(listing: BooliListing, soup) -> None:
    seen = {doc.url for doc in listing.documents}
    anchors = soup.find_all("a", href=True)

    # 1) anything linking a PDF
    for a in anchors:
        href = a["href"].strip()
        if ".pdf" not in href.lower():
            continue
        url = urljoin(BOOLI_ORIGIN, href)
        if url in seen:
            continue
        seen.add(url)
        listing.documents.append(ListingDocument(title=a.get_text(" ", strip=True) or "Dokument", url=url))

    # 2) well-known document names, whatever the file type
    for name in DOCUMENT_NAMES:
        for a in anchors:
            if name.lower() not in a.get_text(" ", strip=True).lower():
                continue
            url = urljoin(BOOLI_ORIGIN, a["href"].strip())
            if url in seen:
                continue
            seen.add(url)
            listing.documents.append(ListingDocument(title=name, url=url))


def parse_booli_html(url: str, listing_id: str, html: str) -> BooliListing:
    """Extract a BooliListing from the listing page *html*"""
    listing = BooliListing(booli_url=url, listing_id=listing_id)
    soup = make_soup(html)

    _apply_og_tags(listing, soup)
    _apply_json_ld(listing, soup)
    _apply_estimate(listing, html)
    _apply_facts(listing, html)
    _apply_documents(listing, soup)

    if listing.image_url and listing.address:
        listing.confidence = "high" if listing.price_raw > 0 else "medium"
    else:
        listing.confidence = "low"
    return listing


async def scrape_booli_listing(url: str, client: httpx.AsyncClient | None = None) -> BooliListing:
    """Fetch and parse a Booli listing

    Raises InvalidUrlError for a non-listing URL and FetchError when the
    page cannot be fetched.
    """
    listing_id = parse_booli_url(url)
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": ACCEPT_LANGUAGE,
    }
    try:
        html = await fetch_html(url, timeout=BOOLI_TIMEOUT, headers=headers, client=client)
    except httpx.HTTPStatusError as e:
        logger.warning("Booli fetch failed for %s: HTTP %d", url, e.response.status_code)
        raise FetchError(f"Failed to fetch Booli listing: {e.response.status_code}") from e
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.warning("Booli fetch timed out for %s", url)
        raise FetchError("Timed out fetching Booli listing") from e
    except httpx.HTTPError as e:
        logger.warning("Booli fetch failed for %s: %r", url, e)
        raise FetchError(f"Failed to fetch Booli listing: {e}") from e

    return parse_booli_html(url, listing_id, html)
