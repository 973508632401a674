"""Hemnet page enrichment

The slug only gives type, rooms, area and street. Price, fee, living area
and photo come from the listing page, which is fetched through a render
proxy because Hemnet blocks non-browser clients.

Enrichment is best-effort: any failure returns the slug-only listing
unchanged. Fields already filled are never overwritten, except the
address, which the page title spells properly (å/ä/ö, punctuation).

Proxied page structure:
- og:image: listing photo, or a placeholder whose URL contains "fallback"
- og:title: "Götgatan 12 - Södermalm, Stockholm | Hemnet"
- first <script type="application/ld+json">: offers.price, image, and
  name ("Götgatan 12, Stockholm"), used for the address when og:title is
  missing
- fact list text: "Begärt pris", "Avgift", "m²", "rum"
- photos are served from bilder.hemnet.se
"""

import asyncio
import logging
from dataclasses import replace
from urllib.parse import quote

import httpx

from hemkoll.config import HEMNET_TIMEOUT, RENDER_PROXY_URL
from hemkoll.models import HemnetListing
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

NOT_FOUND_MARKERS = ("Sidan hittades inte", "Page not found")
TITLE_NOT_FOUND_MARKER = "hittades inte"
FALLBACK_IMAGE_MARKER = "fallback"


def _kronor(m):
    return parse_kronor(m.group(1)) or None


def _kronor_min_digits(m):
    # "Pris ... kr" is generic enough to hit fees and per-m² prices
    digits = parse_kronor(m.group(1))
    return digits if len(str(digits)) >= 5 else None


PRICE_RULES = (
    regex_rule("begart-pris", r"Begärt pris.*?(\d[\d\s]*)\s*kr", _kronor),
    regex_rule("pris-near-kr", r"Pris.{0,50}?(\d[\d\s]{4,})\s*kr", _kronor_min_digits),
    regex_rule("json-price", r'"price":\s*"?(\d[\d\s]*)"?', _kronor),
)
AVGIFT_RULES = (
    regex_rule("avgift", r"Avgift.{0,50}?(\d[\d\s]*)\s*kr", lambda m: collapse_ws(m.group(1)) + " kr/mån"),
)
SQM_RULES = (
    regex_rule("sqm", r"(\d[\d,]*)\s*m²", lambda m: f"{m.group(1)} m²"),
)
ROOMS_RULES = (
    regex_rule("rooms", r"(\d[\d,]*)\s*rum\b", lambda m: f"{m.group(1)} rum"),
)
IMAGE_RULES = (
    regex_rule("image-cdn", r"https://bilder\.hemnet\.se/[^\"'\s<>]+", lambda m: m.group(0)),
)


def apply_hemnet_page(listing: HemnetListing, html: str) -> HemnetListing:
    """Return a copy of *listing* filled in from the proxied page *html*"""
    if any(marker in html for marker in NOT_FOUND_MARKERS):
        logger.debug("not-found page for %s, keeping slug data", listing.hemnet_url)
        return listing

    enriched = replace(listing)
    soup = make_soup(html)

    # --- og:image ---
    og_image = extract_meta(soup, "og:image")
    if og_image and FALLBACK_IMAGE_MARKER not in og_image and not enriched.image_url:
        enriched.image_url = og_image

    # --- og:title: "Address - Area | Hemnet" ---
    title_address = ""
    og_title = extract_meta(soup, "og:title")
    if og_title and TITLE_NOT_FOUND_MARKER not in og_title:
        title_address = og_title.split(" - ", 1)[0].strip()
        if title_address:
            enriched.address = title_address

    # --- JSON-LD (first block only) ---
    for ld in iter_json_ld(soup, limit=1):
        if not isinstance(ld, dict):
            continue
        if not enriched.price_raw:
            price = offer_price(ld)
            if price > 0:
                enriched.price_raw = price
                enriched.price = format_kronor(price)
        if not title_address:
            name = ld.get("name")
            if isinstance(name, str) and TITLE_NOT_FOUND_MARKER not in name:
                name_address = name.split(",", 1)[0].strip()
                if name_address:
                    enriched.address = name_address
        if not enriched.image_url:
            image = ld.get("image")
            if isinstance(image, list):
                image = image[0] if image else None
            if isinstance(image, str) and image.startswith("http"):
                enriched.image_url = image

    # --- text fallbacks ---
    if not enriched.price_raw:
        price = first_match(PRICE_RULES, html)
        if price:
            enriched.price_raw = price
            enriched.price = format_kronor(price)

    if not enriched.avgift:
        enriched.avgift = first_match(AVGIFT_RULES, html) or ""

    if not enriched.sqm:
        enriched.sqm = first_match(SQM_RULES, html) or ""

    if not enriched.rooms:
        enriched.rooms = first_match(ROOMS_RULES, html) or ""

    if not enriched.image_url:
        enriched.image_url = first_match(IMAGE_RULES, html) or ""

    if enriched.image_url or enriched.price_raw > 0:
        enriched.confidence = "high"

    return enriched


async def enrich_hemnet_listing(
    listing: HemnetListing, client: httpx.AsyncClient | None = None
) -> HemnetListing:
    """Fetch the listing through the render proxy and enrich *listing*

    Never raises. On timeout, non-2xx, or unparseable content the input
    listing is returned as-is.
    """
    try:
        proxy_url = RENDER_PROXY_URL.format(url=quote(listing.hemnet_url, safe=""))
        html = await fetch_html(proxy_url, timeout=HEMNET_TIMEOUT, client=client)
    except (httpx.HTTPError, asyncio.TimeoutError) as e:
        logger.debug("render proxy fetch failed for %s: %r", listing.hemnet_url, e)
        return listing
    except Exception:
        # e.g. a bad RENDER_PROXY_URL template or httpx.InvalidURL
        logger.debug("render proxy fetch failed for %s", listing.hemnet_url, exc_info=True)
        return listing

    try:
        return apply_hemnet_page(listing, html)
    except Exception:
        # best-effort: a page we cannot read must not cost the slug data
        logger.debug("enrichment failed for %s", listing.hemnet_url, exc_info=True)
        return listing
