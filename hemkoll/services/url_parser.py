"""URL dispatch - tell Hemnet and Booli URLs apart and run the matching pipeline"""

import logging
from urllib.parse import urlparse

import httpx

from hemkoll.models import Listing
from hemkoll.scrapers.booli_parser import scrape_booli_listing
from hemkoll.scrapers.errors import UnsupportedPortalError
from hemkoll.scrapers.hemnet_parser import enrich_hemnet_listing
from hemkoll.scrapers.hemnet_url import parse_hemnet_url
from hemkoll.services.normalizer import normalize_booli, normalize_hemnet

logger = logging.getLogger(__name__)

PORTALS = {
    "hemnet.se": "hemnet",
    "booli.se": "booli",
}


def detect_portal(url: str) -> str | None:
    """'hemnet' / 'booli' for a supported host, else None. No network access."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        # e.g. an unbalanced "[" in the netloc
        return None
    if host.startswith("www."):
        host = host[len("www."):]
    for domain, portal in PORTALS.items():
        if host == domain or host.endswith("." + domain):
            return portal
    return None


async def scrape_portal_url(url: str, client: httpx.AsyncClient | None = None) -> Listing:
    """Extract a normalized listing from a Hemnet or Booli URL

    Raises UnsupportedPortalError before any network call when the host is
    neither portal. Other ScrapeErrors propagate from the portal pipelines.
    """
    portal = detect_portal(url)
    if portal == "hemnet":
        logger.info("scraping hemnet listing %s", url)
        listing = parse_hemnet_url(url)
        listing = await enrich_hemnet_listing(listing, client=client)
        return normalize_hemnet(listing)
    elif portal == "booli":
        logger.info("scraping booli listing %s", url)
        return normalize_booli(await scrape_booli_listing(url, client=client))

    raise UnsupportedPortalError("URL must be from hemnet.se or booli.se")
