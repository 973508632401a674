"""Shared helpers for listing page extraction

Field extraction is expressed as ordered rule lists. A rule is a named
function ``(html) -> value | None``; ``first_match`` runs the rules in
order and returns the first value that is not empty.
"""

import json
import logging
import re
from typing import Any, Callable, Iterator, NamedTuple, Optional, Sequence

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class Rule(NamedTuple):
    name: str
    extract: Callable[[str], Any]


def regex_rule(name: str, pattern: str, convert: Optional[Callable[[re.Match], Any]] = None, flags: int = re.IGNORECASE | re.DOTALL) -> Rule:
    """Rule that searches the raw HTML and converts the match (group 1 by default)"""
    compiled = re.compile(pattern, flags)
    convert = convert or (lambda m: m.group(1).strip())

    def extract(html: str):
        m = compiled.search(html)
        return convert(m) if m else None

    return Rule(name, extract)


def first_match(rules: Sequence[Rule], html: str):
    """Run *rules* in order; first non-empty result wins"""
    for rule in rules:
        value = rule.extract(html)
        if value:
            logger.debug("rule %s matched: %r", rule.name, value)
            return value
    return None


def parse_kronor(text: Any) -> int:
    """'11 500 000 kr' -> 11500000. Anything without digits is 0."""
    digits = re.sub(r"\D", "", str(text or ""))
    return int(digits) if digits else 0


def format_kronor(amount: int) -> str:
    """11500000 -> '11 500 000 kr'"""
    return f"{amount:,}".replace(",", " ") + " kr"


def collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def title_case_slug(segment: str) -> str:
    """'kungsholms-strand-7a' -> 'Kungsholms Strand 7a'"""
    text = segment.replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text).strip()


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def extract_meta(soup: BeautifulSoup, prop: str) -> Optional[str]:
    """Content of <meta property=...> (or name=...), entity-decoded by the parser"""
    tag = soup.find("meta", attrs={"property": prop}) or soup.find("meta", attrs={"name": prop})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def iter_json_ld(soup: BeautifulSoup, limit: Optional[int] = None) -> Iterator[Any]:
    """Yield parsed JSON-LD blocks; blocks that fail to parse are skipped"""
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"}, limit=limit)
    for script in scripts:
        raw = script.string or script.get_text()
        try:
            yield json.loads(raw)
        except ValueError as e:
            # best-effort: malformed block leaves its fields at their defaults
            logger.debug("skipping malformed JSON-LD block: %s", e)


def offer_price(ld: Any) -> int:
    """Price from a schema.org ``offers`` object (or the block itself)"""
    if not isinstance(ld, dict):
        return 0
    offer = ld.get("offers") or ld
    if isinstance(offer, list):
        offer = offer[0] if offer else {}
    if not isinstance(offer, dict):
        return 0
    price = offer.get("price")
    if isinstance(price, bool) or price is None:
        return 0
    if isinstance(price, (int, float)):
        return max(int(price), 0)
    # "4950000.00" must not turn into 495000000
    return parse_kronor(str(price).split(".")[0])
