import pytest

from hemkoll.scrapers.errors import InvalidUrlError
from hemkoll.scrapers.hemnet_url import UNKNOWN_ADDRESS, parse_hemnet_url


def test_parse_full_slug():
    url = "https://www.hemnet.se/bostad/lagenhet-3rum-sodermalm-stockholms-kommun-gotgatan-12-123456"

    listing = parse_hemnet_url(url)

    assert listing.property_type == "Lägenhet"
    assert listing.rooms == "3 rum"
    assert listing.area == "Södermalm, Stockholm"
    assert listing.address == "Gotgatan 12"
    assert listing.listing_id == "123456"
    assert listing.confidence == "medium"
    assert listing.hemnet_url == url
    assert listing.price == ""
    assert listing.price_raw == 0
    assert listing.image_url == ""


def test_parse_decimal_rooms_and_unknown_neighbourhood():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/villa-2,5rum-djursholm-danderyds-kommun-vendevagen-4b-987"
    )

    assert listing.property_type == "Villa"
    assert listing.rooms == "2,5 rum"
    assert listing.area == "Djursholm, Danderyd"
    assert listing.address == "Vendevagen 4b"


def test_parse_percent_encoded_rooms():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/lagenhet-1%2C5rum-vasastan-stockholms-kommun-odengatan-3-55"
    )

    assert listing.rooms == "1,5 rum"
    assert listing.area == "Vasastan, Stockholm"


def test_parse_half_room_token():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/lagenhet-2halftrum-kungsholmen-stockholms-kommun-fleminggatan-9-42"
    )

    assert listing.rooms == "2,5 rum"
    assert listing.address == "Fleminggatan 9"


def test_parse_without_property_type():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/3rum-limhamn-malmo-kommun-strandgatan-1-77"
    )

    assert listing.property_type == ""
    assert listing.rooms == "3 rum"
    assert listing.area == "Limhamn, Malmö"


def test_stad_variant_municipality():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/radhus-5rum-rasunda-solna-stad-vallgatan-2-31"
    )

    assert listing.property_type == "Radhus"
    assert listing.area == "Rasunda, Solna"
    assert listing.address == "Vallgatan 2"


def test_unknown_municipality_uses_kommun_pattern():
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/fritidshus-4rum-sandhamn-norra-ostersjons-kommun-strandvagen-5-101"
    )

    assert listing.property_type == "Fritidshus"
    assert listing.area == "Sandhamn, Norra Ostersjons"
    assert listing.address == "Strandvagen 5"
    assert listing.confidence == "medium"


def test_unrecognised_location_becomes_address():
    listing = parse_hemnet_url("https://www.hemnet.se/bostad/lagenhet-2rum-storgatan-8-900")

    assert listing.address == "Storgatan 8"
    assert listing.area == ""
    assert listing.confidence == "low"


def test_empty_slug_falls_back_to_unknown_address():
    listing = parse_hemnet_url("https://www.hemnet.se/bostad/lagenhet-2rum-stockholms-kommun-1234")

    assert listing.address == UNKNOWN_ADDRESS
    assert listing.area == "Stockholm"
    assert listing.confidence == "low"


def test_municipality_inside_street_is_matched_first():
    # First hit in table order wins, not the one in the municipality position
    listing = parse_hemnet_url(
        "https://www.hemnet.se/bostad/lagenhet-2rum-sickla-nacka-kommun-stockholms-kommun-vag-3-5"
    )

    assert listing.area == "Sickla Nacka Kommun, Stockholm"
    assert listing.address == "Vag 3"


@pytest.mark.parametrize(
    "url",
    [
        "https://www.booli.se/bostad/123",
        "https://www.nothemnet.se/bostad/lagenhet-2rum-x-1",
        "https://www.hemnet.se/salda/lagenhet-2rum-x-1",
        "https://www.hemnet.se/",
    ],
)
def test_rejects_non_listing_urls(url):
    with pytest.raises(InvalidUrlError):
        parse_hemnet_url(url)
