import httpx
import pytest
from fastapi.testclient import TestClient

from hemkoll.main import app
from hemkoll.routers.scrape import get_http_client

HEMNET_URL = "https://www.hemnet.se/bostad/lagenhet-3rum-sodermalm-stockholms-kommun-gotgatan-12-123456"
BOOLI_URL = "https://www.booli.se/bostad/4711"

HEMNET_PAGE = """
<meta property="og:title" content="Götgatan 12 - Södermalm, Stockholm | Hemnet">
<meta property="og:image" content="https://bilder.hemnet.se/images/main.jpg">
<p>Begärt pris</p><p>4 950 000 kr</p>
"""

BOOLI_PAGE = """
<meta property="og:title" content="Lägenhet till salu på Kungsholmsgatan 20, Kungsholmen, Stockholm – Booli">
<meta property="og:image" content="https://bcdn.se/images/cache/123.jpg">
<p>Utropspris 6 495 000 kr</p>
"""


class Portals:
    """Fake outbound HTTP: records requests, answers per host"""

    def __init__(self):
        self.requests = []
        self.proxy_status = 200
        self.booli_status = 200
        self.booli_page = BOOLI_PAGE

    def __call__(self, request):
        self.requests.append(request)
        if request.url.host == "api.allorigins.win":
            return httpx.Response(self.proxy_status, text=HEMNET_PAGE)
        if request.url.host == "www.booli.se":
            return httpx.Response(self.booli_status, text=self.booli_page)
        return httpx.Response(404)


@pytest.fixture
def portals():
    return Portals()


@pytest.fixture
def client(portals):
    async def fake_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(portals)) as c:
            yield c

    app.dependency_overrides[get_http_client] = fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_scrape_hemnet(client, portals):
    resp = client.post("/api/scrape", json={"url": HEMNET_URL})

    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "hemnet"
    assert body["sourceUrl"] == HEMNET_URL
    assert body["address"] == "Götgatan 12"
    assert body["area"] == "Södermalm, Stockholm"
    assert body["rooms"] == "3 rum"
    assert body["propertyType"] == "Lägenhet"
    assert body["listingId"] == "123456"
    assert body["priceRaw"] == 4950000
    assert body["price"] == "4 950 000 kr"
    assert body["confidence"] == "high"
    assert resp.headers["access-control-allow-origin"] == "*"
    assert len(portals.requests) == 1


def test_scrape_hemnet_is_deterministic(client):
    first = client.post("/api/scrape", json={"url": HEMNET_URL}).json()
    second = client.post("/api/scrape", json={"url": HEMNET_URL}).json()

    assert first == second


def test_scrape_booli(client):
    resp = client.post("/api/scrape", json={"url": BOOLI_URL})

    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "booli"
    assert body["sourceUrl"] == BOOLI_URL
    assert body["address"] == "Kungsholmsgatan 20"
    assert body["priceRaw"] == 6495000
    assert body["confidence"] == "high"
    assert body["documents"] == []


def test_booli_page_without_title_gets_unknown_address(client, portals):
    portals.booli_page = "<html><body><p>nothing</p></body></html>"

    resp = client.post("/api/scrape", json={"url": BOOLI_URL})

    assert resp.status_code == 200
    assert resp.json()["address"] == "Okänd adress"


def test_scrape_accepts_url_without_scheme(client):
    resp = client.post("/api/scrape", json={"url": "www.booli.se/bostad/4711"})

    assert resp.status_code == 200
    assert resp.json()["sourceUrl"] == BOOLI_URL


def test_booli_fetch_failure_is_422(client, portals):
    portals.booli_status = 500

    resp = client.post("/api/scrape", json={"url": BOOLI_URL})

    assert resp.status_code == 422
    assert "500" in resp.json()["error"]


def test_hemnet_proxy_failure_still_returns_slug_data(client, portals):
    portals.proxy_status = 502

    resp = client.post("/api/scrape", json={"url": HEMNET_URL})

    assert resp.status_code == 200
    body = resp.json()
    assert body["address"] == "Gotgatan 12"
    assert body["priceRaw"] == 0
    assert body["confidence"] == "medium"


def test_wrong_listing_shape_is_422(client, portals):
    resp = client.post("/api/scrape", json={"url": "https://www.hemnet.se/salda/bostader"})

    assert resp.status_code == 422
    assert resp.json()["error"]
    assert portals.requests == []


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"url": ""},
        {"url": 42},
        {"url": "https://www.blocket.se/annons/123"},
        {"url": "not a url"},
        {"url": "https://[hemnet.se/bostad/x-1"},
    ],
)
def test_bad_input_is_400_without_network(client, portals, payload):
    resp = client.post("/api/scrape", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]
    assert resp.headers["access-control-allow-origin"] == "*"
    assert portals.requests == []


def test_options_is_allowed(client):
    resp = client.options("/api/scrape")

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(client):
    resp = client.options(
        "/api/scrape",
        headers={"Origin": "https://app.example", "Access-Control-Request-Method": "POST"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_preflight_with_extra_request_headers(client):
    resp = client.options(
        "/api/scrape",
        headers={
            "Origin": "https://app.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, authorization",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_other_methods_are_405(client):
    resp = client.get("/api/scrape")

    assert resp.status_code == 405
    assert resp.json()["error"]


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
