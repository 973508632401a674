"""Listing scrape API router"""

from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, HTTPException, Response

from hemkoll.models import ErrorResponse, Listing, ScrapeRequest
from hemkoll.scrapers.errors import ScrapeError, UnsupportedPortalError
from hemkoll.services.url_parser import scrape_portal_url

router = APIRouter(tags=["scrape"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound client per request"""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


@router.post(
    "/scrape",
    response_model=Listing,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def scrape(req: ScrapeRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    """Extract a listing from a Hemnet or Booli URL"""
    url = req.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail='Missing or invalid "url"')
    # Pasted links often lack the scheme
    if "://" not in url:
        url = "https://" + url

    try:
        return await scrape_portal_url(url, client=client)
    except UnsupportedPortalError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ScrapeError as e:
        raise HTTPException(status_code=422, detail=str(e) or "Failed to parse listing")


@router.options("/scrape")
async def scrape_preflight():
    """Preflight without CORS request headers still gets a 200"""
    return Response(status_code=200, headers=CORS_HEADERS)
