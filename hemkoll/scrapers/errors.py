"""Scraper exceptions"""


class ScrapeError(Exception):
    """Base class for listing extraction failures"""


class UnsupportedPortalError(ScrapeError):
    """URL is not from a supported portal"""


class InvalidUrlError(ScrapeError):
    """URL belongs to the portal but is not a listing page"""


class FetchError(ScrapeError):
    """Listing page could not be fetched"""
