"""Scraper for the games the Epic Games Store is currently giving away."""
from .errors import EmptyDocumentError, Err, Ok, ParseError, Result, ScrapeError, TransportError
from .main import scrape
from .models import FreeGame

__all__ = [
    "EmptyDocumentError",
    "Err",
    "FreeGame",
    "Ok",
    "ParseError",
    "Result",
    "ScrapeError",
    "TransportError",
    "scrape",
]
