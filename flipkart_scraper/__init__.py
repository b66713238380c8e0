"""
Flipkart scraper — extract product details and search results from page markup.

The extraction engine is pure and synchronous: hand it the HTML of a product
or search page and get back immutable records, or a typed ExtractionError.
"""
from typing import Optional

from .config import ScraperSettings
from .errors import (
    ExtractionError,
    FetchError,
    MalformedCount,
    MalformedPrice,
    MalformedRating,
    MalformedUrl,
    MissingMandatoryField,
    NoResults,
    ScraperError,
)
from .extractors import ProductExtractor, SearchExtractor
from .models import Availability, Price, ProductDetails, Rating, SearchResult, Seller


def extract_product(
    raw_markup: str,
    url: Optional[str] = None,
    settings: Optional[ScraperSettings] = None,
) -> ProductDetails:
    """Extract a ProductDetails record from the HTML of a product page."""
    return ProductExtractor(settings).extract_markup(raw_markup, url=url)


def extract_search(
    raw_markup: str,
    settings: Optional[ScraperSettings] = None,
) -> tuple[SearchResult, ...]:
    """Extract the result cards of a search page, in document order."""
    return SearchExtractor(settings).extract_markup(raw_markup)


__all__ = [
    "extract_product",
    "extract_search",
    "ScraperSettings",
    "Availability",
    "Price",
    "ProductDetails",
    "Rating",
    "SearchResult",
    "Seller",
    "ScraperError",
    "ExtractionError",
    "FetchError",
    "MissingMandatoryField",
    "MalformedPrice",
    "MalformedRating",
    "MalformedCount",
    "MalformedUrl",
    "NoResults",
]
