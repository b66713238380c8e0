"""Page-shape extractors — product detail and search result pages."""
from .base import BaseExtractor, parse_document, PRODUCT_SELECTORS, SEARCH_SELECTORS
from .product import ProductExtractor
from .search import SearchExtractor

__all__ = [
    "BaseExtractor",
    "ProductExtractor",
    "SearchExtractor",
    "parse_document",
    "PRODUCT_SELECTORS",
    "SEARCH_SELECTORS",
]
