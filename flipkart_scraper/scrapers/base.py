"""Base retailer scraper — abstract interface joining fetching to extraction."""
from abc import ABC, abstractmethod

from ..models import ProductDetails, SearchResult


class BaseRetailerScraper(ABC):
    """Abstract base for retailer scrapers."""

    retailer_name: str = "unknown"

    @abstractmethod
    def build_search_url(self, query: str) -> str:
        """URL of the first search results page for a query."""
        ...

    @abstractmethod
    def supports(self, url: str) -> bool:
        """Whether a product URL belongs to this retailer."""
        ...

    @abstractmethod
    async def search(self, query: str, max_results: int = 5) -> list[SearchResult]:
        """Search for products and return result cards."""
        ...

    @abstractmethod
    async def get_details(self, url: str) -> ProductDetails:
        """Get full product details from a product page URL."""
        ...
