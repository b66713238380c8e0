"""
Flipkart scraper — fetch pages through the shared BrowserManager and hand the
markup to the extractors.
"""
import logging
from typing import Optional
from urllib.parse import quote_plus, urlparse

from ..browser import BrowserManager
from ..config import ScraperSettings
from ..errors import HostUnavailable, NoResults, ProductNotFound, UnsupportedUrl
from ..extractors import ProductExtractor, SearchExtractor
from ..models import ProductDetails, SearchResult
from .base import BaseRetailerScraper

logger = logging.getLogger(__name__)

# Page text Flipkart serves instead of a product
_NOT_FOUND_MARKERS = ("has been moved or deleted", "not right!")
_HOST_DOWN_MARKERS = ("Internal Server Error",)


class FlipkartScraper(BaseRetailerScraper):
    """Flipkart product search and detail extraction."""

    retailer_name = "flipkart"

    def __init__(self, browser: BrowserManager, settings: Optional[ScraperSettings] = None):
        self._browser = browser
        self._settings = settings or ScraperSettings.from_env()
        self._product_extractor = ProductExtractor(self._settings)
        self._search_extractor = SearchExtractor(self._settings)

    def build_search_url(self, query: str) -> str:
        return f"{self._settings.base_url}/search?q={quote_plus(query)}"

    def supports(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        domain = self._settings.allowed_domain
        return host == domain or host.endswith(f".{domain}")

    async def search(self, query: str, max_results: int = 5) -> list[SearchResult]:
        """Search Flipkart and return the first page of result cards."""
        search_url = self.build_search_url(query)
        logger.info("Flipkart search: %s", search_url)

        markup = await self._browser.fetch(search_url)
        self._check_page(markup, search_url)

        try:
            results = self._search_extractor.extract_markup(markup)
        except NoResults as e:
            logger.warning("No search results for '%s' (%d cards on page)", query, e.card_count)
            return []

        listings = list(results[:max_results]) if max_results else list(results)
        logger.info("Flipkart search returned %d results for '%s'", len(listings), query)
        return listings

    async def get_details(self, url: str) -> ProductDetails:
        """
        Get full product details from a Flipkart product page.

        Raises:
            UnsupportedUrl: URL is not on flipkart.com
            ProductNotFound / HostUnavailable: Flipkart served an error page
            ExtractionError: the page lacks a name or price
        """
        if not self.supports(url):
            raise UnsupportedUrl(f"Only {self._settings.allowed_domain} is supported: {url}")

        logger.info("Flipkart details: %s", url)
        markup = await self._browser.fetch(url)
        self._check_page(markup, url)
        return self._product_extractor.extract_markup(markup, url=url)

    async def fetch_product(self, result: SearchResult) -> ProductDetails:
        """Follow a search result to its product page."""
        return await self.get_details(result.link)

    @staticmethod
    def _check_page(markup: str, url: str) -> None:
        if any(marker in markup for marker in _NOT_FOUND_MARKERS):
            raise ProductNotFound(f"Link doesn't correspond to any product: {url}")
        if any(marker in markup for marker in _HOST_DOWN_MARKERS):
            raise HostUnavailable(
                "Internal Server Error. Host is down or is blocking requests."
            )
