"""Search action — orchestrates product searches and detail lookups across retailers."""
import logging
from typing import Optional

from ..browser import BrowserManager
from ..config import ScraperSettings
from ..errors import ScraperError
from ..scrapers.base import BaseRetailerScraper
from ..scrapers.flipkart import FlipkartScraper

logger = logging.getLogger(__name__)

# Registry of available scrapers
SCRAPER_CLASSES = {
    "flipkart": FlipkartScraper,
}


class SearchAction:
    """Orchestrates product search and detail retrieval across retailers."""

    def __init__(self, browser: BrowserManager, settings: Optional[ScraperSettings] = None):
        self._browser = browser
        self._settings = settings or ScraperSettings.from_env()
        self._scrapers: dict[str, BaseRetailerScraper] = {}

    def _get_scraper(self, retailer: str) -> Optional[BaseRetailerScraper]:
        """Get or create a scraper instance for a retailer."""
        if retailer not in self._scrapers:
            cls = SCRAPER_CLASSES.get(retailer)
            if cls is None:
                logger.warning("No scraper for retailer: %s", retailer)
                return None
            self._scrapers[retailer] = cls(self._browser, self._settings)
        return self._scrapers[retailer]

    async def search(
        self,
        query: str,
        max_results: int = 5,
        retailers: list[str] | None = None,
    ) -> dict:
        """
        Search for products across retailers.

        Returns dict with:
            - status: "ok"
            - query: the search query
            - results: list of result dicts (name, link, thumbnail, price, retailer)
            - retailers_searched: list of retailers
        """
        if not retailers or "all" in retailers:
            retailers = list(SCRAPER_CLASSES.keys())

        all_results: list[dict] = []
        retailers_searched: list[str] = []

        for retailer in retailers:
            scraper = self._get_scraper(retailer)
            if scraper is None:
                continue

            try:
                results = await scraper.search(query, max_results=max_results)
                retailers_searched.append(retailer)

                for result in results:
                    all_results.append({**result.to_dict(), "retailer": retailer})

            except ScraperError as e:
                logger.error("Search failed for %s: %s", retailer, e)
                retailers_searched.append(f"{retailer} (error)")

        return {
            "status": "ok",
            "query": query,
            "results": all_results,
            "retailers_searched": retailers_searched,
            "total_results": len(all_results),
        }

    async def get_details(self, url: str) -> dict:
        """
        Get product details from a URL.
        Auto-detects retailer from URL.
        """
        retailer = self._detect_retailer(url)
        if not retailer:
            return {
                "status": "error",
                "message": f"Unsupported retailer URL: {url}. Supported: {list(SCRAPER_CLASSES.keys())}",
            }

        scraper = self._get_scraper(retailer)
        if not scraper:
            return {"status": "error", "message": f"No scraper for: {retailer}"}

        try:
            details = await scraper.get_details(url)
            return {"status": "ok", "details": details.to_dict()}

        except ScraperError as e:
            logger.error("Get details failed for %s: %s", url, e)
            return {"status": "error", "error": type(e).__name__, "message": str(e)}

    def _detect_retailer(self, url: str) -> Optional[str]:
        """Detect retailer from URL."""
        for retailer in SCRAPER_CLASSES:
            scraper = self._get_scraper(retailer)
            if scraper is not None and scraper.supports(url):
                return retailer
        return None
