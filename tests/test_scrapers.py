"""Tests for the Flipkart scraper and the search action (mocked BrowserManager)."""
import pytest
from unittest.mock import AsyncMock

from flipkart_scraper.actions.search import SearchAction, SCRAPER_CLASSES
from flipkart_scraper.browser import BrowserManager
from flipkart_scraper.errors import (
    FetchError,
    HostUnavailable,
    MissingMandatoryField,
    ProductNotFound,
    UnsupportedUrl,
)
from flipkart_scraper.models import ProductDetails, SearchResult
from flipkart_scraper.scrapers.base import BaseRetailerScraper
from flipkart_scraper.scrapers.flipkart import FlipkartScraper

PRODUCT_URL = "https://www.flipkart.com/samsung-galaxy-f13/p/itm583ef432b2b0c"


@pytest.fixture
def mock_browser():
    return AsyncMock(spec=BrowserManager)


# ---- FlipkartScraper ----

class TestFlipkartScraper:
    @pytest.fixture
    def scraper(self, mock_browser, settings):
        return FlipkartScraper(mock_browser, settings)

    def test_is_retailer_scraper(self, scraper):
        assert isinstance(scraper, BaseRetailerScraper)
        assert scraper.retailer_name == "flipkart"

    def test_build_search_url(self, scraper):
        assert scraper.build_search_url("samsung galaxy f13") == (
            "https://www.flipkart.com/search?q=samsung+galaxy+f13"
        )

    @pytest.mark.parametrize("url,expected", [
        (PRODUCT_URL, True),
        ("https://dl.flipkart.com/s/abc123", True),
        ("https://flipkart.com/p/itm1", True),
        ("https://www.amazon.in/dp/B01234", False),
        ("https://notflipkart.com/p/itm1", False),
        ("not a url", False),
    ])
    def test_supports(self, scraper, url, expected):
        assert scraper.supports(url) is expected

    @pytest.mark.asyncio
    async def test_search_returns_results(self, scraper, mock_browser, search_html):
        mock_browser.fetch.return_value = search_html

        results = await scraper.search("samsung phone", max_results=5)

        mock_browser.fetch.assert_awaited_once_with("https://www.flipkart.com/search?q=samsung+phone")
        assert len(results) == 2
        assert all(isinstance(r, SearchResult) for r in results)
        assert results[0].name == "SAMSUNG Galaxy F13"

    @pytest.mark.asyncio
    async def test_search_truncates(self, scraper, mock_browser, search_html):
        mock_browser.fetch.return_value = search_html
        results = await scraper.search("samsung phone", max_results=1)
        assert [r.name for r in results] == ["SAMSUNG Galaxy F13"]

    @pytest.mark.asyncio
    async def test_search_no_results(self, scraper, mock_browser):
        mock_browser.fetch.return_value = "<html><body><p>No results found</p></body></html>"
        assert await scraper.search("nonexistent product xyz") == []

    @pytest.mark.asyncio
    async def test_get_details(self, scraper, mock_browser, product_html):
        mock_browser.fetch.return_value = product_html

        details = await scraper.get_details(PRODUCT_URL)

        assert isinstance(details, ProductDetails)
        assert details.name == "SAMSUNG Galaxy F13 (Waterfall Blue, 64 GB)"
        assert details.price.current == 11999

    @pytest.mark.asyncio
    async def test_get_details_page_url_fallback(self, scraper, mock_browser, minimal_product_html):
        mock_browser.fetch.return_value = minimal_product_html
        details = await scraper.get_details(PRODUCT_URL)
        assert details.share_url == PRODUCT_URL

    @pytest.mark.asyncio
    async def test_get_details_unsupported_url(self, scraper, mock_browser):
        with pytest.raises(UnsupportedUrl):
            await scraper.get_details("https://www.amazon.in/dp/B01234")
        mock_browser.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_details_moved_or_deleted(self, scraper, mock_browser):
        mock_browser.fetch.return_value = "<html><body>This page has been moved or deleted</body></html>"
        with pytest.raises(ProductNotFound):
            await scraper.get_details(PRODUCT_URL)

    @pytest.mark.asyncio
    async def test_get_details_host_down(self, scraper, mock_browser):
        mock_browser.fetch.return_value = "<html><body>Internal Server Error</body></html>"
        with pytest.raises(HostUnavailable):
            await scraper.get_details(PRODUCT_URL)

    @pytest.mark.asyncio
    async def test_get_details_without_name(self, scraper, mock_browser):
        mock_browser.fetch.return_value = '<html><body><div class="Nx9bqj">₹999</div></body></html>'
        with pytest.raises(MissingMandatoryField):
            await scraper.get_details(PRODUCT_URL)

    @pytest.mark.asyncio
    async def test_fetch_product_follows_link(self, scraper, mock_browser, search_html, product_html):
        mock_browser.fetch.return_value = search_html
        first = (await scraper.search("samsung"))[0]

        mock_browser.fetch.return_value = product_html
        details = await scraper.fetch_product(first)

        mock_browser.fetch.assert_awaited_with(first.link)
        assert details.product_id == "MOBGENJWBZFPZDRH"


# ---- SearchAction ----

class TestSearchAction:
    @pytest.fixture
    def action(self, mock_browser, settings):
        return SearchAction(mock_browser, settings)

    def test_registry(self):
        assert SCRAPER_CLASSES == {"flipkart": FlipkartScraper}

    def test_detect_retailer_flipkart(self, action):
        assert action._detect_retailer(PRODUCT_URL) == "flipkart"

    def test_detect_retailer_unknown(self, action):
        assert action._detect_retailer("https://shop.example.com/item") is None

    @pytest.mark.asyncio
    async def test_search_wires_to_scraper(self, action, mock_browser, search_html):
        mock_browser.fetch.return_value = search_html

        result = await action.search("phone", max_results=3)

        assert result["status"] == "ok"
        assert result["total_results"] == 2
        assert result["results"][0]["name"] == "SAMSUNG Galaxy F13"
        assert result["results"][0]["price"] == {"current": 11999, "original": 14999}
        assert result["results"][0]["retailer"] == "flipkart"
        assert result["retailers_searched"] == ["flipkart"]

    @pytest.mark.asyncio
    async def test_search_unsupported_retailer(self, action):
        result = await action.search("phone", retailers=["amazon"])
        assert result["status"] == "ok"
        assert result["total_results"] == 0

    @pytest.mark.asyncio
    async def test_search_fetch_failure(self, action, mock_browser):
        mock_browser.fetch.side_effect = FetchError("timeout")
        result = await action.search("phone")
        assert result["total_results"] == 0
        assert result["retailers_searched"] == ["flipkart (error)"]

    @pytest.mark.asyncio
    async def test_get_details(self, action, mock_browser, product_html):
        mock_browser.fetch.return_value = product_html
        result = await action.get_details(PRODUCT_URL)
        assert result["status"] == "ok"
        assert result["details"]["seller"] == {"name": "RetailNet", "rating": 4.5}

    @pytest.mark.asyncio
    async def test_get_details_unsupported_url(self, action):
        result = await action.get_details("https://shop.example.com/item")
        assert result["status"] == "error"
        assert "Unsupported" in result["message"]

    @pytest.mark.asyncio
    async def test_get_details_extraction_error(self, action, mock_browser):
        mock_browser.fetch.return_value = "<html><body><h1>Phone</h1></body></html>"
        result = await action.get_details(PRODUCT_URL)
        assert result["status"] == "error"
        assert result["error"] == "MissingMandatoryField"
        assert "price" in result["message"]
