"""
Browser manager — Playwright lifecycle and page fetching.

Single browser instance shared across all fetches; each fetch opens a page,
reads its markup and closes it again.
"""
import logging
from typing import Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Playwright,
)

from .config import ScraperSettings
from .errors import FetchError

logger = logging.getLogger(__name__)


class BrowserManager:
    """Manages a single Playwright browser instance used to fetch page markup."""

    def __init__(self, settings: Optional[ScraperSettings] = None):
        self._settings = settings or ScraperSettings.from_env()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def headless(self) -> bool:
        return self._settings.headless

    async def _ensure_browser(self) -> Browser:
        """Launch browser if not already running."""
        if self._browser and self._browser.is_connected():
            return self._browser

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=[
                "--disable-dev-shm-usage",
                "--no-sandbox",
            ],
        )
        logger.info("Browser launched (headless=%s)", self.headless)
        return self._browser

    async def _ensure_context(self) -> BrowserContext:
        """Get or create a browser context with the configured headers."""
        if self._context:
            return self._context

        browser = await self._ensure_browser()
        self._context = await browser.new_context(
            viewport={"width": 1920, "height": 1080},
            user_agent=self._settings.user_agent,
            extra_http_headers={"Accept-Language": self._settings.accept_language},
        )
        return self._context

    async def fetch(self, url: str) -> str:
        """Load a URL and return the page markup once the DOM is ready."""
        context = await self._ensure_context()
        page = await context.new_page()
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self._settings.timeout_ms)
            markup = await page.content()
        except PlaywrightError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        finally:
            await page.close()

        logger.info("Fetched %s (%d chars)", url, len(markup))
        return markup

    async def close(self) -> None:
        """Shut down browser and Playwright."""
        if self._context:
            try:
                await self._context.close()
            except PlaywrightError:
                pass
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except PlaywrightError:
                pass
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")
