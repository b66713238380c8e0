"""Base extractor — document parsing and the per-field selector chains."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from ..config import ScraperSettings

logger = logging.getLogger(__name__)

# Ordered fallback chains, newest known layout first, generic markup last.
# Product rating chains exclude the seller block, which reuses the same classes.
PRODUCT_SELECTORS: dict[str, tuple[str, ...]] = {
    "name": (
        "h1 span.VU-ZEz",
        "h1 span.B_NuCI",
        "h1.yhB1nd",
        "h1",
        'meta[property="og:title"]',
        "title",
    ),
    "current_price": (
        "div.Nx9bqj.CxhGGd",
        "div._30jeq3._16Jk6d",
        "div.Nx9bqj",
        "div._30jeq3",
        '[itemprop="price"]',
    ),
    "original_price": (
        "div.yRaY8j.A6\\+E6v",
        "div._3I9_wc._2p6lqe",
        "div.yRaY8j",
        "div._3I9_wc",
    ),
    "rating": (
        "div.XQDdHH:not(#sellerName *)",
        "div._3LWZlK:not(#sellerName *)",
        '[itemprop="ratingValue"]:not(#sellerName *)',
    ),
    "rating_count": (
        "span.Wphh3N:not(#sellerName *)",
        "span._2_R_DZ:not(#sellerName *)",
        '[itemprop="ratingCount"]:not(#sellerName *)',
    ),
    "sold_out": (
        "div.Z8JjpR",
        "div._16FRp0",
        'div:-soup-contains-own("Sold Out")',
        'div:-soup-contains-own("currently out of stock")',
        'div:-soup-contains-own("Coming Soon")',
    ),
    "assured": (
        'img[src*="fa_62673a.png"]',
        'img[alt*="Assured"]',
    ),
    "canonical": (
        'link[rel="canonical"]',
        'meta[property="og:url"]',
    ),
    "state_script": ("script",),
    "seller_name": (
        "#sellerName span > span",
        "#sellerName a > span",
        "#sellerName span",
        "#sellerName",
    ),
    "seller_rating": (
        "#sellerName div.XQDdHH",
        "#sellerName div._3LWZlK",
        "#sellerName div",
    ),
    "thumbnails": (
        "ul.ZqtVYK li img",
        "ul._3GnUWp li img",
    ),
    "highlights": (
        "div.xFVion ul li",
        "div._2418kt ul li",
        'div:has(> div:-soup-contains-own("Highlights")) ul li',
    ),
    "offers": (
        "div.I\\+EQVr li",
        "div.XUp0WS li",
        'div:has(> div:-soup-contains-own("Available offers")) li',
    ),
    "spec_container": (
        "div._1OjC5I",
        "div._1UhVsV",
        'div:has(> div:-soup-contains-own("Specifications"))',
    ),
}

SEARCH_SELECTORS: dict[str, tuple[str, ...]] = {
    "cards": (
        "div[data-id]:not(div[data-id] div[data-id])",
        "div._1AtVbE div._13oc-S > div",
        "div.slAVV4",
    ),
    "name": (
        "div.KzDlHZ",
        "div._4rR01T",
        "a.wjcEIp",
        "a.s1Q9rs",
        "a.IRpwTa",
        "a[title]",
    ),
    "link": (
        "a.CGtC98",
        "a._1fQZEK",
        "a.wjcEIp",
        "a.s1Q9rs",
        "a.IRpwTa",
        'a[href*="/p/"]',
        "a[href]",
    ),
    "current_price": (
        "div.Nx9bqj",
        "div._30jeq3",
        '[itemprop="price"]',
    ),
    "original_price": (
        "div.yRaY8j",
        "div._3I9_wc",
    ),
    "thumbnail": (
        "img.DByuf4",
        "img._396cs4",
        "img._2r_T1I",
        "img[src]",
    ),
}


def parse_document(raw_markup: Optional[str]) -> BeautifulSoup:
    """Parse raw markup into a queryable tree. Empty input gives an empty tree."""
    return BeautifulSoup(raw_markup or "", "html.parser")


class BaseExtractor(ABC):
    """Abstract base for page-shape extractors."""

    page_kind: str = "unknown"

    def __init__(self, settings: Optional[ScraperSettings] = None):
        self._settings = settings or ScraperSettings()

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def extract_markup(self, raw_markup: Optional[str], **kwargs: Any) -> Any:
        """Parse raw markup and run the extraction over it."""
        document = parse_document(raw_markup)
        logger.debug("Parsed %s document (%d chars)", self.page_kind, len(raw_markup or ""))
        return self.extract(document, **kwargs)

    @abstractmethod
    def extract(self, document: Tag, **kwargs: Any) -> Any:
        """Build the record(s) for this page shape from a parsed document."""
        ...
