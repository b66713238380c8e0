"""
Product extractor — builds a ProductDetails record from a product page.

Only the name and the current price are mandatory; every other field degrades
to absent/empty when its markup is missing or unparseable.
"""
import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from bs4 import Tag

from ..errors import (
    MalformedCount,
    MalformedPrice,
    MalformedRating,
    MalformedUrl,
    MissingMandatoryField,
)
from ..models import Availability, Price, ProductDetails, Rating, Seller
from ..normalizers import (
    clean_text,
    detect_availability,
    normalize_url,
    parse_count,
    parse_price,
    parse_rating,
)
from ..selector_resolver import (
    is_present,
    node_text,
    resolve,
    resolve_all,
    resolve_text,
)
from .base import PRODUCT_SELECTORS, BaseExtractor

logger = logging.getLogger(__name__)

S = PRODUCT_SELECTORS

INITIAL_STATE_MARKER = "window.__INITIAL_STATE__"
DEFAULT_SPEC_SECTION = "General"

_PRODUCT_ID_PATTERN = re.compile(r'"productId"\s*:\s*"([^"]+)"')
_SHARE_URL_PATTERN = re.compile(r'"(https?://[^"\s]*product\.share\.pp)')


def _first_string(node: Optional[Tag]) -> str:
    """First non-blank text fragment of a node ('RetailNet' from 'RetailNet 4.5')."""
    if node is None:
        return ""
    for fragment in node.stripped_strings:
        return clean_text(fragment)
    return ""


class ProductExtractor(BaseExtractor):
    """Product detail page extraction."""

    page_kind = "product"

    def extract(self, document: Tag, url: Optional[str] = None) -> ProductDetails:
        """
        Extract a product record from a parsed product page.

        Args:
            document: Parsed product page
            url: Page URL, used as the last share_url fallback

        Raises:
            MissingMandatoryField: name or current price not found
            MalformedPrice: current price present but unparseable
        """
        name = resolve_text(document, S["name"])
        if not name:
            raise MissingMandatoryField("name")

        price_node = resolve(document, S["current_price"])
        price = self._price(document, price_node)
        availability = detect_availability(is_present(document, S["sold_out"]))
        in_stock = availability is Availability.IN_STOCK
        state_script = self._initial_state(document)
        product_id = self._product_id(document, state_script)

        details = ProductDetails(
            name=name,
            price=price,
            availability=availability,
            rating=self._rating(document),
            assured=self._assured(price_node),
            share_url=self._share_url(document, state_script, product_id, url),
            product_id=product_id,
            # Seller and offers on out-of-stock pages belong to other listings
            seller=self._seller(document) if in_stock else None,
            thumbnails=self._thumbnails(document),
            highlights=self._texts(document, S["highlights"]),
            offers=self._texts(document, S["offers"]) if in_stock else (),
            specifications=self._specifications(document),
        )
        logger.debug(
            "Extracted product '%s' (price=%d, %s)",
            details.name, details.price.current, details.availability.value,
        )
        return details

    # ---- Mandatory ----

    def _price(self, document: Tag, price_node: Optional[Tag]) -> Price:
        current_text = node_text(price_node)
        if not current_text:
            raise MissingMandatoryField("price")
        current = parse_price(current_text)

        original = None
        original_text = resolve_text(document, S["original_price"])
        if original_text:
            try:
                original = parse_price(original_text)
            except MalformedPrice as e:
                logger.debug("Dropping original price: %s", e)
        if original is not None and original < current:
            logger.debug("Dropping original price %d below current %d", original, current)
            original = None
        return Price(current=current, original=original)

    # ---- Optional scalars ----

    @staticmethod
    def _assured(price_node: Tag) -> bool:
        """Assured badge of the product block itself, which precedes the price."""
        for image in price_node.find_all_previous("img"):
            if any(image.css.match(selector) for selector in S["assured"]):
                return True
        return False

    def _rating(self, document: Tag) -> Optional[Rating]:
        text = resolve_text(document, S["rating"])
        if not text:
            return None
        try:
            value = parse_rating(text)
        except MalformedRating as e:
            logger.debug("Dropping rating: %s", e)
            return None

        count = 0
        count_text = resolve_text(document, S["rating_count"])
        if count_text:
            try:
                count = parse_count(count_text)
            except MalformedCount as e:
                logger.debug("Rating count unreadable: %s", e)
        return Rating(value=value, count=count)

    def _seller(self, document: Tag) -> Optional[Seller]:
        name = _first_string(resolve(document, S["seller_name"]))
        if not name:
            return None

        rating = None
        rating_text = resolve_text(document, S["seller_rating"])
        if rating_text:
            try:
                rating = parse_rating(rating_text)
            except MalformedRating as e:
                logger.debug("Dropping seller rating: %s", e)
        return Seller(name=name, rating=rating)

    @staticmethod
    def _initial_state(document: Tag) -> str:
        for script in resolve_all(document, S["state_script"]):
            text = script.string or ""
            if text.lstrip().startswith(INITIAL_STATE_MARKER):
                return text
        return ""

    def _product_id(self, document: Tag, state_script: str) -> Optional[str]:
        match = _PRODUCT_ID_PATTERN.search(state_script)
        if match:
            return match.group(1)
        canonical = self._canonical_href(document)
        if canonical:
            pid = parse_qs(urlparse(canonical).query).get("pid")
            if pid:
                return pid[0]
        return None

    def _share_url(
        self,
        document: Tag,
        state_script: str,
        product_id: Optional[str],
        url: Optional[str],
    ) -> Optional[str]:
        try:
            return self._resolve_share_url(document, state_script, product_id, url)
        except MalformedUrl as e:
            logger.debug("No share URL: %s", e)
            return None

    def _resolve_share_url(
        self,
        document: Tag,
        state_script: str,
        product_id: Optional[str],
        url: Optional[str],
    ) -> str:
        """Canonical link, then embedded share link, then pid, then the page URL."""
        canonical = self._canonical_href(document)
        if canonical:
            try:
                return self._clean_canonical(normalize_url(canonical, self.base_url))
            except MalformedUrl as e:
                logger.debug("Ignoring canonical link: %s", e)

        match = _SHARE_URL_PATTERN.search(state_script)
        if match:
            return match.group(1)

        if product_id:
            return f"{self.base_url}/product/p/itm?{urlencode({'pid': product_id})}"

        if url:
            return normalize_url(url, self.base_url)
        raise MalformedUrl(None, "no canonical link, share link, product id or page URL")

    @staticmethod
    def _canonical_href(document: Tag) -> Optional[str]:
        node = resolve(document, S["canonical"])
        if node is None:
            return None
        return (node.get("href") or node.get("content") or "").strip() or None

    @staticmethod
    def _clean_canonical(url: str) -> str:
        """Drop tracking parameters and fragment, keeping only the pid."""
        parsed = urlparse(url)
        pid = parse_qs(parsed.query).get("pid")
        query = urlencode({"pid": pid[0]}) if pid else ""
        return urlunparse(parsed._replace(query=query, fragment=""))

    # ---- Collections ----

    def _thumbnails(self, document: Tag) -> tuple[str, ...]:
        images = list(resolve_all(document, S["thumbnails"]))
        if not images:
            images = self._image_only_list(document)

        thumbnails = []
        for image in images:
            src = image.get("src") or image.get("data-src")
            try:
                thumbnails.append(normalize_url(src, self.base_url))
            except MalformedUrl:
                continue
        return tuple(thumbnails)

    @staticmethod
    def _image_only_list(document: Tag) -> list[Tag]:
        """Images of the first text-free <ul>, the gallery strip on unknown layouts."""
        for list_node in resolve_all(document, "ul"):
            if node_text(list_node):
                continue
            images = [image for image in list_node.select("li img") if image.get("src")]
            if images:
                return images
        return []

    @staticmethod
    def _texts(document: Tag, candidates: tuple[str, ...]) -> tuple[str, ...]:
        texts = (node_text(node) for node in resolve_all(document, candidates))
        return tuple(text for text in texts if text)

    def _specifications(self, document: Tag) -> dict[str, dict[str, str]]:
        container = resolve(document, S["spec_container"])
        if container is None:
            return {}

        specs: dict[str, dict[str, str]] = {}
        for table in resolve_all(container, "table"):
            title_node = next(
                (node for node in table.previous_siblings if isinstance(node, Tag)), None
            )
            if title_node is not None and title_node.name == "table":
                title_node = None
            section = node_text(title_node) or DEFAULT_SPEC_SECTION
            rows = specs.setdefault(section, {})

            for row in resolve_all(table, "tr"):
                cells = row.find_all(["td", "th"], recursive=False)
                if len(cells) != 2:
                    logger.debug("Skipping spec row in '%s' with %d cells", section, len(cells))
                    continue
                key, value = node_text(cells[0]), node_text(cells[1])
                if not key:
                    logger.debug("Skipping spec row in '%s' without a key", section)
                    continue
                rows[key] = value

            if not rows:
                del specs[section]
        return specs
