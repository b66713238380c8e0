"""Search extractor — turns a search-results page into SearchResult records."""
import logging
from typing import Optional

from bs4 import Tag

from ..errors import MalformedPrice, MalformedUrl, NoResults
from ..models import Price, SearchResult
from ..normalizers import normalize_url, parse_price
from ..selector_resolver import resolve_all, resolve_attr, resolve_text
from .base import SEARCH_SELECTORS, BaseExtractor

logger = logging.getLogger(__name__)

S = SEARCH_SELECTORS


class SearchExtractor(BaseExtractor):
    """Search results page extraction. A broken card is skipped, never fatal."""

    page_kind = "search"

    def extract(self, document: Tag) -> tuple[SearchResult, ...]:
        """
        Extract every usable result card, in document order.

        Raises:
            NoResults: no card yielded a name, link and price
        """
        results = []
        card_count = 0
        for card in resolve_all(document, S["cards"]):
            card_count += 1
            result = self._card(card)
            if result is not None:
                results.append(result)

        if not results:
            raise NoResults(card_count=card_count)

        logger.debug("Extracted %d of %d search cards", len(results), card_count)
        return tuple(results)

    def _card(self, card: Tag) -> Optional[SearchResult]:
        name = resolve_text(card, S["name"]) or resolve_attr(card, ("a[title]",), "title")
        if not name:
            logger.debug("Skipping card without a name")
            return None

        try:
            link = normalize_url(resolve_attr(card, S["link"], "href"), self.base_url)
        except MalformedUrl as e:
            logger.debug("Skipping card '%s': %s", name, e)
            return None

        price_text = resolve_text(card, S["current_price"])
        try:
            current = parse_price(price_text)
        except MalformedPrice as e:
            logger.debug("Skipping card '%s': %s", name, e)
            return None

        original = None
        original_text = resolve_text(card, S["original_price"])
        if original_text:
            try:
                original = parse_price(original_text)
            except MalformedPrice:
                original = None
        if original is not None and original < current:
            original = None

        thumbnail = None
        src = resolve_attr(card, S["thumbnail"], "src")
        if src:
            try:
                thumbnail = normalize_url(src, self.base_url)
            except MalformedUrl:
                thumbnail = None

        return SearchResult(
            name=name,
            link=link,
            price=Price(current=current, original=original),
            thumbnail=thumbnail,
        )
