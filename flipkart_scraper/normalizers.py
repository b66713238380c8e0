"""
Field normalizers — turn raw text pulled out of the markup into typed values.

Every function either returns a value or raises one of the Malformed* errors;
callers decide whether the field is mandatory.
"""
import re
from decimal import Decimal, InvalidOperation
from urllib.parse import urljoin, urlparse

from .errors import MalformedCount, MalformedPrice, MalformedRating, MalformedUrl
from .models import Availability

RATING_MIN = 0.0
RATING_MAX = 5.0

_WS_PATTERN = re.compile(r"\s+")

# First digit run, thousands separators allowed (12,999 / 1,23,456)
_PRICE_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")

_RATING_PATTERN = re.compile(r"\s*(\d+(?:\.\d+)?)")

_COUNT_PATTERN = re.compile(
    r"\s*(\d[\d,]*(?:\.\d+)?)\s*(lakh|lac|crore|cr|mn|k|l|m)?\b",
    re.IGNORECASE,
)

_COUNT_MULTIPLIERS = {
    "": 1,
    "k": 1_000,
    "l": 100_000,
    "lac": 100_000,
    "lakh": 100_000,
    "m": 1_000_000,
    "mn": 1_000_000,
    "cr": 10_000_000,
    "crore": 10_000_000,
}


def clean_text(text: str | None) -> str:
    """Collapse runs of whitespace and strip the ends."""
    if not text:
        return ""
    return _WS_PATTERN.sub(" ", text).strip()


def parse_price(text: str | None) -> int:
    """
    Parse a price like '₹12,999' into an integer amount.

    Currency symbols and thousands separators are dropped; paise are truncated.
    Raises MalformedPrice when no digits are present ('Free', '', None).
    """
    match = _PRICE_PATTERN.search(text or "")
    if not match:
        raise MalformedPrice(text, "no digits")
    digits = match.group(0).replace(",", "")
    try:
        return int(Decimal(digits))
    except InvalidOperation:
        raise MalformedPrice(text) from None


def parse_rating(text: str | None) -> float:
    """Parse a star rating ('4.3', '4.3★') and check it lies in [0, 5]."""
    match = _RATING_PATTERN.match(text or "")
    if not match:
        raise MalformedRating(text, "not a number")
    value = float(match.group(1))
    if not RATING_MIN <= value <= RATING_MAX:
        raise MalformedRating(text, f"outside {RATING_MIN}-{RATING_MAX}")
    return value


def parse_count(text: str | None) -> int:
    """
    Parse a count such as '1,234', '12K' or '1.5 Lakh' into an integer.

    Trailing words ('1,234 Ratings') are ignored.
    """
    match = _COUNT_PATTERN.match(text or "")
    if not match:
        raise MalformedCount(text)
    number = match.group(1).replace(",", "")
    suffix = (match.group(2) or "").lower()
    try:
        return int(Decimal(number) * _COUNT_MULTIPLIERS[suffix])
    except InvalidOperation:
        raise MalformedCount(text) from None


def detect_availability(marker_present: bool) -> Availability:
    """
    Map the presence of a sold-out marker to an Availability.

    Anything short of an explicit marker counts as in stock.
    """
    return Availability.OUT_OF_STOCK if marker_present else Availability.IN_STOCK


def normalize_url(href: str | None, base_url: str) -> str:
    """Resolve href against base_url and require an absolute http(s) URL."""
    href = (href or "").strip()
    if not href:
        raise MalformedUrl(href, "empty")
    if href.startswith("//"):
        href = f"https:{href}"
    absolute = urljoin(base_url.rstrip("/") + "/", href)
    parsed = urlparse(absolute)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise MalformedUrl(href, "not an http(s) URL")
    return absolute
