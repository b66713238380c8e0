"""Error taxonomy — typed failures raised by the extraction engine and the fetch layer."""
from typing import Optional


class ScraperError(Exception):
    """Root of every error raised by this package."""


# ---- Extraction ----

class ExtractionError(ScraperError):
    """Markup could not be turned into a record."""


class MissingMandatoryField(ExtractionError):
    """A required field (name, current price) was not found in the document."""

    def __init__(self, field_name: str):
        super().__init__(f"Missing mandatory field: {field_name}")
        self.field_name = field_name


class MalformedValue(ExtractionError):
    """A field was present but its text could not be parsed."""

    kind = "value"

    def __init__(self, text: Optional[str], reason: str = ""):
        message = f"Malformed {self.kind}: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.text = text


class MalformedPrice(MalformedValue):
    kind = "price"


class MalformedRating(MalformedValue):
    kind = "rating"


class MalformedCount(MalformedValue):
    kind = "count"


class MalformedUrl(MalformedValue):
    kind = "url"


class NoResults(ExtractionError):
    """A search document yielded zero usable result cards."""

    def __init__(self, card_count: int = 0):
        super().__init__(f"No usable search results ({card_count} cards found)")
        self.card_count = card_count


# ---- Fetching ----

class FetchError(ScraperError):
    """The page could not be fetched or is not a usable page."""


class UnsupportedUrl(FetchError):
    """URL does not point at a supported retailer."""


class ProductNotFound(FetchError):
    """The retailer answered with a 'moved or deleted' page."""


class HostUnavailable(FetchError):
    """The retailer is down or is blocking requests."""
