"""Extracted records — immutable, built once per extraction call."""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Availability(str, Enum):
    """Stock state of a product page."""
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class Price:
    """Current selling price and, when discounted, the struck-through original."""
    current: int
    original: Optional[int] = None

    def __post_init__(self):
        if self.current < 0:
            raise ValueError(f"current price must be >= 0, got {self.current}")
        if self.original is not None and self.original < self.current:
            raise ValueError(
                f"original price {self.original} is below current price {self.current}"
            )

    @property
    def discount(self) -> int:
        """Amount saved against the original price (0 without a discount)."""
        if self.original is None:
            return 0
        return self.original - self.current

    def to_dict(self) -> dict:
        return {"current": self.current, "original": self.original}


@dataclass(frozen=True)
class Rating:
    """Average star rating and the number of ratings behind it."""
    value: float
    count: int = 0

    def __post_init__(self):
        if not 0.0 <= self.value <= 5.0:
            raise ValueError(f"rating must be within 0-5, got {self.value}")

    def to_dict(self) -> dict:
        return {"value": self.value, "count": self.count}


@dataclass(frozen=True)
class Seller:
    """Primary seller listed on a product page."""
    name: str
    rating: Optional[float] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "rating": self.rating}


def _freeze_specs(specs: Mapping[str, Mapping[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({
        section: MappingProxyType(dict(rows)) for section, rows in specs.items()
    })


@dataclass(frozen=True)
class ProductDetails:
    """Full details for a single product page."""
    name: str
    price: Price
    availability: Availability = Availability.IN_STOCK
    rating: Optional[Rating] = None
    assured: bool = False
    share_url: Optional[str] = None
    product_id: Optional[str] = None
    seller: Optional[Seller] = None
    thumbnails: tuple[str, ...] = ()
    highlights: tuple[str, ...] = ()
    offers: tuple[str, ...] = ()
    specifications: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        # Accept lists/dicts from callers but store read-only copies
        object.__setattr__(self, "thumbnails", tuple(self.thumbnails))
        object.__setattr__(self, "highlights", tuple(self.highlights))
        object.__setattr__(self, "offers", tuple(self.offers))
        object.__setattr__(self, "specifications", _freeze_specs(self.specifications))

    @property
    def in_stock(self) -> bool:
        return self.availability is Availability.IN_STOCK

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price.to_dict(),
            "availability": self.availability.value,
            "rating": self.rating.to_dict() if self.rating else None,
            "assured": self.assured,
            "share_url": self.share_url,
            "product_id": self.product_id,
            "seller": self.seller.to_dict() if self.seller else None,
            "thumbnails": list(self.thumbnails),
            "highlights": list(self.highlights),
            "offers": list(self.offers),
            "specifications": {
                section: dict(rows) for section, rows in self.specifications.items()
            },
        }


@dataclass(frozen=True)
class SearchResult:
    """A product from a search result page."""
    name: str
    link: str
    price: Price
    thumbnail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "price": self.price.to_dict(),
        }
