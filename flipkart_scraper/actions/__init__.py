"""Actions — status-dict orchestration over the retailer scrapers."""
from .search import SearchAction, SCRAPER_CLASSES

__all__ = ["SearchAction", "SCRAPER_CLASSES"]
