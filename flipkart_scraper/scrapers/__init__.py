"""Retailer scrapers — fetch pages and run the extractors over them."""
from .base import BaseRetailerScraper
from .flipkart import FlipkartScraper

__all__ = ["BaseRetailerScraper", "FlipkartScraper"]
