"""Scraper settings — read once from FLIPKART_* environment variables."""
import os

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://www.flipkart.com"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) "
    "Gecko/20100101 Firefox/118.0"
)


class ScraperSettings(BaseModel):
    """Runtime settings shared by the fetcher, scrapers and extractors."""
    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    timeout_ms: int = Field(default=30000, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.5"
    log_level: str = "INFO"

    @property
    def allowed_domain(self) -> str:
        """Host suffix a product URL must carry, e.g. 'flipkart.com'."""
        host = self.base_url.split("://", 1)[-1].split("/", 1)[0]
        return host[4:] if host.startswith("www.") else host

    @classmethod
    def from_env(cls) -> "ScraperSettings":
        """Build settings from the environment, falling back to defaults."""
        values: dict = {}
        if os.environ.get("FLIPKART_BASE_URL"):
            values["base_url"] = os.environ["FLIPKART_BASE_URL"].rstrip("/")
        if os.environ.get("FLIPKART_HEADLESS"):
            values["headless"] = os.environ["FLIPKART_HEADLESS"].lower() == "true"
        if os.environ.get("FLIPKART_TIMEOUT_MS"):
            values["timeout_ms"] = int(os.environ["FLIPKART_TIMEOUT_MS"])
        if os.environ.get("FLIPKART_USER_AGENT"):
            values["user_agent"] = os.environ["FLIPKART_USER_AGENT"]
        if os.environ.get("FLIPKART_LOG_LEVEL"):
            values["log_level"] = os.environ["FLIPKART_LOG_LEVEL"].upper()
        return cls(**values)
