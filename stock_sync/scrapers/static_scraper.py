"""Static-HTML stock scraper: plain HTTP fetch parsed with BeautifulSoup."""

from typing import Optional

import httpx
from loguru import logger

from stock_sync.config import SyncConfig
from stock_sync.errors import NavigationError
from stock_sync.scrapers.base_scraper import BaseStockScraper
from stock_sync.scrapers.stock_parser import parse_stock_from_html

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
}


class StaticStockScraper(BaseStockScraper):
    """Scrapes stock from the initial HTML response without running scripts."""

    name = "static"

    def __init__(
        self, config: SyncConfig, transport: Optional[httpx.BaseTransport] = None
    ):
        """Initialize scraper.

        Args:
            config: Run configuration
            transport: Optional httpx transport (used by tests)
        """
        super().__init__(config)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def open(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.Client(
            headers=BROWSER_HEADERS,
            follow_redirects=True,
            timeout=self.config.http_timeout,
            transport=self._transport,
        )
        logger.info("HTTP client initialized for static scraping")

    def close(self) -> None:
        if self._client:
            self._client.close()
        self._client = None

    def fetch_content(self, url: str) -> str:
        """GET the page HTML.

        Raises:
            NavigationError: On a malformed URL, transport failure or non-2xx status
        """
        if self._client is None:
            self.open()
        assert self._client is not None

        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise NavigationError(f"Failed to load {url!r}: {e}") from e

        if not response.is_success:
            raise NavigationError(f"HTTP {response.status_code} error for {url}")

        return response.text

    def extract_quantity(self, content: str) -> int:
        return parse_stock_from_html(content)
