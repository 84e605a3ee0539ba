"""Abstract base class for supplier stock scrapers.

A scraper holds its fetching resource (browser or HTTP client) for the whole
run and is used as a context manager so the resource is always released.
"""

from abc import ABC, abstractmethod

from loguru import logger

from stock_sync.config import SyncConfig


class BaseStockScraper(ABC):
    """Common scraping flow: fetch page content, then extract the quantity.

    Subclasses must implement:
    - fetch_content(url) - Retrieve the supplier page content
    - extract_quantity(content) - Read the stock figure from that content
    """

    name = "base"

    def __init__(self, config: SyncConfig):
        """Initialize scraper with configuration.

        Args:
            config: Run configuration (timeouts, browser options)
        """
        self.config = config

    def open(self) -> None:
        """Acquire resources needed for fetching. No-op by default."""

    def close(self) -> None:
        """Release resources acquired by open(). No-op by default."""

    def scrape_stock(self, url: str) -> int:
        """Fetch a supplier page and return its available stock.

        Args:
            url: Supplier product page URL

        Returns:
            Non-negative stock quantity

        Raises:
            NavigationError: If the page cannot be loaded
            StockNotFound: If the page has no "Available Stock" label
            StockUnparsable: If the label has no number
        """
        content = self.fetch_content(url)
        quantity = self.extract_quantity(content)
        logger.debug(f"Parsed stock {quantity} from {url}")
        return quantity

    @abstractmethod
    def fetch_content(self, url: str) -> str:
        """Retrieve page content for extract_quantity().

        Raises:
            NavigationError: If the page cannot be loaded
        """

    @abstractmethod
    def extract_quantity(self, content: str) -> int:
        """Read the stock figure from page content.

        Raises:
            StockNotFound: If there is no stock label
            StockUnparsable: If the label has no number
        """

    def __enter__(self):
        """Context manager entry - acquire resources."""
        self.open()
        logger.debug(f"{self.name} scraper opened")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - release resources."""
        self.close()
        logger.debug(f"{self.name} scraper closed")
