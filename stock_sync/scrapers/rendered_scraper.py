"""Rendered-DOM stock scraper using headless Chromium.

Supplier pages fill in the stock figure with JavaScript, so the page is
rendered and polled until an "Available Stock" label appears.
"""

from typing import Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeout,
    sync_playwright,
)

from stock_sync.config import SyncConfig
from stock_sync.errors import NavigationError, StockNotFound
from stock_sync.scrapers.base_scraper import BaseStockScraper
from stock_sync.scrapers.stock_parser import parse_stock_from_text

# True once any element's rendered text carries the stock label
STOCK_LABEL_VISIBLE_JS = """
() => Array.from(document.querySelectorAll('*'))
    .some(el => /Available\\s*Stock/i.test(el.innerText || ''))
"""

BROWSER_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]


class RenderedStockScraper(BaseStockScraper):
    """Scrapes stock from the browser-rendered DOM, reusing one page."""

    name = "rendered"

    def __init__(self, config: SyncConfig):
        super().__init__(config)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    def open(self) -> None:
        """Launch Chromium and open the page reused for every product.

        Anything already started is released if a later step fails.
        """
        if self._page is not None:
            return

        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=True,
                args=BROWSER_ARGS,
                executable_path=self.config.browser_executable,
            )
            self._page = self._browser.new_page()
        except Exception:
            self.close()
            raise

        logger.info("Browser initialized")

    def close(self) -> None:
        """Close browser and cleanup resources, even if one step fails."""
        page, browser, playwright = self._page, self._browser, self._playwright
        self._page = None
        self._browser = None
        self._playwright = None

        try:
            if page:
                page.close()
        finally:
            try:
                if browser:
                    browser.close()
            finally:
                if playwright:
                    playwright.stop()

        logger.info("Browser closed")

    def _ensure_browser(self) -> Page:
        if self._page is None:
            self.open()
        assert self._page is not None
        return self._page

    def fetch_content(self, url: str) -> str:
        """Load the page and return its rendered body text.

        Raises:
            NavigationError: If navigation fails or returns HTTP >= 400
            StockNotFound: If the label never renders within the wait timeout
        """
        page = self._ensure_browser()

        try:
            response = page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.config.navigation_timeout * 1000,
            )
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}") from e

        if response and response.status >= 400:
            raise NavigationError(f"HTTP {response.status} error for {url}")

        try:
            page.wait_for_function(
                STOCK_LABEL_VISIBLE_JS,
                timeout=self.config.stock_wait_timeout * 1000,
            )
        except PlaywrightTimeout as e:
            raise StockNotFound(
                f"'Available Stock' did not appear within "
                f"{self.config.stock_wait_timeout:g}s on {url}"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Page failed while waiting for stock on {url}: {e}") from e

        try:
            return page.inner_text("body")
        except PlaywrightError as e:
            raise NavigationError(f"Failed to read page text from {url}: {e}") from e

    def extract_quantity(self, content: str) -> int:
        return parse_stock_from_text(content)
