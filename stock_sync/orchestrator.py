"""Orchestrator for the stock synchronization run.

Loads the catalog once, then scrapes and writes one product at a time.
Per-product failures are recorded in the report; only catalog and
configuration errors stop the run.
"""

from typing import Callable, Optional

from loguru import logger

from stock_sync.config import SyncConfig
from stock_sync.errors import NavigationError, ScrapeError, UpdateError
from stock_sync.scrapers.base_scraper import BaseStockScraper
from stock_sync.scrapers.registry import get_scraper_class
from stock_sync.types import ItemResult, ProductRef, SyncReport
from stock_sync.woocommerce.catalog_loader import load_products
from stock_sync.woocommerce.client import WooCommerceClient
from stock_sync.woocommerce.stock_writer import write_stock

ScraperFactory = Callable[[SyncConfig], BaseStockScraper]


class StockSyncOrchestrator:
    """Coordinates catalog loading, stock scraping and stock updates."""

    def __init__(
        self,
        config: SyncConfig,
        client: WooCommerceClient,
        scraper_factory: Optional[ScraperFactory] = None,
    ):
        """Initialize orchestrator.

        Args:
            config: Validated run configuration
            client: WooCommerce client used for loading and writing
            scraper_factory: Builds the scraper (defaults to the configured strategy)
        """
        self.config = config
        self.client = client
        self.scraper_factory = scraper_factory or get_scraper_class(config.scraper)

    def sync_product(self, product: ProductRef, scraper: BaseStockScraper) -> ItemResult:
        """Scrape and write stock for one product, never raising per-item errors."""
        logger.info(f"→ [{product.id}] Checking {product.source_url}")

        try:
            quantity: Optional[int] = scraper.scrape_stock(product.source_url)
            logger.info(f"   • Stock: {quantity}")
        except NavigationError as e:
            logger.error(f"   ✗ Error on {product.id}: {e}")
            return ItemResult(product, "failed", error=str(e))
        except ScrapeError as e:
            if self.config.missing_stock == "skip":
                logger.error(f"   ✗ Skipping {product.id}: {e}")
                return ItemResult(product, "skipped", error=str(e))
            logger.warning(
                f"   • Stock not found for {product.id} ({e}), "
                f"applying '{self.config.missing_stock}' policy"
            )
            quantity = None

        try:
            payload = write_stock(
                self.client, product.id, quantity, self.config.missing_stock
            )
        except UpdateError as e:
            logger.error(f"   ✗ Error on {product.id}: {e}")
            return ItemResult(product, "failed", quantity=quantity, error=str(e))

        logger.info(f"   ✓ Updated WooCommerce for {product.id}: {payload}")
        return ItemResult(product, "updated", quantity=quantity)

    def run(self) -> SyncReport:
        """Run the full synchronization.

        Returns:
            Report with one result per product, in catalog order

        Raises:
            FetchError: If the catalog cannot be loaded
        """
        logger.info("=" * 60)
        logger.info(
            f"Starting stock sync ({self.config.scraper} scraper, "
            f"missing stock: {self.config.missing_stock})"
        )
        logger.info("=" * 60)

        report = SyncReport()
        products = load_products(self.client, self.config)
        logger.info(f"🔍 Found {len(products)} products with {self.config.meta_key} meta")

        if not products:
            logger.warning("No products to sync")
            return report

        with self.scraper_factory(self.config) as scraper:
            for product in products:
                report.add(self.sync_product(product, scraper))

        logger.info("=" * 60)
        logger.info(f"Stock sync complete: {report.summary()}")
        logger.info("=" * 60)
        return report


def run_stock_sync(config: SyncConfig) -> SyncReport:
    """Convenience function for running a full sync against the live API.

    Args:
        config: Validated run configuration

    Returns:
        Report of the run
    """
    with WooCommerceClient.from_config(config) as client:
        return StockSyncOrchestrator(config, client).run()
