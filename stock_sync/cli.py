"""Command-line interface for the stock synchronizer.

Usage:
    python -m stock_sync.cli
    python -m stock_sync.cli --scraper static --missing-stock manage_only
"""

import argparse
import sys

from dotenv import load_dotenv
from loguru import logger

from stock_sync.config import load_config
from stock_sync.errors import ConfigError, FetchError
from stock_sync.orchestrator import run_stock_sync
from stock_sync.scrapers.registry import get_available_scrapers


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru logging.

    Args:
        verbose: Whether to enable debug logging
    """
    logger.remove()  # Remove default handler

    log_level = "DEBUG" if verbose else "INFO"
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(sys.stderr, format=log_format, level=log_level, colorize=True)
    logger.add(
        "logs/stock_sync_{time:YYYY-MM-DD}.log",
        format=log_format,
        level="DEBUG",
        rotation="1 day",
        retention="30 days",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync WooCommerce stock levels from supplier pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Connection settings come from the environment (or a .env file):
  WOOCOMMERCE_API_URL, WOOCOMMERCE_CONSUMER_KEY, WOOCOMMERCE_CONSUMER_SECRET

Examples:
  # Render supplier pages in headless Chromium (default)
  python -m stock_sync.cli

  # Parse plain HTML instead of rendering
  python -m stock_sync.cli --scraper static

  # Only sync one category, zeroing stock when the figure is missing
  python -m stock_sync.cli --category 42 --missing-stock zero
        """,
    )

    parser.add_argument(
        "--scraper",
        "-s",
        choices=get_available_scrapers(),
        help="Scraping strategy (default: STOCK_SCRAPER or rendered)",
    )
    parser.add_argument(
        "--missing-stock",
        choices=["skip", "manage_only", "zero"],
        help="What to write when no stock figure is found (default: skip)",
    )
    parser.add_argument(
        "--catalog-mode",
        choices=["paginate", "meta_query"],
        help="Walk every catalog page, or ask WooCommerce to filter by meta key",
    )
    parser.add_argument(
        "--meta-key",
        help="Product meta key holding the supplier URL (default: warde_url)",
    )
    parser.add_argument(
        "--category",
        "-c",
        dest="category_id",
        help="Only sync products in this category id",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    load_dotenv()

    try:
        config = load_config().with_overrides(
            scraper=args.scraper,
            missing_stock=args.missing_stock,
            catalog_mode=args.catalog_mode,
            meta_key=args.meta_key,
            category_id=args.category_id,
        )
    except ConfigError as e:
        logger.error(f"❌ {e}")
        return 1

    try:
        report = run_stock_sync(config)
    except FetchError as e:
        logger.error(f"❌ {e}")
        return 1
    except Exception as e:
        logger.exception(f"Stock sync failed: {e}")
        return 1

    logger.success(f"Stock sync finished: {report.summary()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
