"""Stock scraper registry.

Maps strategy names (the STOCK_SCRAPER setting) to scraper classes.
"""

from typing import Type

from stock_sync.scrapers.base_scraper import BaseStockScraper
from stock_sync.scrapers.rendered_scraper import RenderedStockScraper
from stock_sync.scrapers.static_scraper import StaticStockScraper

# Registry of available scraping strategies
SCRAPER_REGISTRY: dict[str, Type[BaseStockScraper]] = {
    "rendered": RenderedStockScraper,
    "static": StaticStockScraper,
}


def get_scraper_class(name: str) -> Type[BaseStockScraper]:
    """Get scraper class for a strategy name.

    Args:
        name: Strategy name (e.g., 'rendered')

    Returns:
        Scraper class for the strategy

    Raises:
        ValueError: If the strategy is not registered
    """
    if name not in SCRAPER_REGISTRY:
        available = ", ".join(SCRAPER_REGISTRY.keys())
        raise ValueError(f"Unknown scraper: {name}. Available: {available}")

    return SCRAPER_REGISTRY[name]


def get_available_scrapers() -> list[str]:
    """Get list of registered strategy names."""
    return list(SCRAPER_REGISTRY.keys())
