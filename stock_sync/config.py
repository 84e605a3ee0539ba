"""Run configuration loaded from the environment.

Built once at startup and passed into the client, scrapers and orchestrator,
so every component can be constructed with an explicit config in tests.
"""

import os
from dataclasses import dataclass, replace
from typing import Literal, Mapping, get_args

from stock_sync.errors import ConfigError

CatalogMode = Literal["paginate", "meta_query"]
ScraperName = Literal["rendered", "static"]
MissingStockPolicy = Literal["skip", "manage_only", "zero"]

DEFAULT_META_KEY = "warde_url"
MAX_PAGE_SIZE = 100  # WooCommerce caps per_page at 100

REQUIRED_VARS = (
    "WOOCOMMERCE_API_URL",
    "WOOCOMMERCE_CONSUMER_KEY",
    "WOOCOMMERCE_CONSUMER_SECRET",
)


@dataclass(frozen=True)
class SyncConfig:
    """Configuration for one synchronization run."""

    api_url: str
    consumer_key: str
    consumer_secret: str
    meta_key: str = DEFAULT_META_KEY
    category_id: str | None = None
    catalog_mode: CatalogMode = "paginate"
    page_size: int = MAX_PAGE_SIZE
    scraper: ScraperName = "rendered"
    missing_stock: MissingStockPolicy = "skip"
    navigation_timeout: float = 30.0  # seconds
    stock_wait_timeout: float = 15.0  # seconds
    http_timeout: float = 30.0  # seconds
    browser_executable: str | None = None

    def with_overrides(self, **overrides) -> "SyncConfig":
        """Return a copy with non-None overrides applied and re-validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        updated = replace(self, **changes)
        problems = _validate_choices(updated)
        if problems:
            raise ConfigError(problems)
        return updated


def _validate_choices(config: SyncConfig) -> list[str]:
    problems = []
    choices = (
        ("catalog_mode", CatalogMode),
        ("scraper", ScraperName),
        ("missing_stock", MissingStockPolicy),
    )
    for attr, literal in choices:
        value = getattr(config, attr)
        allowed = get_args(literal)
        if value not in allowed:
            problems.append(f"{attr} must be one of {', '.join(allowed)} (got {value!r})")

    if not 1 <= config.page_size <= MAX_PAGE_SIZE:
        problems.append(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
    return problems


def _read_number(env: Mapping[str, str], name: str, default, cast, problems: list[str]):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        problems.append(f"{name} must be a number (got {raw!r})")
        return default
    if value <= 0:
        problems.append(f"{name} must be positive (got {raw!r})")
        return default
    return value


def load_config(env: Mapping[str, str] | None = None) -> SyncConfig:
    """Build and validate a SyncConfig from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Validated configuration

    Raises:
        ConfigError: Listing every missing or malformed variable
    """
    env = os.environ if env is None else env
    problems = []

    missing = [name for name in REQUIRED_VARS if not env.get(name, "").strip()]
    if missing:
        problems.append(f"Missing one of: {', '.join(missing)}")

    page_size = _read_number(env, "CATALOG_PAGE_SIZE", MAX_PAGE_SIZE, int, problems)
    navigation_timeout = _read_number(env, "NAVIGATION_TIMEOUT", 30.0, float, problems)
    stock_wait_timeout = _read_number(env, "STOCK_WAIT_TIMEOUT", 15.0, float, problems)
    http_timeout = _read_number(env, "HTTP_TIMEOUT", 30.0, float, problems)

    config = SyncConfig(
        api_url=env.get("WOOCOMMERCE_API_URL", "").strip(),
        consumer_key=env.get("WOOCOMMERCE_CONSUMER_KEY", "").strip(),
        consumer_secret=env.get("WOOCOMMERCE_CONSUMER_SECRET", "").strip(),
        meta_key=env.get("WOOCOMMERCE_META_KEY", "").strip() or DEFAULT_META_KEY,
        category_id=env.get("WOOCOMMERCE_CATEGORY_ID", "").strip() or None,
        catalog_mode=env.get("CATALOG_MODE", "").strip() or "paginate",
        page_size=page_size,
        scraper=env.get("STOCK_SCRAPER", "").strip() or "rendered",
        missing_stock=env.get("MISSING_STOCK_POLICY", "").strip() or "skip",
        navigation_timeout=navigation_timeout,
        stock_wait_timeout=stock_wait_timeout,
        http_timeout=http_timeout,
        browser_executable=env.get("CHROMIUM_EXECUTABLE_PATH", "").strip() or None,
    )

    problems.extend(_validate_choices(config))
    if problems:
        raise ConfigError(problems)

    return config
