"""Load the products that carry a supplier URL from the WooCommerce catalog."""

from typing import Any, Iterable, Optional

import httpx
from loguru import logger

from stock_sync.config import SyncConfig
from stock_sync.errors import FetchError
from stock_sync.types import ProductId, ProductRef, SupplierUrl
from stock_sync.woocommerce.client import WooCommerceClient


def extract_supplier_url(record: dict, meta_key: str) -> Optional[SupplierUrl]:
    """Return the stripped value of the first non-blank `meta_key` entry (pure function).

    Args:
        record: Raw WooCommerce product JSON
        meta_key: Metadata key holding the supplier URL

    Returns:
        Supplier URL, or None if the product has no usable value
    """
    for entry in record.get("meta_data") or []:
        if entry.get("key") != meta_key:
            continue
        value = entry.get("value")
        if isinstance(value, str) and value.strip():
            return SupplierUrl(value.strip())
    return None


def to_product_refs(records: Iterable[dict], meta_key: str) -> list[ProductRef]:
    """Keep records with a supplier URL, preserving API order (pure function)."""
    refs = []
    for record in records:
        url = extract_supplier_url(record, meta_key)
        if url:
            refs.append(ProductRef(id=ProductId(record["id"]), source_url=url))
    return refs


def _fetch_page(
    client: WooCommerceClient,
    page: int,
    per_page: int,
    meta_key: Optional[str],
    category: Optional[str],
) -> list[dict[str, Any]]:
    try:
        response = client.list_products(page, per_page, meta_key=meta_key, category=category)
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch products page {page}: {e}") from e

    if not response.is_success:
        raise FetchError(
            f"Failed to fetch products page {page}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise FetchError(
            f"Products page {page} is not valid JSON",
            status_code=response.status_code,
            body=response.text,
        ) from e
    if not isinstance(data, list):
        raise FetchError(
            f"Products page {page} is not a list of products",
            status_code=response.status_code,
            body=response.text,
        )
    return data


def fetch_all_products(
    client: WooCommerceClient,
    per_page: int = 100,
    category: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Fetch every catalog page until a short (or empty) page is returned.

    Args:
        client: WooCommerce client
        per_page: Page size
        category: Optional category id filter

    Returns:
        All raw product records, in API order

    Raises:
        FetchError: If any page request fails
    """
    records: list[dict[str, Any]] = []
    page = 1

    while True:
        batch = _fetch_page(client, page, per_page, None, category)
        records.extend(batch)
        logger.debug(f"Catalog page {page}: {len(batch)} products")
        if len(batch) < per_page:
            break
        page += 1

    return records


def fetch_meta_filtered_products(
    client: WooCommerceClient,
    meta_key: str,
    per_page: int = 100,
    category: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Fetch products pre-filtered by the platform on `meta_key` (single request)."""
    return _fetch_page(client, 1, per_page, meta_key, category)


def load_products(client: WooCommerceClient, config: SyncConfig) -> list[ProductRef]:
    """Return all products whose metadata holds a supplier URL.

    Args:
        client: WooCommerce client
        config: Run configuration (catalog mode, page size, meta key, category)

    Returns:
        Product references in catalog order

    Raises:
        FetchError: If the catalog cannot be fetched
    """
    if config.catalog_mode == "meta_query":
        records = fetch_meta_filtered_products(
            client, config.meta_key, config.page_size, config.category_id
        )
    else:
        records = fetch_all_products(client, config.page_size, config.category_id)

    products = to_product_refs(records, config.meta_key)
    logger.info(
        f"Loaded {len(records)} catalog products, {len(products)} with {config.meta_key}"
    )
    return products
