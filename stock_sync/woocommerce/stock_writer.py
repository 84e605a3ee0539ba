"""Write scraped stock quantities back to WooCommerce."""

from typing import Optional

import httpx
from loguru import logger

from stock_sync.config import MissingStockPolicy
from stock_sync.errors import UpdateError
from stock_sync.types import ProductId, stock_status_for
from stock_sync.woocommerce.client import WooCommerceClient


def build_stock_payload(
    quantity: Optional[int], missing_policy: MissingStockPolicy = "skip"
) -> Optional[dict]:
    """Build the product update body (pure function).

    Args:
        quantity: Scraped quantity, or None when no stock figure was found
        missing_policy: What to send when quantity is None

    Returns:
        Update payload, or None if nothing should be written

    Examples:
        >>> build_stock_payload(109)
        {'manage_stock': True, 'stock_quantity': 109, 'stock_status': 'instock'}
        >>> build_stock_payload(None, "manage_only")
        {'manage_stock': True}
        >>> build_stock_payload(None) is None
        True
    """
    if quantity is None:
        if missing_policy == "skip":
            return None
        if missing_policy == "manage_only":
            return {"manage_stock": True}
        quantity = 0

    return {
        "manage_stock": True,
        "stock_quantity": quantity,
        "stock_status": stock_status_for(quantity),
    }


def write_stock(
    client: WooCommerceClient,
    product_id: ProductId,
    quantity: Optional[int],
    missing_policy: MissingStockPolicy = "skip",
) -> Optional[dict]:
    """Update the stock of one product.

    Args:
        client: WooCommerce client
        product_id: Product to update
        quantity: Scraped quantity, or None when not found
        missing_policy: Behaviour when quantity is None

    Returns:
        The payload that was sent, or None if the write was skipped

    Raises:
        UpdateError: If the update request fails
    """
    payload = build_stock_payload(quantity, missing_policy)
    if payload is None:
        logger.debug(f"No stock to write for {product_id}, skipping update")
        return None

    try:
        response = client.update_product(product_id, payload)
    except httpx.HTTPError as e:
        raise UpdateError(f"Woo update error for {product_id}: {e}") from e

    if not response.is_success:
        raise UpdateError(
            f"Woo update error for {product_id}",
            status_code=response.status_code,
            body=response.text,
        )

    return payload
