"""WooCommerce REST API client.

Thin wrapper over httpx with Basic auth (consumer key/secret). Status checking
is left to the callers so they can raise their own error types.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from stock_sync.config import SyncConfig
from stock_sync.types import ProductId

API_PATH = "/wp-json/wc/v3"


def build_api_root(base_url: str) -> str:
    """Normalize a store URL into the REST API root (pure function).

    Examples:
        >>> build_api_root("https://shop.example/")
        'https://shop.example/wp-json/wc/v3'
        >>> build_api_root("https://shop.example/wp-json/wc/v3")
        'https://shop.example/wp-json/wc/v3'
    """
    root = base_url.rstrip("/")
    if root.endswith(API_PATH):
        return root
    return f"{root}{API_PATH}"


class WooCommerceClient:
    """Manages HTTP access to the WooCommerce products endpoint."""

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Store root URL or full REST API root
            consumer_key: WooCommerce consumer key
            consumer_secret: WooCommerce consumer secret
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_root = build_api_root(base_url)
        self.client = httpx.Client(
            base_url=self.api_root,
            auth=httpx.BasicAuth(consumer_key, consumer_secret),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: SyncConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> "WooCommerceClient":
        return cls(
            config.api_url,
            config.consumer_key,
            config.consumer_secret,
            timeout=config.http_timeout,
            transport=transport,
        )

    def list_products(
        self,
        page: int,
        per_page: int,
        meta_key: Optional[str] = None,
        category: Optional[str] = None,
    ) -> httpx.Response:
        """GET one page of products.

        Raises:
            httpx.HTTPError: On transport failure
        """
        params: dict[str, Any] = {"per_page": per_page, "page": page}
        if meta_key:
            params["meta_key"] = meta_key
        if category:
            params["category"] = category

        logger.debug(f"GET {self.api_root}/products {params}")
        return self.client.get("/products", params=params)

    def update_product(self, product_id: ProductId, payload: dict) -> httpx.Response:
        """PUT a partial product update.

        Raises:
            httpx.HTTPError: On transport failure
        """
        logger.debug(f"PUT {self.api_root}/products/{product_id} {payload}")
        return self.client.put(f"/products/{product_id}", json=payload)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
