"""Shared fixtures: an in-memory WooCommerce API and a fake stock scraper."""

import json

import httpx
import pytest

from stock_sync.config import SyncConfig
from stock_sync.scrapers.base_scraper import BaseStockScraper
from stock_sync.scrapers.stock_parser import parse_stock_from_text
from stock_sync.woocommerce.client import WooCommerceClient

STORE_URL = "https://shop.example"


def make_product(product_id, supplier_url=None, meta_key="warde_url", **extra_meta):
    """Build a WooCommerce product record with optional supplier URL meta."""
    meta_data = [{"id": 1000 + i, "key": k, "value": v} for i, (k, v) in enumerate(extra_meta.items())]
    if supplier_url is not None:
        meta_data.append({"id": 1, "key": meta_key, "value": supplier_url})
    return {"id": product_id, "name": f"Product {product_id}", "meta_data": meta_data}


class FakeWooCommerce:
    """Products endpoint served through httpx.MockTransport."""

    def __init__(self, products=None, get_status=200, failing_updates=()):
        self.products = list(products or [])
        self.get_status = get_status
        self.failing_updates = set(failing_updates)
        self.requests: list[httpx.Request] = []
        self.updates: list[tuple[int, dict]] = []
        self.stock: dict[int, dict] = {}

    @property
    def list_requests(self):
        return [r for r in self.requests if r.method == "GET"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.endswith("/products"):
            if self.get_status != 200:
                return httpx.Response(self.get_status, text="upstream unavailable")
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "10"))
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.products[start : start + per_page])

        if request.method == "PUT" and "/products/" in path:
            product_id = int(path.rsplit("/", 1)[1])
            if product_id in self.failing_updates:
                return httpx.Response(500, text='{"code":"internal_error"}')
            payload = json.loads(request.content)
            self.updates.append((product_id, payload))
            self.stock.setdefault(product_id, {}).update(payload)
            return httpx.Response(200, json={"id": product_id, **payload})

        return httpx.Response(404, text="not found")

    def client(self) -> WooCommerceClient:
        return WooCommerceClient(
            STORE_URL,
            "ck_test",
            "cs_test",
            transport=httpx.MockTransport(self.handler),
        )


class FakeStockScraper(BaseStockScraper):
    """Serves page text from a dict; values may be exceptions to raise."""

    name = "fake"

    def __init__(self, config, pages):
        super().__init__(config)
        self.pages = pages
        self.visited: list[str] = []
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def fetch_content(self, url: str) -> str:
        self.visited.append(url)
        content = self.pages[url]
        if isinstance(content, Exception):
            raise content
        return content

    def extract_quantity(self, content: str) -> int:
        return parse_stock_from_text(content)


@pytest.fixture
def config():
    return SyncConfig(
        api_url=STORE_URL,
        consumer_key="ck_test",
        consumer_secret="cs_test",
    )


@pytest.fixture
def fake_woo():
    return FakeWooCommerce()


@pytest.fixture
def fake_scraper_factory():
    """Returns (factory, created) where created collects the scrapers built."""

    def build(pages):
        created = []

        def factory(cfg):
            scraper = FakeStockScraper(cfg, pages)
            created.append(scraper)
            return scraper

        return factory, created

    return build


@pytest.fixture
def product():
    """Factory fixture for raw product records."""
    return make_product


@pytest.fixture
def woo_factory():
    """Factory fixture for FakeWooCommerce with custom products/failures."""
    return FakeWooCommerce
