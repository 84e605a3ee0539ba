"""Unit tests for the catalog loader against an in-memory WooCommerce API."""

from dataclasses import replace

import httpx
import pytest

from stock_sync.errors import FetchError
from stock_sync.types import ProductRef
from stock_sync.woocommerce.catalog_loader import (
    extract_supplier_url,
    fetch_all_products,
    load_products,
    to_product_refs,
)
from stock_sync.woocommerce.client import WooCommerceClient


class TestExtractSupplierUrl:
    """Tests for extract_supplier_url pure function."""

    def test_returns_stripped_value(self, product):
        record = product(1, "  https://supplier.example/fabric-1 \n")

        assert extract_supplier_url(record, "warde_url") == "https://supplier.example/fabric-1"

    def test_ignores_other_keys(self, product):
        record = product(1, None, _yoast_title="Fabric", supplier="x")

        assert extract_supplier_url(record, "warde_url") is None

    def test_blank_and_non_string_values_ignored(self):
        record = {
            "id": 1,
            "meta_data": [
                {"key": "warde_url", "value": "   "},
                {"key": "warde_url", "value": ["https://nested.example"]},
                {"key": "warde_url", "value": "https://supplier.example/ok"},
            ],
        }

        assert extract_supplier_url(record, "warde_url") == "https://supplier.example/ok"

    def test_missing_meta_data(self):
        assert extract_supplier_url({"id": 1}, "warde_url") is None

    def test_custom_meta_key(self, product):
        record = product(1, "https://supplier.example/a", meta_key="supplier_url")

        assert extract_supplier_url(record, "supplier_url") == "https://supplier.example/a"
        assert extract_supplier_url(record, "warde_url") is None


def test_to_product_refs_filters_and_keeps_order(product):
    """Should keep only products with a supplier URL, in API order."""
    records = [
        product(3, "https://supplier.example/c"),
        product(1),
        product(2, "https://supplier.example/b"),
    ]

    refs = to_product_refs(records, "warde_url")

    assert refs == [
        ProductRef(3, "https://supplier.example/c"),
        ProductRef(2, "https://supplier.example/b"),
    ]


class TestPagination:
    """Pagination stops at the first short page."""

    @pytest.mark.parametrize(
        "total,expected_calls",
        [
            (0, 1),
            (42, 1),
            (100, 2),
            (250, 3),
            (300, 4),
        ],
    )
    def test_fetches_every_record_with_minimal_calls(
        self, woo_factory, product, total, expected_calls
    ):
        """N pages with a final partial page of K items: 100*(N-1)+K records, N calls."""
        woo = woo_factory([product(i, f"https://supplier.example/{i}") for i in range(1, total + 1)])

        records = fetch_all_products(woo.client(), per_page=100)

        assert len(records) == total
        assert [r["id"] for r in records] == list(range(1, total + 1))
        assert len(woo.list_requests) == expected_calls
        pages = [int(r.url.params["page"]) for r in woo.list_requests]
        assert pages == list(range(1, expected_calls + 1))

    def test_sends_page_size_and_category(self, woo_factory, product):
        woo = woo_factory([product(1, "https://supplier.example/1")])

        fetch_all_products(woo.client(), per_page=25, category="17")

        params = woo.list_requests[0].url.params
        assert params["per_page"] == "25"
        assert params["category"] == "17"
        assert "meta_key" not in params


class TestLoadProducts:
    """Tests for load_products in both catalog modes."""

    def test_paginate_mode_filters_by_meta(self, config, woo_factory, product):
        records = [product(i, f"https://supplier.example/{i}" if i % 2 else None) for i in range(1, 151)]
        woo = woo_factory(records)

        refs = load_products(woo.client(), config)

        assert len(refs) == 75
        assert refs[0] == ProductRef(1, "https://supplier.example/1")
        assert len(woo.list_requests) == 2

    def test_meta_query_mode_is_single_request(self, config, woo_factory, product):
        woo = woo_factory([product(i, f"https://supplier.example/{i}") for i in range(1, 151)])
        config = replace(config, catalog_mode="meta_query", category_id="9")

        refs = load_products(woo.client(), config)

        assert len(refs) == 100
        assert len(woo.list_requests) == 1
        params = woo.list_requests[0].url.params
        assert params["meta_key"] == "warde_url"
        assert params["category"] == "9"
        assert params["page"] == "1"

    def test_error_status_raises_fetch_error_with_detail(self, config, woo_factory):
        woo = woo_factory(get_status=401)

        with pytest.raises(FetchError) as exc_info:
            load_products(woo.client(), config)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "upstream unavailable"
        assert "401" in str(exc_info.value)

    def test_error_on_later_page_is_fatal(self, config, product):
        """No partial catalog is returned when any page fails."""

        def handler(request):
            if request.url.params["page"] == "1":
                return httpx.Response(200, json=[product(i, "https://s.example") for i in range(100)])
            return httpx.Response(503, text="maintenance")

        client = WooCommerceClient("https://shop.example", "ck", "cs", transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError, match="page 2"):
            load_products(client, config)

    def test_transport_error_raises_fetch_error(self, config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = WooCommerceClient("https://shop.example", "ck", "cs", transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError) as exc_info:
            load_products(client, config)

        assert exc_info.value.status_code is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"code": "rest_no_route", "message": "No route was found"}),
        httpx.Response(200, json="maintenance"),
        httpx.Response(200, text="<html>Briefly unavailable for scheduled maintenance</html>"),
    ],
)
def test_non_list_catalog_body_raises_fetch_error(config, response):
    """A 2xx response that is not a product list is a catalog failure carrying the body."""
    client = WooCommerceClient(
        "https://shop.example", "ck", "cs", transport=httpx.MockTransport(lambda request: response)
    )

    with pytest.raises(FetchError) as exc_info:
        load_products(client, config)

    assert exc_info.value.status_code == 200
    assert exc_info.value.body == response.text
