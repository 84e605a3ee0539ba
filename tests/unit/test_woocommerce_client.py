"""Unit tests for the WooCommerce REST client."""

import base64

import httpx
import pytest

from stock_sync.woocommerce.client import WooCommerceClient, build_api_root


class TestBuildApiRoot:
    """Tests for build_api_root pure function."""

    @pytest.mark.parametrize(
        "base_url,expected",
        [
            ("https://shop.example", "https://shop.example/wp-json/wc/v3"),
            ("https://shop.example/", "https://shop.example/wp-json/wc/v3"),
            ("https://shop.example/store", "https://shop.example/store/wp-json/wc/v3"),
            ("https://shop.example/wp-json/wc/v3", "https://shop.example/wp-json/wc/v3"),
            ("https://shop.example/wp-json/wc/v3/", "https://shop.example/wp-json/wc/v3"),
        ],
    )
    def test_normalizes_urls(self, base_url, expected):
        assert build_api_root(base_url) == expected


def _recording_client(requests, response=None):
    def handler(request):
        requests.append(request)
        return response or httpx.Response(200, json=[])

    return WooCommerceClient(
        "https://shop.example/",
        "ck_key",
        "cs_secret",
        transport=httpx.MockTransport(handler),
    )


def test_requests_use_basic_auth():
    """Should send base64(key:secret) as Basic auth."""
    requests = []
    client = _recording_client(requests)

    client.list_products(page=1, per_page=100)

    expected = base64.b64encode(b"ck_key:cs_secret").decode()
    assert requests[0].headers["Authorization"] == f"Basic {expected}"


def test_list_products_builds_query():
    requests = []
    client = _recording_client(requests)

    client.list_products(page=3, per_page=50, meta_key="warde_url", category="12")

    url = requests[0].url
    assert requests[0].method == "GET"
    assert url.path == "/wp-json/wc/v3/products"
    assert url.params["page"] == "3"
    assert url.params["per_page"] == "50"
    assert url.params["meta_key"] == "warde_url"
    assert url.params["category"] == "12"


def test_update_product_puts_json():
    requests = []
    client = _recording_client(requests, httpx.Response(200, json={"id": 42}))

    response = client.update_product(42, {"manage_stock": True})

    assert response.status_code == 200
    assert requests[0].method == "PUT"
    assert str(requests[0].url) == "https://shop.example/wp-json/wc/v3/products/42"
    assert requests[0].headers["Content-Type"] == "application/json"


def test_context_manager_closes_client():
    requests = []
    with _recording_client(requests) as client:
        pass

    assert client.client.is_closed
