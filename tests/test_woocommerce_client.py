"""Tests for the WooCommerce HTTP client using httpx's mock transport."""

import httpx
import pytest

from src.integrations.clients.real_http.woocommerce import WooCommerceClient
from src.integrations.contracts.commerce import UpstreamError
from src.integrations.policy.response_wrappers import IntegrationResponseError

BASE_URL = "https://shop.example.com/wp-json/wc/v3"


def _client(handler):
    return WooCommerceClient(
        base_url=BASE_URL + "/",
        consumer_key="ck_test",
        consumer_secret="cs_test",
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_credentials_sent_as_query_parameters():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1, "name": "Germany", "order": 0}])

    zones = await _client(handler).list_shipping_zones()

    assert [(z.id, z.name) for z in zones] == [(1, "Germany")]
    assert zones[0].raw == {"id": 1, "name": "Germany", "order": 0}
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/wp-json/wc/v3/shipping/zones"
    assert request.url.params["consumer_key"] == "ck_test"
    assert request.url.params["consumer_secret"] == "cs_test"


@pytest.mark.asyncio
async def test_zone_locations_and_methods_paths():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        if request.url.path.endswith("/locations"):
            return httpx.Response(200, json=[{"code": "DE", "type": "country"}])
        return httpx.Response(
            200,
            json=[
                {
                    "instance_id": 3,
                    "method_id": "flat_rate",
                    "enabled": True,
                    "settings": {"cost": {"id": "cost", "value": "4.90"}},
                }
            ],
        )

    client = _client(handler)
    locations = await client.list_zone_locations(5)
    methods = await client.list_zone_methods(5)

    assert paths == ["/wp-json/wc/v3/shipping/zones/5/locations", "/wp-json/wc/v3/shipping/zones/5/methods"]
    assert locations[0].code == "DE"
    assert methods[0].setting("cost") == "4.90"
    assert methods[0].enabled is True


@pytest.mark.asyncio
async def test_products_forward_params_and_read_total_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json=[{"id": 101}, {"id": 102}],
            headers={"X-WP-Total": "42", "X-WP-TotalPages": "5"},
        )

    page = await _client(handler).list_products({"category": 15, "page": 2, "per_page": 10, "exclude": None})

    assert [p["id"] for p in page.products] == [101, 102]
    assert page.total == 42
    assert page.total_pages == 5
    params = seen[0].url.params
    assert params["category"] == "15"
    assert params["page"] == "2"
    assert "exclude" not in params


@pytest.mark.asyncio
async def test_missing_total_headers_default_to_zero():
    page = await _client(lambda request: httpx.Response(200, json=[])).list_products({})

    assert page.products == []
    assert page.total == 0
    assert page.total_pages == 0


@pytest.mark.asyncio
async def test_create_order_posts_json_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={"id": 555, "status": "pending"})

    created = await _client(handler).create_order({"line_items": [{"product_id": 101, "quantity": 1}]})

    assert created["id"] == 555
    assert seen[0].method == "POST"
    assert seen[0].url.path.endswith("/orders")
    assert b'"product_id"' in seen[0].content


@pytest.mark.asyncio
async def test_http_error_carries_upstream_message_and_status():
    def handler(request):
        return httpx.Response(
            401,
            json={"code": "woocommerce_rest_authentication_error", "message": "Invalid signature."},
        )

    with pytest.raises(UpstreamError) as excinfo:
        await _client(handler).list_shipping_zones()

    assert str(excinfo.value) == "Invalid signature."
    assert excinfo.value.status_code == 401
    assert excinfo.value.payload["code"] == "woocommerce_rest_authentication_error"


@pytest.mark.asyncio
async def test_http_error_without_json_body():
    with pytest.raises(UpstreamError, match="WooCommerce returned HTTP 502"):
        await _client(lambda request: httpx.Response(502, text="Bad Gateway")).get_product(1)


@pytest.mark.asyncio
async def test_timeout_becomes_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError, match="Timed out calling WooCommerce /shipping/zones"):
        await _client(handler).list_shipping_zones()


@pytest.mark.asyncio
async def test_connection_error_becomes_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError, match="Could not reach WooCommerce"):
        await _client(handler).list_payment_gateways()


@pytest.mark.asyncio
async def test_unexpected_shapes_are_rejected():
    with pytest.raises(IntegrationResponseError):
        await _client(lambda request: httpx.Response(200, json={"not": "a list"})).list_shipping_zones()

    with pytest.raises(IntegrationResponseError):
        await _client(lambda request: httpx.Response(200, text="<html>maintenance</html>")).get_product(1)


@pytest.mark.asyncio
async def test_unconfigured_base_url(monkeypatch):
    monkeypatch.delenv("WC_API_URL", raising=False)
    client = WooCommerceClient(base_url="", transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))

    with pytest.raises(UpstreamError, match="WC_API_URL is not configured"):
        await client.list_shipping_zones()
