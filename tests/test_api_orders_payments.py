from src.api.endpoints.orders import repair_shipping_block
from src.integrations.clients.mocks.woocommerce import MockWooCommerceClient

BILLING = {"first_name": "Ada", "last_name": "Lovelace", "country": "DE", "city": "Berlin"}


def test_payment_gateways_only_enabled(api_client):
    response = api_client.get("/api/payment-gateways")

    assert response.status_code == 200
    assert [g["id"] for g in response.json()["payment_gateways"]] == ["bacs", "cod"]


def test_payment_gateways_failure(api_client_for):
    client = api_client_for(MockWooCommerceClient(fail_on={"payment_gateways"}))

    response = client.get("/api/payment-gateways")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch payment gateways"


def test_create_order(api_client, commerce):
    order = {
        "payment_method": "bacs",
        "billing": BILLING,
        "shipping": {**BILLING, "first_name": "Charles"},
        "line_items": [{"product_id": 101, "quantity": 2}],
    }

    response = api_client.post("/api/orders", json=order)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["order"]["id"] == 1001
    assert data["order"]["status"] == "pending"
    assert commerce.orders[0]["shipping"]["first_name"] == "Charles"


def test_create_order_repairs_circular_shipping_reference(api_client, commerce):
    order = {
        "billing": BILLING,
        "shipping": {"message": "[Circular Reference]"},
        "line_items": [],
    }

    response = api_client.post("/api/orders", json=order)

    assert response.status_code == 200
    assert commerce.orders[0]["shipping"] == BILLING


def test_create_order_failure(api_client_for):
    client = api_client_for(MockWooCommerceClient(fail_on={"orders"}))

    response = client.post("/api/orders", json={"line_items": []})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to create order"


def test_repair_leaves_regular_shipping_alone():
    order = {"billing": BILLING, "shipping": {"city": "Munich"}}
    assert repair_shipping_block(order)["shipping"] == {"city": "Munich"}

    assert repair_shipping_block({"billing": BILLING})["billing"] == BILLING


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["service"] == "Storefront Proxy API"


def test_dev_mock_store_is_shared_and_keeps_orders():
    import asyncio

    from src.api.dependencies import _mock_client

    store = _mock_client()
    before = len(store.orders)
    asyncio.run(store.create_order({"line_items": []}))

    assert _mock_client() is store
    assert len(_mock_client().orders) == before + 1
    assert MockWooCommerceClient().orders == []
