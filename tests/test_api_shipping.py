from src.integrations.clients.mocks.woocommerce import MockWooCommerceClient


def test_calculate_shipping_for_germany(api_client):
    response = api_client.post(
        "/api/shipping/calculate",
        json={
            "cart_items": [{"price": 19.9, "quantity": 2}],
            "shipping_address": {"country": "DE", "city": "Berlin", "postcode": "10115"},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["shipping_options"] == [
        {
            "id": "flat_rate",
            "instance_id": 1,
            "title": "DHL Paket",
            "cost": 4.9,
            "description": "Lets you charge a fixed rate for shipping.",
            "enabled": True,
        },
        {
            "id": "free_shipping",
            "instance_id": 2,
            "title": "Free shipping",
            "cost": 0.0,
            "description": "Free delivery to your address",
            "enabled": True,
        },
    ]
    assert data["zone"]["id"] == 1
    assert data["zone"]["name"] == "Germany"
    assert data["zone"]["order"] == 0
    assert data["zone"]["locations"] == [{"code": "DE", "type": "country"}]


def test_percentage_method_uses_cart_total(api_client):
    response = api_client.post(
        "/api/shipping/calculate",
        json={"cart_items": [{"price": "40.00", "quantity": 3}], "shipping_address": {"country": "FR"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["zone"]["name"] == "European Union"
    assert [o["cost"] for o in data["shipping_options"]] == [12.0]


def test_missing_country_uses_fallback_zone(api_client):
    response = api_client.post("/api/shipping/calculate", json={"cart_items": []})

    assert response.status_code == 200
    assert response.json()["zone"]["id"] == 1


def test_empty_body_is_accepted(api_client):
    response = api_client.post("/api/shipping/calculate", json={})

    assert response.status_code == 200
    assert response.json()["zone"]["name"] == "Germany"


def test_no_zones_returns_500(api_client_for):
    client = api_client_for(MockWooCommerceClient(zones=[], locations={}, methods={}))

    response = client.post("/api/shipping/calculate", json={"shipping_address": {"country": "DE"}})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to calculate shipping",
        "message": "No shipping zones available",
    }


def test_upstream_failure_returns_500(api_client_for):
    client = api_client_for(MockWooCommerceClient(fail_on={"methods:1"}))

    response = client.post("/api/shipping/calculate", json={"shipping_address": {"country": "DE"}})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to calculate shipping"
    assert "methods:1" in body["message"]


def test_list_zones_passes_upstream_records_through(api_client):
    response = api_client.get("/api/shipping/zones")

    assert response.status_code == 200
    zones = response.json()["shipping_zones"]
    assert [z["id"] for z in zones] == [1, 2, 0]
    assert zones[0] == {"id": 1, "name": "Germany", "order": 0}


def test_list_zone_methods(api_client, commerce):
    response = api_client.get("/api/shipping/zones/2/methods")

    assert response.status_code == 200
    methods = response.json()["shipping_methods"]
    assert [m["instance_id"] for m in methods] == [4]
    assert methods[0]["settings"]["cost"]["value"] == "10%"
    assert commerce.calls == ["methods:2"]


def test_list_zones_failure(api_client_for):
    client = api_client_for(MockWooCommerceClient(fail_on={"zones"}))

    response = client.get("/api/shipping/zones")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch shipping zones"


def test_out_of_range_costs_still_return_a_quote(api_client_for):
    methods = [
        {
            "instance_id": instance_id,
            "method_id": "flat_rate",
            "method_title": "Flat rate",
            "enabled": True,
            "settings": {"cost": {"id": "cost", "value": cost}},
        }
        for instance_id, cost in [(1, "1e400"), (2, "1e999999%"), (3, "4.90")]
    ]
    client = api_client_for(
        MockWooCommerceClient(
            zones=[{"id": 1, "name": "Germany"}],
            locations={1: [{"code": "DE", "type": "country"}]},
            methods={1: methods},
        )
    )

    response = client.post(
        "/api/shipping/calculate",
        json={"cart_items": [{"price": 10, "quantity": 2}], "shipping_address": {"country": "DE"}},
    )

    assert response.status_code == 200
    assert [o["cost"] for o in response.json()["shipping_options"]] == [0.0, 0.0, 4.9]
