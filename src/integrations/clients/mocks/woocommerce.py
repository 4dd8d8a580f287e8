"""
WooCommerce MOCK client.

⚠️  This is a mock implementation for development and testing.
    It serves a small in-memory store (zones, methods, products, gateways)
    without any network calls. Individual calls can be made to fail via
    ``fail_on`` to exercise the error paths of the shipping pipeline.
"""

import copy
import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Union

from src.integrations.contracts.commerce import (
    CommerceClient,
    ProductPage,
    ShippingMethod,
    ShippingZone,
    UpstreamError,
    ZoneLocation,
)
from src.integrations.policy.response_wrappers import (
    normalize_locations,
    normalize_methods,
    normalize_payment_gateways,
    normalize_product_page,
    normalize_zones,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_SEED_ZONES: List[Dict[str, Any]] = [
    {"id": 1, "name": "Germany", "order": 0},
    {"id": 2, "name": "European Union", "order": 1},
    {"id": 0, "name": "Locations not covered by your other zones", "order": 2},
]

_SEED_LOCATIONS: Dict[Any, List[Dict[str, Any]]] = {
    1: [{"code": "DE", "type": "country"}],
    2: [
        {"code": "AT", "type": "country"},
        {"code": "FR", "type": "country"},
        {"code": "NL", "type": "country"},
        {"code": "EU", "type": "continent"},
    ],
    0: [],
}

_SEED_METHODS: Dict[Any, List[Dict[str, Any]]] = {
    1: [
        {
            "instance_id": 1,
            "method_id": "flat_rate",
            "method_title": "Flat rate",
            "title": "Flat rate",
            "enabled": True,
            "method_description": "<p>Lets you charge a fixed rate for shipping.</p>",
            "settings": {
                "title": {"id": "title", "value": "DHL Paket"},
                "cost": {"id": "cost", "value": "4.90"},
            },
        },
        {
            "instance_id": 2,
            "method_id": "free_shipping",
            "method_title": "Free shipping",
            "title": "Free shipping",
            "enabled": True,
            "method_description": "",
            "settings": {
                "title": {"id": "title", "value": "Free shipping"},
                "min_amount": {"id": "min_amount", "value": "50"},
            },
        },
        {
            "instance_id": 3,
            "method_id": "local_pickup",
            "method_title": "Local pickup",
            "title": "Local pickup",
            "enabled": False,
            "method_description": "",
            "settings": {"cost": {"id": "cost", "value": "0"}},
        },
    ],
    2: [
        {
            "instance_id": 4,
            "method_id": "flat_rate",
            "method_title": "Flat rate",
            "title": "Flat rate",
            "enabled": True,
            "method_description": "",
            "settings": {"cost": {"id": "cost", "value": "10%"}},
        },
    ],
    0: [
        {
            "instance_id": 5,
            "method_id": "flat_rate",
            "method_title": "International",
            "title": "International",
            "enabled": True,
            "method_description": "",
            "settings": {"cost": {"id": "cost", "value": "25.00"}},
        },
    ],
}

_SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 101,
        "name": "Canvas Tote Bag",
        "price": "19.90",
        "featured": True,
        "categories": [{"id": 15, "name": "Bags"}],
        "stock_quantity": None,
        "stock_status": "instock",
    },
    {
        "id": 102,
        "name": "Leather Backpack",
        "price": "129.00",
        "featured": False,
        "categories": [{"id": 15, "name": "Bags"}],
        "stock_quantity": "7",
        "stock_status": "instock",
    },
    {
        "id": 103,
        "name": "Wool Scarf",
        "price": "39.50",
        "featured": True,
        "categories": [{"id": 21, "name": "Accessories"}],
        "stock_quantity": 0,
        "stock_status": "outofstock",
    },
]

_SEED_PAYMENT_GATEWAYS: List[Dict[str, Any]] = [
    {
        "id": "bacs",
        "title": "Direct bank transfer",
        "enabled": True,
        "instructions": "Make your payment directly into our bank account.",
    },
    {"id": "cod", "title": "Cash on delivery", "enabled": True},
    {"id": "cheque", "title": "Check payments", "enabled": False},
]


class MockWooCommerceClient(CommerceClient):
    """In-memory store implementing the CommerceClient interface.

    ``fail_on`` holds call keys that raise ``UpstreamError``: ``"zones"``,
    ``"locations:<zone_id>"``, ``"methods:<zone_id>"``, ``"products"``,
    ``"product:<id>"``, ``"payment_gateways"``, ``"orders"``.
    Every call is appended to ``calls`` using the same keys.
    ``calls`` and ``orders`` are never pruned; create a fresh instance to reset them.
    """

    def __init__(
        self,
        zones: Optional[List[Dict[str, Any]]] = None,
        locations: Optional[Dict[Any, List[Dict[str, Any]]]] = None,
        methods: Optional[Dict[Any, List[Dict[str, Any]]]] = None,
        products: Optional[List[Dict[str, Any]]] = None,
        payment_gateways: Optional[List[Dict[str, Any]]] = None,
        fail_on: Iterable[str] = (),
    ) -> None:
        self._zones = copy.deepcopy(_SEED_ZONES if zones is None else zones)
        self._locations = _by_zone_key(_SEED_LOCATIONS if locations is None else locations)
        self._methods = _by_zone_key(_SEED_METHODS if methods is None else methods)
        self._products = copy.deepcopy(_SEED_PRODUCTS if products is None else products)
        self._payment_gateways = copy.deepcopy(
            _SEED_PAYMENT_GATEWAYS if payment_gateways is None else payment_gateways
        )
        self.fail_on = set(fail_on)
        self.calls: List[str] = []
        self.orders: List[Dict[str, Any]] = []
        self._next_order_id = 1001

    # -- Shipping --

    async def list_shipping_zones(self) -> List[ShippingZone]:
        self._record("zones")
        return normalize_zones(copy.deepcopy(self._zones))

    async def list_zone_locations(self, zone_id: Union[int, str]) -> List[ZoneLocation]:
        self._record(f"locations:{zone_id}")
        return normalize_locations(copy.deepcopy(self._locations.get(str(zone_id), [])))

    async def list_zone_methods(self, zone_id: Union[int, str]) -> List[ShippingMethod]:
        self._record(f"methods:{zone_id}")
        return normalize_methods(copy.deepcopy(self._methods.get(str(zone_id), [])))

    # -- Catalogue --

    async def list_products(self, params: Dict[str, Any]) -> ProductPage:
        self._record("products")
        products = list(self._products)

        if str(params.get("featured", "")).lower() == "true":
            products = [p for p in products if p.get("featured") is True]
        if params.get("category") is not None:
            category = str(params["category"])
            products = [
                p for p in products
                if any(str(c.get("id")) == category for c in p.get("categories", []))
            ]
        if params.get("exclude") is not None:
            excluded = {part.strip() for part in str(params["exclude"]).split(",")}
            products = [p for p in products if str(p.get("id")) not in excluded]

        page = max(int(params.get("page", 1)), 1)
        per_page = max(int(params.get("per_page", 10)), 1)
        start = (page - 1) * per_page
        headers = {
            "x-wp-total": str(len(products)),
            "x-wp-totalpages": str(math.ceil(len(products) / per_page)),
        }
        return normalize_product_page(copy.deepcopy(products[start:start + per_page]), headers)

    async def get_product(self, product_id: Union[int, str]) -> Dict[str, Any]:
        self._record(f"product:{product_id}")
        for product in self._products:
            if str(product.get("id")) == str(product_id):
                return copy.deepcopy(product)
        raise UpstreamError("Invalid ID.", status_code=404, payload={"code": "woocommerce_rest_product_invalid_id"})

    # -- Checkout --

    async def list_payment_gateways(self) -> List[Dict[str, Any]]:
        self._record("payment_gateways")
        return normalize_payment_gateways(copy.deepcopy(self._payment_gateways))

    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        self._record("orders")
        created = copy.deepcopy(order)
        created.update({"id": self._next_order_id, "status": created.get("status", "pending")})
        self._next_order_id += 1
        self.orders.append(created)
        logger.info("[MOCK] Created order %s", created["id"])
        return copy.deepcopy(created)

    def _record(self, key: str) -> None:
        self.calls.append(key)
        if key in self.fail_on:
            logger.info("[MOCK] Simulating upstream failure for %s", key)
            raise UpstreamError(f"Simulated upstream failure for {key}", status_code=503)


def _by_zone_key(data: Dict[Any, List[Dict[str, Any]]]) -> Dict[str, List[Dict[str, Any]]]:
    # Zone ids arrive as ints from the zone list and as strings from URL paths
    return {str(zone_id): copy.deepcopy(items) for zone_id, items in data.items()}
