"""
Integrations layer.
This package contains all code used to communicate with the commerce backend:
- WooCommerce REST API (shipping zones/methods, products, payment gateways, orders)

Key rule:
- Endpoints and the shipping pipeline MUST NOT call the store directly.
- They go through a CommerceClient (under src/integrations/clients).
- We use the MOCK client during development and the REAL_HTTP client when a store is configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""

from .contracts.commerce import (
    CartItem,
    CommerceClient,
    ProductPage,
    ShippingAddress,
    ShippingMethod,
    ShippingOption,
    ShippingQuote,
    ShippingZone,
    UpstreamError,
    ZoneLocation,
)
from .policy.response_wrappers import IntegrationResponseError
from .policy.stock_normalizer import normalize_stock

__all__ = [
    # contracts
    "CartItem", "CommerceClient", "ProductPage", "ShippingAddress",
    "ShippingMethod", "ShippingOption", "ShippingQuote", "ShippingZone",
    "UpstreamError", "ZoneLocation",
    # policy
    "IntegrationResponseError", "normalize_stock",
]
