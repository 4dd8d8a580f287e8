"""
Contracts (data models).

This folder defines the request/response shapes for the commerce backend integration.
Examples:
- Shipping zone / location / method resources
- Product pages returned by catalogue listings
- Cart and address inputs, shipping options returned to the storefront

Both mock and real HTTP clients should use these contracts.
"""

from .commerce import (
    CartItem,
    CommerceClient,
    ProductPage,
    SettingValue,
    ShippingAddress,
    ShippingMethod,
    ShippingOption,
    ShippingQuote,
    ShippingZone,
    UpstreamError,
    ZoneLocation,
)

__all__ = [
    "CartItem",
    "CommerceClient",
    "ProductPage",
    "SettingValue",
    "ShippingAddress",
    "ShippingMethod",
    "ShippingOption",
    "ShippingQuote",
    "ShippingZone",
    "UpstreamError",
    "ZoneLocation",
]
