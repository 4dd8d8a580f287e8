"""
Mock integration clients.

These clients return fake (but realistic) store data without calling any external API.
They are used when:
- No WooCommerce store is configured (local development)
- We want to test the shipping pipeline and endpoints without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*

Switching to real:
Set WC_API_URL (or INTEGRATIONS_MODE=real) and the dependency in src/api/dependencies.py
selects clients/real_http/woocommerce.py instead.
"""

from .woocommerce import MockWooCommerceClient

__all__ = ["MockWooCommerceClient"]
