"""
Real HTTP integration clients.

These clients communicate with the real commerce backend via HTTP:
- WooCommerce REST API (shipping zones/methods, products, payment gateways, orders)

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients should happen in src/api/dependencies.py only.
"""

from .woocommerce import WooCommerceClient

__all__ = ["WooCommerceClient"]
