#!/usr/bin/env python3
"""
Run a shipping calculation and print each stage to the terminal.
Shows the store's zones, the zone chosen for the country, its methods and the priced options.

Uses the real WooCommerce store when WC_API_URL is set, otherwise the in-memory mock store.

Usage (from repo root):
  python scripts/run_shipping_quote.py DE 19.90x2 4.50
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.api.dependencies import get_commerce_client, get_proxy_config
from src.api.endpoints.shipping import quote_to_dict
from src.integrations.contracts.commerce import CartItem, ShippingAddress
from src.shipping.pipeline import ShippingCalculator


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def parse_item(value: str) -> CartItem:
    """``"19.90x2"`` -> price 19.90, quantity 2; a bare price means quantity 1."""
    price, _, quantity = value.partition("x")
    return CartItem(price=Decimal(price), quantity=int(quantity or 1))


async def main(country: str | None, items: list[CartItem]):
    setup_logging()
    client = get_commerce_client()
    cfg = get_proxy_config()

    zones = await client.list_shipping_zones()
    print_stage("SHIPPING ZONES", [zone.raw for zone in zones])

    calculator = ShippingCalculator(client, catch_all_zone_name=cfg.shipping.catch_all_zone_name)
    quote = await calculator.calculate_shipping(items, ShippingAddress(country=country))
    result = quote_to_dict(quote)

    print_stage(f"ZONE FOR {country or '<no country>'}", result["zone"])
    methods = await client.list_zone_methods(quote.zone.id)
    print_stage("ZONE METHODS", [method.raw for method in methods])
    print_stage("SHIPPING OPTIONS", result["shipping_options"])


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Quote shipping for a cart")
    parser.add_argument("country", nargs="?", default=None, help="ISO country code, e.g. DE")
    parser.add_argument("items", nargs="*", help="Cart items as PRICExQTY, e.g. 19.90x2")
    args = parser.parse_args()
    asyncio.run(main(args.country, [parse_item(item) for item in args.items]))
