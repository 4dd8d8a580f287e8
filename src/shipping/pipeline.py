"""
Shipping calculation pipeline.

zones -> zone for the destination country -> that zone's methods -> options
priced against the cart total.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from src.integrations.contracts.commerce import CartItem, CommerceClient, ShippingAddress, ShippingQuote
from src.shipping.costs import cart_total, compute_options
from src.shipping.zones import CATCH_ALL_ZONE_NAME, resolve_zone

logger = logging.getLogger(__name__)


class ShippingCalculator:
    def __init__(self, client: CommerceClient, catch_all_zone_name: str = CATCH_ALL_ZONE_NAME):
        self.client = client
        self.catch_all_zone_name = catch_all_zone_name

    async def calculate_shipping(
        self,
        cart_items: Optional[Sequence[CartItem]],
        shipping_address: Optional[ShippingAddress],
    ) -> ShippingQuote:
        """
        Resolve the destination zone and price its enabled shipping methods.

        Raises:
            UpstreamError: the zone list or the chosen zone's methods could not be fetched.
            NoZonesAvailable: the store has no shipping zones.
        """
        items = list(cart_items or [])
        country = shipping_address.country if shipping_address else None
        logger.info("Calculating shipping for cart with %d items", len(items))
        logger.info("Shipping address country: %s", country)

        zones = await self.client.list_shipping_zones()
        zone = await resolve_zone(self.client, zones, country, catch_all_name=self.catch_all_zone_name)

        methods = await self.client.list_zone_methods(zone.id)
        logger.info(
            "Found %d enabled shipping methods for zone %s",
            sum(1 for m in methods if m.enabled),
            zone.name,
        )

        total = cart_total(items)
        logger.info("Cart total for shipping calculation: %s", total)

        options = compute_options(methods, total)
        logger.info(
            "Calculated shipping options: %s",
            [(opt.title, str(opt.cost), opt.description) for opt in options],
        )
        return ShippingQuote(shipping_options=options, zone=zone)
