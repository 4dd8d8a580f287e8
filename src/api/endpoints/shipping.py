import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_commerce_client, get_proxy_config
from src.error_handler import error_handler
from src.integrations.contracts.commerce import (
    CartItem,
    CommerceClient,
    ShippingAddress,
    ShippingOption,
    ShippingQuote,
    ShippingZone,
)
from src.shipping.pipeline import ShippingCalculator
from src.utils.config_loader import ProxyConfig

logger = logging.getLogger(__name__)

api = APIRouter()
shipping_api = api


class CartItemPayload(BaseModel):
    price: Decimal = Decimal("0")
    quantity: int = Field(default=0, ge=0)


class ShippingAddressPayload(BaseModel):
    """Only ``country`` is used; other address fields are accepted and ignored."""

    model_config = ConfigDict(extra="allow")

    country: Optional[str] = None


class ShippingCalculateRequest(BaseModel):
    cart_items: Optional[List[CartItemPayload]] = Field(default=None, description="Items in the cart")
    shipping_address: Optional[ShippingAddressPayload] = Field(default=None, description="Destination address")


@api.get("/shipping/zones", tags=["Shipping"])
async def list_shipping_zones(client: CommerceClient = Depends(get_commerce_client)):
    logger.info("Fetching shipping zones from WooCommerce")
    try:
        zones = await client.list_shipping_zones()
    except Exception as e:
        return JSONResponse(status_code=500, content=error_handler.error_payload("Failed to fetch shipping zones", e))

    logger.info("Found %d shipping zones", len(zones))
    return {"shipping_zones": [zone.raw for zone in zones]}


@api.get("/shipping/zones/{zone_id}/methods", tags=["Shipping"])
async def list_zone_methods(zone_id: str, client: CommerceClient = Depends(get_commerce_client)):
    logger.info("Fetching shipping methods for zone %s", zone_id)
    try:
        methods = await client.list_zone_methods(zone_id)
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content=error_handler.error_payload("Failed to fetch shipping methods", e, {"zone_id": zone_id}),
        )

    logger.info("Found %d shipping methods for zone %s", len(methods), zone_id)
    return {"shipping_methods": [method.raw for method in methods]}


@api.post("/shipping/calculate", tags=["Shipping"])
async def calculate_shipping(
    request: ShippingCalculateRequest,
    client: CommerceClient = Depends(get_commerce_client),
    cfg: ProxyConfig = Depends(get_proxy_config),
):
    """
    Shipping options for a cart delivered to ``shipping_address.country``.

    A missing country does not fail the request; the fallback zone is used instead.
    """
    cart_items = [CartItem(price=item.price, quantity=item.quantity) for item in request.cart_items or []]
    address = None
    if request.shipping_address is not None:
        address = ShippingAddress(
            country=request.shipping_address.country,
            extra=dict(request.shipping_address.model_extra or {}),
        )

    calculator = ShippingCalculator(client, catch_all_zone_name=cfg.shipping.catch_all_zone_name)
    try:
        quote = await calculator.calculate_shipping(cart_items, address)
    except Exception as e:
        return JSONResponse(status_code=500, content=error_handler.error_payload("Failed to calculate shipping", e))

    return quote_to_dict(quote)


def _option_to_dict(option: ShippingOption) -> Dict[str, Any]:
    return {
        "id": option.id,
        "instance_id": option.instance_id,
        "title": option.title,
        "cost": float(option.cost),
        "description": option.description,
        "enabled": option.enabled,
    }


def _zone_to_dict(zone: ShippingZone) -> Dict[str, Any]:
    return {
        **zone.raw,
        "id": zone.id,
        "name": zone.name,
        "locations": [location.model_dump() for location in zone.locations],
    }


def quote_to_dict(quote: ShippingQuote) -> Dict[str, Any]:
    return {
        "shipping_options": [_option_to_dict(option) for option in quote.shipping_options],
        "zone": _zone_to_dict(quote.zone),
    }
