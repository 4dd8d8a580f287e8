import copy
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import get_commerce_client
from src.error_handler import error_handler
from src.integrations.contracts.commerce import CommerceClient

logger = logging.getLogger(__name__)

api = APIRouter()
orders_api = api

CIRCULAR_REFERENCE_MARKER = "Circular Reference"


def repair_shipping_block(order: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace a serialized circular reference in ``shipping`` with a copy of ``billing``.

    Some storefront serializers emit ``{"message": "...Circular Reference..."}`` when the
    shipping address object points back at the billing one.
    """
    shipping = order.get("shipping")
    if isinstance(shipping, dict) and CIRCULAR_REFERENCE_MARKER in str(shipping.get("message") or ""):
        logger.info("Detected circular reference in shipping address, using billing address instead")
        order["shipping"] = dict(order.get("billing") or {})
    return order


@api.post("/orders", tags=["Orders"])
async def create_order(
    payload: Dict[str, Any] = Body(...),
    client: CommerceClient = Depends(get_commerce_client),
):
    order = repair_shipping_block(copy.deepcopy(payload))
    logger.info("Creating new order with %d line items", len(order.get("line_items") or []))
    logger.debug("Order payload: %s", order)

    try:
        created = await client.create_order(order)
    except Exception as e:
        return JSONResponse(status_code=500, content=error_handler.error_payload("Failed to create order", e))

    logger.info("Order created successfully: %s", created.get("id"))
    return {"success": True, "order": created}
