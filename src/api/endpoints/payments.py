import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import get_commerce_client
from src.error_handler import error_handler
from src.integrations.contracts.commerce import CommerceClient

logger = logging.getLogger(__name__)

api = APIRouter()
payments_api = api


@api.get("/payment-gateways", tags=["Payments"])
async def list_payment_gateways(client: CommerceClient = Depends(get_commerce_client)):
    """Payment gateways the store has enabled."""
    logger.info("Fetching payment gateways from WooCommerce")
    try:
        gateways = await client.list_payment_gateways()
    except Exception as e:
        return JSONResponse(status_code=500, content=error_handler.error_payload("Failed to fetch payment gateways", e))

    enabled = [gateway for gateway in gateways if gateway.get("enabled") is True]
    for gateway in enabled:
        if gateway.get("id") == "bacs" and gateway.get("instructions"):
            logger.info("BACS payment instructions: %s", gateway["instructions"])

    logger.info("Found %d enabled payment gateways", len(enabled))
    return {"payment_gateways": enabled}
