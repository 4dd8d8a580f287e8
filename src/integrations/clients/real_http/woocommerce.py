"""
WooCommerce REST HTTP Client.

Purpose:
- Talks to the store's WooCommerce REST API (wc/v3) on behalf of the storefront
- Keeps the consumer key/secret server-side; the storefront never sees them
- Normalizes responses into the commerce contracts before handing them to flows

Usage:
- Selected in src/api/dependencies.py when WC_API_URL is configured
- Called by the API endpoints and the shipping pipeline via the CommerceClient interface

Important:
- This client should be the ONLY place that talks HTTP to the store.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Union

import httpx

from src.integrations.contracts.commerce import (
    CommerceClient,
    ProductPage,
    ShippingMethod,
    ShippingZone,
    UpstreamError,
    ZoneLocation,
)
from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_locations,
    normalize_methods,
    normalize_payment_gateways,
    normalize_product_page,
    normalize_resource,
    normalize_zones,
)

logger = logging.getLogger(__name__)


class WooCommerceClient(CommerceClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("WC_API_URL", "")).rstrip("/")
        self.consumer_key = consumer_key or os.getenv("WC_CONSUMER_KEY", "")
        self.consumer_secret = consumer_secret or os.getenv("WC_CONSUMER_SECRET", "")
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        if not self.base_url:
            logger.warning("WooCommerce API URL is not set.")

    # -- Shipping --

    async def list_shipping_zones(self) -> List[ShippingZone]:
        response = await self._request("GET", "/shipping/zones")
        return normalize_zones(self._json(response))

    async def list_zone_locations(self, zone_id: Union[int, str]) -> List[ZoneLocation]:
        response = await self._request("GET", f"/shipping/zones/{zone_id}/locations")
        return normalize_locations(self._json(response))

    async def list_zone_methods(self, zone_id: Union[int, str]) -> List[ShippingMethod]:
        response = await self._request("GET", f"/shipping/zones/{zone_id}/methods")
        return normalize_methods(self._json(response))

    # -- Catalogue --

    async def list_products(self, params: Dict[str, Any]) -> ProductPage:
        response = await self._request("GET", "/products", params=params)
        return normalize_product_page(self._json(response), response.headers)

    async def get_product(self, product_id: Union[int, str]) -> Dict[str, Any]:
        response = await self._request("GET", f"/products/{product_id}")
        return normalize_resource(self._json(response), "product")

    # -- Checkout --

    async def list_payment_gateways(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/payment_gateways")
        return normalize_payment_gateways(self._json(response))

    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._request("POST", "/orders", json=order)
        return normalize_resource(self._json(response), "order")

    # -- Transport --

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        if not self.base_url:
            raise UpstreamError("WC_API_URL is not configured.")

        query: Dict[str, Any] = {
            "consumer_key": self.consumer_key,
            "consumer_secret": self.consumer_secret,
        }
        query.update({key: value for key, value in (params or {}).items() if value is not None})

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
                response = await client.request(method, url, params=query, json=json)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            payload = _error_body(e.response)
            message = payload.get("message") or f"WooCommerce returned HTTP {e.response.status_code}"
            logger.error("HTTP error from WooCommerce %s %s: %s %s", method, path, e.response.status_code, message)
            raise UpstreamError(str(message), status_code=e.response.status_code, payload=payload) from e
        except httpx.TimeoutException as e:
            logger.error("Timed out calling WooCommerce %s %s after %ss", method, path, self.timeout_seconds)
            raise UpstreamError(f"Timed out calling WooCommerce {path}") from e
        except httpx.RequestError as e:
            logger.error("Request error connecting to WooCommerce %s %s: %s", method, path, e)
            raise UpstreamError(f"Could not reach WooCommerce: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise IntegrationResponseError(
                f"WooCommerce returned a non-JSON body for {response.request.url.path}",
                payload={"body": response.text[:500]},
            ) from exc


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {"body": response.text[:500]}
    return data if isinstance(data, dict) else {"body": data}
