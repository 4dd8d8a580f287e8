from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from src.integrations.contracts.commerce import (
    ProductPage,
    ShippingMethod,
    ShippingZone,
    UpstreamError,
    ZoneLocation,
)


class IntegrationResponseError(UpstreamError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message, payload=payload if isinstance(payload, dict) else {"body": payload})


def normalize_zones(raw: Any) -> List[ShippingZone]:
    items = _expect_list(raw, "shipping zones")
    return [
        _build_model(
            ShippingZone,
            {
                "id": item.get("id"),
                "name": str(item.get("name") or ""),
                "raw": item,
            },
            item,
        )
        for item in items
    ]


def normalize_locations(raw: Any) -> List[ZoneLocation]:
    items = _expect_list(raw, "zone locations")
    return [
        _build_model(
            ZoneLocation,
            {
                "code": str(item.get("code") or ""),
                "type": str(item.get("type") or ""),
            },
            item,
        )
        for item in items
    ]


def normalize_methods(raw: Any) -> List[ShippingMethod]:
    items = _expect_list(raw, "shipping methods")
    return [
        _build_model(
            ShippingMethod,
            {
                "instance_id": item.get("instance_id"),
                "method_id": str(item.get("method_id") or ""),
                "method_title": item.get("method_title"),
                "title": item.get("title"),
                "enabled": item.get("enabled"),
                "method_description": item.get("method_description"),
                "settings": item.get("settings"),
                "raw": item,
            },
            item,
        )
        for item in items
    ]


def normalize_product_page(raw: Any, headers: Mapping[str, str]) -> ProductPage:
    # Non-list bodies are treated as an empty page rather than an error
    products = [item for item in raw if isinstance(item, dict)] if isinstance(raw, list) else []
    return ProductPage(
        products=products,
        total=_header_int(headers, "x-wp-total"),
        total_pages=_header_int(headers, "x-wp-totalpages"),
    )


def normalize_payment_gateways(raw: Any) -> List[Dict[str, Any]]:
    return _expect_list(raw, "payment gateways")


def normalize_resource(raw: Any, label: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected a JSON object for {label}; got {type(raw).__name__}.", payload=raw)
    return raw


def _expect_list(raw: Any, label: str) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        raise IntegrationResponseError(f"Expected a JSON list of {label}; got {type(raw).__name__}.", payload=raw)
    return [item for item in raw if isinstance(item, dict)]


def _header_int(headers: Mapping[str, str], name: str) -> int:
    try:
        return int(headers.get(name) or "0")
    except (TypeError, ValueError):
        return 0


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
