"""
Commerce contracts.

Defines the shapes exchanged with the upstream commerce backend (WooCommerce REST API):
- shipping zones, zone locations and zone shipping methods
- product pages returned by the catalogue listing
- cart / address inputs and the shipping options we hand back to the storefront

These contracts must be used by both:
- clients/mocks/woocommerce.py (in-memory store data for development/testing)
- clients/real_http/woocommerce.py (real API calls against the store)

Why:
- Upstream JSON is loosely typed; flows rely on these models instead of ad-hoc dicts
- The shipping pipeline can be tested end-to-end against the mock client
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class UpstreamError(RuntimeError):
    """A call to the commerce backend failed (network, timeout, auth, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


# ---------------------------------------------------------------------------
# Upstream resources
# ---------------------------------------------------------------------------

class ZoneLocation(BaseModel):
    code: str = ""
    type: str = ""


class ShippingZone(BaseModel):
    id: Optional[Union[int, str]] = None   # None when the store sent a record without one
    name: str = ""
    locations: List[ZoneLocation] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict)


class SettingValue(BaseModel):
    """One entry of a method's provider-defined ``settings`` mapping."""

    value: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _scalar_as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value)


class ShippingMethod(BaseModel):
    instance_id: Optional[Union[int, str]] = None
    method_id: str = ""
    method_title: Optional[str] = None
    title: Optional[str] = None
    enabled: bool = False
    method_description: Optional[str] = None
    settings: Dict[str, SettingValue] = Field(default_factory=dict)
    raw: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("enabled", mode="before")
    @classmethod
    def _strictly_true(cls, value: Any) -> bool:
        return value is True

    @field_validator("settings", mode="before")
    @classmethod
    def _settings_mapping(cls, value: Any) -> Dict[str, Any]:
        # PHP serializes an empty settings array as [] rather than {}
        if not isinstance(value, dict):
            return {}
        return {key: entry for key, entry in value.items() if isinstance(entry, dict)}

    def setting(self, name: str) -> Optional[str]:
        """Return ``settings[name].value`` or None when the key is absent."""
        entry = self.settings.get(name)
        return entry.value if entry is not None else None


# ---------------------------------------------------------------------------
# Request / response value objects
# ---------------------------------------------------------------------------

@dataclass
class CartItem:
    price: Decimal
    quantity: int


@dataclass
class ShippingAddress:
    country: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)   # remaining address fields, unused


@dataclass
class ShippingOption:
    id: str
    instance_id: Optional[Union[int, str]]
    title: str
    cost: Decimal
    description: str
    enabled: bool = True


@dataclass
class ShippingQuote:
    shipping_options: List[ShippingOption]
    zone: ShippingZone


@dataclass
class ProductPage:
    products: List[Dict[str, Any]]
    total: int = 0
    total_pages: int = 0


# ---------------------------------------------------------------------------
# Abstract client interface
# ---------------------------------------------------------------------------

class CommerceClient(ABC):
    """Every commerce backend client (mock or real) must implement this interface.

    All methods raise ``UpstreamError`` when the backend call fails.
    """

    # -- Shipping --

    @abstractmethod
    async def list_shipping_zones(self) -> List[ShippingZone]:
        """Return the store's shipping zones in the store owner's order."""

    @abstractmethod
    async def list_zone_locations(self, zone_id: Union[int, str]) -> List[ZoneLocation]:
        """Return the locations covered by a zone."""

    @abstractmethod
    async def list_zone_methods(self, zone_id: Union[int, str]) -> List[ShippingMethod]:
        """Return the shipping methods configured for a zone."""

    # -- Catalogue --

    @abstractmethod
    async def list_products(self, params: Dict[str, Any]) -> ProductPage:
        """Return one page of products; ``params`` are forwarded as query parameters."""

    @abstractmethod
    async def get_product(self, product_id: Union[int, str]) -> Dict[str, Any]:
        """Fetch a single product by ID."""

    # -- Checkout --

    @abstractmethod
    async def list_payment_gateways(self) -> List[Dict[str, Any]]:
        """Return all payment gateways, enabled or not."""

    @abstractmethod
    async def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        """Submit an order and return the created resource."""
