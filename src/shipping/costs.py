"""
Shipping method cost calculation.

Turns a zone's configured shipping methods into concrete options for a cart.
Method settings are free-form strings set by the store owner, e.g.:

    "4.90"         flat amount
    "10%"          percentage of the cart total
    "min_amount"   use the method's ``min_amount`` setting
    "5 + [qty]"    WooCommerce cost formula; only the leading amount is used

Anything unparseable costs 0. Amounts stay ``Decimal`` until presentation.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from src.integrations.contracts.commerce import CartItem, ShippingMethod, ShippingOption
from src.utils.text import strip_html

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
DEFAULT_TITLE = "Shipping"
MIN_DESCRIPTION_LENGTH = 5
MIN_AMOUNT_SENTINEL = "min_amount"

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def cart_total(items: Iterable[CartItem]) -> Decimal:
    """Sum of ``price * quantity``; no intermediate rounding."""
    return sum((Decimal(str(item.price)) * item.quantity for item in items), ZERO)


def parse_amount(value: Optional[str]) -> Optional[Decimal]:
    """Parse the leading number of ``value``; None when there is none."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(value)
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def method_cost(method: ShippingMethod, total: Decimal) -> Decimal:
    raw = method.setting("cost")
    if not raw:
        return ZERO

    try:
        if "%" in raw:
            percentage = parse_amount(raw.replace("%", ""))
            cost = total * percentage / 100 if percentage is not None else ZERO
        elif raw == MIN_AMOUNT_SENTINEL:
            cost = parse_amount(method.setting("min_amount")) or ZERO
        else:
            cost = parse_amount(raw) or ZERO
    except ArithmeticError as e:
        logger.warning("Unusable cost %r for method %s: %s", raw, method.method_id, e)
        return ZERO

    # Must survive float() for the JSON response
    if not cost.is_finite() or not math.isfinite(float(cost)):
        logger.warning("Unusable cost %r for method %s: out of range", raw, method.method_id)
        return ZERO
    if cost < ZERO:
        logger.debug("Negative cost %s for method %s clamped to 0", cost, method.method_id)
        return ZERO
    return cost


def method_title(method: ShippingMethod) -> str:
    return method.setting("title") or method.method_title or method.title or DEFAULT_TITLE


def default_description(method_id: str, cost: Decimal) -> str:
    if method_id == "free_shipping":
        return "Free delivery to your address"
    if method_id == "flat_rate":
        return "Fixed rate delivery" if cost > 0 else "Standard delivery"
    if method_id == "local_pickup":
        return "Pick up from our location"
    return "Delivery service"


def method_description(method: ShippingMethod, cost: Decimal) -> str:
    if method.method_description:
        description = strip_html(method.method_description)
    elif method.setting("description"):
        description = strip_html(method.setting("description"))
    else:
        description = ""

    if len(description) < MIN_DESCRIPTION_LENGTH:
        description = default_description(method.method_id, cost)
    return description


def compute_options(methods: Iterable[ShippingMethod], total: Decimal) -> List[ShippingOption]:
    """Build one ShippingOption per enabled method, keeping upstream order."""
    options: List[ShippingOption] = []
    for method in methods:
        if not method.enabled:
            continue
        cost = method_cost(method, total)
        options.append(
            ShippingOption(
                id=method.method_id,
                instance_id=method.instance_id,
                title=method_title(method),
                cost=cost,
                description=method_description(method, cost),
                enabled=method.enabled,
            )
        )
    return options
