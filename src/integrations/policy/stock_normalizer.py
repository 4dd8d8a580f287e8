"""
Stock normalization for product records returned by the store.

The store reports inventory inconsistently: ``stock_quantity`` may be missing,
null, a numeric string, or 0 for products that are in stock but not tracked.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Union

IN_STOCK = "instock"


def normalize_stock(product: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a copy of ``product`` with a usable, non-negative ``stock_quantity``.

    - missing or non-numeric quantities become 0
    - an ``instock`` product with quantity 0 gets 1 (available, quantity unknown)
    """
    if product is None:
        return product

    normalized = dict(product)
    quantity = _coerce_quantity(normalized.get("stock_quantity"))
    if quantity == 0 and normalized.get("stock_status") == IN_STOCK:
        quantity = 1
    normalized["stock_quantity"] = quantity
    return normalized


def _coerce_quantity(value: Any) -> Union[int, float]:
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, str):
        text = value.strip()
        try:
            number: Union[int, float] = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    elif isinstance(value, (int, float)):
        number = value
    else:
        return 0

    if isinstance(number, float):
        if not math.isfinite(number):
            return 0
        if number.is_integer():
            number = int(number)
    return number if number > 0 else 0
