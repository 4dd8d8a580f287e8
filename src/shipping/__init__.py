"""
Shipping rate resolution: zone selection, method pricing and the pipeline combining them.
"""

from .costs import cart_total, compute_options, parse_amount
from .pipeline import ShippingCalculator
from .zones import CATCH_ALL_ZONE_NAME, NoZonesAvailable, resolve_zone

__all__ = [
    "CATCH_ALL_ZONE_NAME",
    "NoZonesAvailable",
    "ShippingCalculator",
    "cart_total",
    "compute_options",
    "parse_amount",
    "resolve_zone",
]
