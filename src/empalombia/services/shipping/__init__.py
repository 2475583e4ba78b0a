"""Shipping zone helpers."""

from .zones import (
    ShippingZoneClassifier,
    ShippingZoneResult,
    ZONE_BORDES,
    ZONE_CENTRO,
    get_shipping_classifier,
    normalize_text,
)

__all__ = [
    "ShippingZoneClassifier",
    "ShippingZoneResult",
    "ZONE_BORDES",
    "ZONE_CENTRO",
    "get_shipping_classifier",
    "normalize_text",
]
