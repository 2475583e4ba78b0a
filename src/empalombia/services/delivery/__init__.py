"""Delivery map services."""

from .map import DeliveryMap, MapMarker, build_delivery_map, default_center

__all__ = ["DeliveryMap", "MapMarker", "build_delivery_map", "default_center"]
