"""Read model for the admin/driver delivery map."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from shapely.geometry import MultiPoint

from ...config import settings
from ...models.domain import Coordinates, Order
from ..geocoding.batch import geocode_orders
from ..geocoding.resolver import AddressResolver

STATUS_LABELS = {
    "assigned": "Asignado",
    "picked_up": "Recogido",
    "in_transit": "En Tránsito",
    "delivered": "Entregado",
    "failed": "Fallido",
}
STATUS_COLORS = {
    "assigned": "blue",
    "picked_up": "purple",
    "in_transit": "yellow",
    "delivered": "green",
    "failed": "orange",
}

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapMarker:
    order_id: str
    customer_name: str
    position: Coordinates
    status: Optional[str]
    label: str
    color: str


@dataclass(slots=True)
class DeliveryMap:
    markers: list[MapMarker]
    center: Coordinates
    bounds: Optional[tuple[Coordinates, Coordinates]]
    skipped_order_ids: list[str]


def status_label(status: str | None) -> str:
    return STATUS_LABELS.get(status or "", "Pendiente")


def status_color(status: str | None) -> str:
    return STATUS_COLORS.get(status or "", "red")


def default_center() -> Coordinates:
    lat, lng = settings.default_map_center
    return Coordinates(lat=lat, lng=lng)


def marker_bounds(markers: Sequence[MapMarker]) -> tuple[Coordinates, Coordinates] | None:
    """South-west and north-east corners enclosing every marker."""
    if not markers:
        return None
    min_lng, min_lat, max_lng, max_lat = MultiPoint(
        [(marker.position.lng, marker.position.lat) for marker in markers]
    ).bounds
    return Coordinates(lat=min_lat, lng=min_lng), Coordinates(lat=max_lat, lng=max_lng)


def build_delivery_map(
    orders: Sequence[Order],
    resolver: AddressResolver,
    delay: float | None = None,
    sleep: Callable[[float], None] | None = None,
) -> DeliveryMap:
    """Geocode the delivery orders and lay them out as map markers."""
    delivery_orders = [order for order in orders if order.delivery_method == "delivery"]
    positions = geocode_orders(delivery_orders, resolver, delay=delay, sleep=sleep or time.sleep)

    markers = [
        MapMarker(
            order_id=order.id,
            customer_name=order.customer_name,
            position=positions[order.id],
            status=order.delivery_status,
            label=status_label(order.delivery_status),
            color=status_color(order.delivery_status),
        )
        for order in delivery_orders
        if order.id in positions
    ]
    skipped = [order.id for order in delivery_orders if order.id not in positions]
    if skipped:
        logger.info(f"{len(skipped)} delivery orders could not be placed on the map")

    return DeliveryMap(
        markers=markers,
        center=markers[0].position if markers else default_center(),
        bounds=marker_bounds(markers),
        skipped_order_ids=skipped,
    )
