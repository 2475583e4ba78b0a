"""API routes for geocoding orders and the delivery map."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from ...data.orders_repository import list_orders
from ...schemas.geocoding import CoordinatesModel, DeliveryMapResponse, OrderModel
from ...services.delivery.map import build_delivery_map
from ...services.geocoding.batch import geocode_orders
from ...services.geocoding.resolver import get_address_resolver

router = APIRouter(prefix="/orders", tags=["orders"])

logger = logging.getLogger(__name__)


@router.post("/geocode", response_model=dict[str, CoordinatesModel], status_code=status.HTTP_200_OK)
def geocode_order_batch(orders: list[OrderModel]) -> dict[str, CoordinatesModel]:
    """Resolve order shipping addresses; orders that cannot be placed are left out."""
    positions = geocode_orders([order.to_domain() for order in orders], get_address_resolver())
    return {order_id: CoordinatesModel(lat=coords.lat, lng=coords.lng) for order_id, coords in positions.items()}


@router.get("/map", response_model=DeliveryMapResponse, status_code=status.HTTP_200_OK)
def delivery_map(
    delivery_date: date | None = Query(default=None, alias="date", description="Delivery date (YYYY-MM-DD)."),
) -> dict:
    """Markers for the delivery orders of a date, defaulting to today."""
    day = (delivery_date or date.today()).isoformat()
    try:
        orders = list_orders(delivery_date=day)
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    result = build_delivery_map(orders, get_address_resolver())
    logger.info(f"Delivery map for {day}: {len(result.markers)} markers")

    bounds = None
    if result.bounds is not None:
        south_west, north_east = result.bounds
        bounds = {
            "southWest": {"lat": south_west.lat, "lng": south_west.lng},
            "northEast": {"lat": north_east.lat, "lng": north_east.lng},
        }
    return {
        "date": day,
        "markers": [
            {
                "orderId": marker.order_id,
                "customerName": marker.customer_name,
                "position": {"lat": marker.position.lat, "lng": marker.position.lng},
                "status": marker.status,
                "label": marker.label,
                "color": marker.color,
            }
            for marker in result.markers
        ],
        "center": {"lat": result.center.lat, "lng": result.center.lng},
        "bounds": bounds,
        "skippedOrderIds": result.skipped_order_ids,
    }
