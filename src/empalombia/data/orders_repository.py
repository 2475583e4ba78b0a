"""Data access helpers for reading orders from the orders table."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..db.supabase import get_supabase_client
from ..models.domain import Order, ShippingAddress

ORDERS_TABLE = "orders"

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_total(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse order total from value '{value}'") from exc


def _address_from_row(value: Any) -> Optional[ShippingAddress]:
    if not isinstance(value, dict):
        return None
    street = _text(value.get("street"))
    if not street:
        return None
    return ShippingAddress(
        street=street,
        city=_text(value.get("city")) or "",
        state=_text(value.get("state")) or "",
        zip=_text(value.get("zip")) or "",
        number=_text(value.get("number")),
        floor=_text(value.get("floor")),
        apartment=_text(value.get("apartment")),
    )


def order_from_row(row: dict) -> Order:
    """Build an Order from a table row; accepts camelCase and snake_case columns."""
    order_id = _text(row.get("id") or row.get("order_id"))
    if not order_id:
        raise ValueError("order row missing 'id'")
    return Order(
        id=order_id,
        customer_name=_text(row.get("customerName") or row.get("customer_name")) or "",
        delivery_method=_text(row.get("deliveryMethod") or row.get("delivery_method")) or "delivery",
        delivery_status=_text(row.get("deliveryStatus") or row.get("delivery_status")),
        delivery_date=_text(row.get("deliveryDate") or row.get("delivery_date")),
        shipping_address=_address_from_row(row.get("shippingAddress") or row.get("shipping_address")),
        total=_coerce_total(row.get("total")),
        raw=row,
    )


def list_orders(delivery_date: str | None = None) -> list[Order]:
    """Orders newest first, optionally restricted to one delivery date (YYYY-MM-DD)."""
    supabase = get_supabase_client()
    if not supabase:
        raise ConnectionError("Orders database is not configured. Set EMP_SUPABASE_URL and EMP_SUPABASE_KEY.")

    query = supabase.table(ORDERS_TABLE).select("*")
    if delivery_date:
        query = query.eq("deliveryDate", delivery_date)
    response = query.order("createdAt", desc=True).execute()

    orders: list[Order] = []
    for row in response.data or []:
        try:
            orders.append(order_from_row(row))
        except ValueError as e:
            logger.warning(f"Skipping invalid order row: {e}")
    return orders
