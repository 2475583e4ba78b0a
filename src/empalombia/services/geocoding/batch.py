"""Sequential geocoding of order shipping addresses."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from ...config import settings
from ...models.domain import Coordinates, Order
from .resolver import AddressResolver

DEFAULT_COUNTRY = "Argentina"

logger = logging.getLogger(__name__)


def format_address_for_geocoding(order: Order) -> str | None:
    """Join the shipping address of ``order`` into one line, or None without an address."""
    addr = order.shipping_address
    if addr is None:
        return None
    parts = [addr.street, addr.number, addr.city, addr.state, addr.zip, DEFAULT_COUNTRY]
    return ", ".join(part for part in parts if part)


def geocode_orders(
    orders: Iterable[Order],
    resolver: AddressResolver,
    delay: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> dict[str, Coordinates]:
    """Resolve orders one at a time, in input order, pausing ``delay`` seconds between calls.

    Orders without an address and addresses that fail to resolve are left
    out of the result; the batch itself never fails.
    """
    pause = settings.geocode_batch_delay_seconds if delay is None else delay
    results: dict[str, Coordinates] = {}
    attempted = 0
    for order in orders:
        address = format_address_for_geocoding(order)
        if not address:
            continue
        if attempted and pause > 0:
            sleep(pause)
        attempted += 1
        result = resolver.resolve(address)
        if result is not None:
            results[order.id] = result.coordinates

    logger.info(f"Geocoded {len(results)} of {attempted} order addresses")
    return results
