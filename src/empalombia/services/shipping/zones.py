"""Two-tier delivery pricing based on the neighborhood of a resolved address."""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Literal, Optional, Sequence

from ...config import settings
from ...models.domain import AddressComponent
from ..geocoding.resolver import AddressResolver, get_address_resolver

Zone = Literal["centro", "bordes"]

ZONE_CENTRO: Zone = "centro"
ZONE_BORDES: Zone = "bordes"
NEIGHBORHOOD_TYPES = frozenset({"neighborhood", "sublocality", "sublocality_level_1"})

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShippingZoneResult:
    zone: Optional[Zone]
    cost: int
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None

    def to_payload(self) -> dict:
        payload: dict = {"zone": self.zone, "cost": self.cost}
        for key in ("neighborhood", "city", "zip"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


def normalize_text(value: str) -> str:
    """Lowercase and strip diacritics so 'Núñez' and 'NUNEZ' compare equal."""
    decomposed = unicodedata.normalize("NFD", value.lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def first_component(components: Sequence[AddressComponent], types: Iterable[str]) -> AddressComponent | None:
    """Return the first component (provider order) tagged with any of ``types``."""
    wanted = frozenset(types)
    for component in components:
        if component.types & wanted:
            return component
    return None


class ShippingZoneClassifier:
    """Map an address to the 'centro' or 'bordes' delivery tier."""

    def __init__(
        self,
        resolver: AddressResolver,
        bordes_neighborhoods: Iterable[str] | None = None,
        cost_centro: int | None = None,
        cost_bordes: int | None = None,
    ) -> None:
        self.resolver = resolver
        fragments = bordes_neighborhoods if bordes_neighborhoods is not None else settings.bordes_neighborhoods
        self.bordes_fragments = tuple(normalize_text(item) for item in fragments if item)
        self.costs: dict[str, int] = {
            ZONE_CENTRO: cost_centro if cost_centro is not None else settings.shipping_cost_centro,
            ZONE_BORDES: cost_bordes if cost_bordes is not None else settings.shipping_cost_bordes,
        }
        if self.costs[ZONE_CENTRO] == self.costs[ZONE_BORDES]:
            raise ValueError(
                f"centro and bordes shipping costs must differ (both {self.costs[ZONE_CENTRO]})"
            )

    def zone_for_neighborhood(self, neighborhood: str) -> Zone:
        normalized = normalize_text(neighborhood)
        if any(fragment in normalized for fragment in self.bordes_fragments):
            return ZONE_BORDES
        return ZONE_CENTRO

    def classify_components(self, components: Sequence[AddressComponent]) -> ShippingZoneResult:
        neighborhood = first_component(components, NEIGHBORHOOD_TYPES)
        city = first_component(components, ("locality",))
        postal = first_component(components, ("postal_code",))
        city_name = city.long_name if city else None
        zip_code = postal.long_name if postal else None

        if neighborhood is None:
            # no barrio in the answer: charge the default tier
            return ShippingZoneResult(
                zone=ZONE_CENTRO, cost=self.costs[ZONE_CENTRO], city=city_name, zip=zip_code
            )

        zone = self.zone_for_neighborhood(neighborhood.long_name)
        return ShippingZoneResult(
            zone=zone,
            cost=self.costs[zone],
            neighborhood=neighborhood.long_name,
            city=city_name,
            zip=zip_code,
        )

    def classify(self, address: str) -> ShippingZoneResult | None:
        """Classify ``address``; None means the address could not be resolved."""
        resolved = self.resolver.resolve(address)
        if resolved is None:
            return None
        result = self.classify_components(resolved.address_components)
        logger.debug(f"Shipping zone for '{address}': {result.zone} ({result.cost})")
        return result

    def shipping_cost(self, zone: str | None, delivery_method: str) -> int:
        """Cost to add to an order: nothing for pickup or an unknown zone."""
        if delivery_method != "delivery":
            return 0
        return self.costs.get(zone or "", 0)

    def apply_shipping(self, total: float, delivery_method: str, zone: str | None) -> tuple[int, float]:
        """Return ``(shipping_cost, total_with_shipping)``."""
        cost = self.shipping_cost(zone, delivery_method)
        return cost, total + cost


@lru_cache()
def get_shipping_classifier() -> ShippingZoneClassifier:
    return ShippingZoneClassifier(resolver=get_address_resolver())
