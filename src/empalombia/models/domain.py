"""Domain models for geocoded addresses and delivery orders."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class AddressComponent:
    """One tagged fragment of a resolved address, as returned by the provider."""

    long_name: str
    short_name: str
    types: frozenset[str] = frozenset()

    @classmethod
    def from_payload(cls, payload: dict) -> "AddressComponent":
        # Google uses snake_case, the proxy route answers in camelCase.
        long_name = payload.get("long_name", payload.get("longName", ""))
        short_name = payload.get("short_name", payload.get("shortName", long_name))
        types = payload.get("types") or ()
        if isinstance(types, str):
            types = (types,)
        return cls(
            long_name=str(long_name or ""),
            short_name=str(short_name or ""),
            types=frozenset(str(item) for item in types),
        )

    def to_payload(self) -> dict:
        return {
            "longName": self.long_name,
            "shortName": self.short_name,
            "types": sorted(self.types),
        }


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    """Coordinates plus structured components for a single resolved address."""

    lat: float
    lng: float
    address_components: tuple[AddressComponent, ...] = ()

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)


@dataclass(slots=True)
class ShippingAddress:
    street: str
    city: str = ""
    state: str = ""
    zip: str = ""
    number: Optional[str] = None
    floor: Optional[str] = None
    apartment: Optional[str] = None


@dataclass(slots=True)
class Order:
    """Read-only view of an order row, limited to what delivery tooling needs."""

    id: str
    customer_name: str
    delivery_method: str = "delivery"
    delivery_status: Optional[str] = None
    delivery_date: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    total: float = 0.0
    raw: dict = field(default_factory=dict)
