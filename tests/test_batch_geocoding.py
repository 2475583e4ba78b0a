from empalombia.models.domain import GeocodeResult, Order, ShippingAddress
from empalombia.services.delivery.map import build_delivery_map, status_color, status_label
from empalombia.services.geocoding.backends import GeocodingBackend
from empalombia.services.geocoding.batch import format_address_for_geocoding, geocode_orders
from empalombia.services.geocoding.errors import NoResultError
from empalombia.services.geocoding.resolver import AddressResolver


class RecordingBackend(GeocodingBackend):
    """Answers from a table and records calls interleaved with sleeps."""

    def __init__(self, coords: dict, events: list):
        self.coords = coords
        self.events = events

    def geocode(self, address):
        self.events.append(("geocode", address))
        if address not in self.coords:
            raise NoResultError("no results", status="ZERO_RESULTS")
        lat, lng = self.coords[address]
        return GeocodeResult(lat=lat, lng=lng)


def _order(oid: str, street: str | None, city: str = "CABA", status: str | None = None, method: str = "delivery") -> Order:
    address = ShippingAddress(street=street, city=city, zip="1428") if street else None
    return Order(
        id=oid,
        customer_name=f"Cliente {oid}",
        delivery_method=method,
        delivery_status=status,
        shipping_address=address,
    )


def test_format_address_skips_empty_parts():
    order = Order(
        id="O1",
        customer_name="Ana",
        shipping_address=ShippingAddress(street="Cabildo", number="2000", city="CABA", state="", zip="1428"),
    )

    assert format_address_for_geocoding(order) == "Cabildo, 2000, CABA, 1428, Argentina"
    assert format_address_for_geocoding(_order("O2", None)) is None


def test_geocode_orders_is_sequential_with_delay_between_calls():
    events: list = []
    backend = RecordingBackend(
        {
            "Cabildo 1, CABA, 1428, Argentina": (-34.56, -58.45),
            "Florida 1, CABA, 1428, Argentina": (-34.60, -58.37),
        },
        events,
    )
    orders = [
        _order("O1", "Cabildo 1"),
        _order("O2", None),
        _order("O3", "Calle Falsa 123"),
        _order("O4", "Florida 1"),
    ]

    result = geocode_orders(orders, AddressResolver(backend), delay=0.2, sleep=lambda s: events.append(("sleep", s)))

    assert events == [
        ("geocode", "Cabildo 1, CABA, 1428, Argentina"),
        ("sleep", 0.2),
        ("geocode", "Calle Falsa 123, CABA, 1428, Argentina"),
        ("sleep", 0.2),
        ("geocode", "Florida 1, CABA, 1428, Argentina"),
    ]
    assert list(result) == ["O1", "O4"]
    assert (result["O4"].lat, result["O4"].lng) == (-34.60, -58.37)


def test_geocode_orders_reuses_cache_for_repeated_addresses():
    events: list = []
    backend = RecordingBackend({"Cabildo 1, CABA, 1428, Argentina": (-34.56, -58.45)}, events)
    orders = [_order("O1", "Cabildo 1"), _order("O2", "Cabildo 1")]

    result = geocode_orders(orders, AddressResolver(backend), delay=0.0)

    assert set(result) == {"O1", "O2"}
    assert events == [("geocode", "Cabildo 1, CABA, 1428, Argentina")]


def test_delivery_map_centers_on_first_marker():
    events: list = []
    backend = RecordingBackend(
        {
            "Cabildo 1, CABA, 1428, Argentina": (-34.56, -58.45),
            "Florida 1, CABA, 1428, Argentina": (-34.60, -58.37),
        },
        events,
    )
    orders = [
        _order("O1", "Cabildo 1", status="in_transit"),
        _order("O2", "Florida 1"),
        _order("O3", "Cabildo 1", method="pickup"),
        _order("O4", "Calle Falsa 123", status="assigned"),
    ]

    result = build_delivery_map(orders, AddressResolver(backend), delay=0.0)

    assert [marker.order_id for marker in result.markers] == ["O1", "O2"]
    assert (result.center.lat, result.center.lng) == (-34.56, -58.45)
    assert result.markers[0].label == "En Tránsito"
    assert result.markers[0].color == "yellow"
    assert result.markers[1].label == "Pendiente"
    assert result.markers[1].color == "red"
    assert result.skipped_order_ids == ["O4"]
    south_west, north_east = result.bounds
    assert (south_west.lat, south_west.lng) == (-34.60, -58.45)
    assert (north_east.lat, north_east.lng) == (-34.56, -58.37)


def test_status_colors_distinguish_every_status():
    assert status_label("failed") == "Fallido"
    assert status_color("failed") == "orange"
    assert status_color(None) == "red"
    statuses = ["assigned", "picked_up", "in_transit", "delivered", "failed", None]
    assert len({status_color(status) for status in statuses}) == len(statuses)


def test_delivery_map_without_markers_uses_default_center():
    result = build_delivery_map([_order("O1", None)], AddressResolver(RecordingBackend({}, [])), delay=0.0)

    assert result.markers == []
    assert result.bounds is None
    assert (result.center.lat, result.center.lng) == (-34.6037, -58.3816)
