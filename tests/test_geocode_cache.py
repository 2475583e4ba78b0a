import threading
import time

import httpx
import pytest

from empalombia.models.domain import GeocodeResult
from empalombia.services.geocoding.backends import GeocodeProxyBackend, GeocodingBackend
from empalombia.services.geocoding.cache import GeocodeCache
from empalombia.services.geocoding.errors import NoResultError, ProviderUnavailableError
from empalombia.services.geocoding.resolver import AddressResolver


def test_unbounded_cache_keeps_every_entry():
    cache = GeocodeCache()
    for index in range(500):
        cache.set(f"Calle {index}", GeocodeResult(lat=index, lng=index))

    assert len(cache) == 500
    assert cache.get("Calle 0").lat == 0


def test_bounded_cache_evicts_least_recently_used():
    cache = GeocodeCache(max_entries=2)
    cache.set("a", GeocodeResult(lat=1, lng=1))
    cache.set("b", GeocodeResult(lat=2, lng=2))
    cache.get("a")
    cache.set("c", GeocodeResult(lat=3, lng=3))

    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache


def test_first_result_is_never_replaced():
    cache = GeocodeCache()
    cache.set("a", GeocodeResult(lat=1, lng=1))
    cache.set("a", GeocodeResult(lat=2, lng=2))

    assert cache.get("a").lat == 1


def test_clear_empties_cache():
    cache = GeocodeCache()
    cache.set("a", GeocodeResult(lat=1, lng=1))
    cache.clear()

    assert len(cache) == 0
    assert cache.get("a") is None


def test_invalid_bound_rejected():
    with pytest.raises(ValueError):
        GeocodeCache(max_entries=0)


def test_concurrent_misses_hit_backend_once():
    class SlowBackend(GeocodingBackend):
        def __init__(self):
            self.calls = 0

        def geocode(self, address):
            self.calls += 1
            time.sleep(0.05)
            return GeocodeResult(lat=1.0, lng=2.0)

    backend = SlowBackend()
    resolver = AddressResolver(backend)
    results = []
    threads = [threading.Thread(target=lambda: results.append(resolver.resolve("Florida 100"))) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert backend.calls == 1
    assert resolver.cache.pending_addresses() == 0
    assert len(results) == 8
    assert all(result == GeocodeResult(lat=1.0, lng=2.0) for result in results)


def test_bounded_cache_does_not_keep_per_address_locks():
    class HalfFailingBackend(GeocodingBackend):
        def geocode(self, address):
            if address.startswith("bad"):
                raise NoResultError("no results", status="ZERO_RESULTS")
            return GeocodeResult(lat=1.0, lng=1.0)

    cache = GeocodeCache(max_entries=2)
    resolver = AddressResolver(HalfFailingBackend(), cache=cache)
    for index in range(1000):
        assert resolver.resolve(f"good {index}") is not None
        assert resolver.resolve(f"bad {index}") is None

    assert len(cache) == 2
    assert cache.pending_addresses() == 0


def test_address_lock_released_when_backend_raises():
    cache = GeocodeCache()

    with pytest.raises(RuntimeError):
        with cache.address_lock("Florida 100"):
            assert cache.pending_addresses() == 1
            raise RuntimeError("boom")

    assert cache.pending_addresses() == 0


def test_proxy_backend_reads_success_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["address"] = request.url.params["address"]
        return httpx.Response(
            200,
            json={
                "success": True,
                "coordinates": {"lat": -34.6, "lng": -58.4},
                "addressComponents": [
                    {"longName": "Palermo", "shortName": "Palermo", "types": ["neighborhood"]},
                ],
            },
        )

    backend = GeocodeProxyBackend(
        base_url="http://shop.local/", api_prefix="/api", transport=httpx.MockTransport(handler)
    )
    result = backend.geocode("Santa Fe 3000")

    assert seen == {"path": "/api/geocode", "address": "Santa Fe 3000"}
    assert (result.lat, result.lng) == (-34.6, -58.4)
    assert result.address_components[0].long_name == "Palermo"


@pytest.mark.parametrize(
    "status_code,body,error",
    [
        (400, {"success": False, "error": "ZERO_RESULTS", "message": "Geocoding failed"}, NoResultError),
        (400, {"success": False, "error": "REQUEST_DENIED", "message": "bad key"}, ProviderUnavailableError),
        (500, {"error": "Google Maps API key not configured"}, ProviderUnavailableError),
        (400, {"error": "Address parameter is required"}, ProviderUnavailableError),
    ],
)
def test_proxy_backend_failures(status_code, body, error):
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, json=body))
    backend = GeocodeProxyBackend(base_url="http://shop.local", api_prefix="/api", transport=transport)

    with pytest.raises(error):
        backend.geocode("Santa Fe 3000")


def test_proxy_backend_requires_url(monkeypatch):
    from empalombia.config import settings

    monkeypatch.setattr(settings, "geocode_proxy_url", None)
    with pytest.raises(ValueError):
        GeocodeProxyBackend()
