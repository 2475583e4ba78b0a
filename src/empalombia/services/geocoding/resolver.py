"""Memoised address resolution on top of a geocoding backend."""

from __future__ import annotations

import logging
from functools import lru_cache

from ...config import settings
from ...models.domain import GeocodeResult
from .backends import GeocodingBackend, get_default_backend
from .cache import GeocodeCache
from .errors import GeocodingError

logger = logging.getLogger(__name__)


class AddressResolver:
    """Resolve free-text addresses, calling the backend at most once per address string."""

    def __init__(self, backend: GeocodingBackend, cache: GeocodeCache | None = None) -> None:
        self.backend = backend
        self.cache = cache if cache is not None else GeocodeCache()

    def lookup(self, address: str) -> GeocodeResult:
        """Resolve ``address``, raising ProviderUnavailableError or NoResultError on failure.

        Failures are never cached, so the next call for the same string
        reaches the backend again.
        """
        cached = self.cache.get(address)
        if cached is not None:
            logger.debug(f"Using cached coordinates for: {address}")
            return cached

        with self.cache.address_lock(address):
            # another thread may have resolved it while we waited
            cached = self.cache.get(address)
            if cached is not None:
                return cached
            result = self.backend.geocode(address)
            self.cache.set(address, result)

        logger.info(f"Geocoded '{address}' -> ({result.lat}, {result.lng})")
        return result

    def resolve(self, address: str) -> GeocodeResult | None:
        """Like ``lookup`` but reports every failure as None."""
        try:
            return self.lookup(address)
        except GeocodingError as exc:
            logger.warning(
                f"Geocoding failed for '{address}' ({type(exc).__name__}, status={exc.status}): {exc}"
            )
            return None


@lru_cache()
def get_address_resolver() -> AddressResolver:
    """Process-wide resolver wired from settings."""
    return AddressResolver(
        backend=get_default_backend(),
        cache=GeocodeCache(max_entries=settings.geocode_cache_max_entries),
    )
