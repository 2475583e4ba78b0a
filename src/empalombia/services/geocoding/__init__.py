"""Address geocoding services."""

from .backends import GeocodeProxyBackend, GeocodingBackend, GoogleGeocodingBackend, get_default_backend
from .batch import format_address_for_geocoding, geocode_orders
from .cache import GeocodeCache
from .errors import GeocodingError, NoResultError, ProviderUnavailableError
from .resolver import AddressResolver, get_address_resolver

__all__ = [
    "AddressResolver",
    "GeocodeCache",
    "GeocodeProxyBackend",
    "GeocodingBackend",
    "GeocodingError",
    "GoogleGeocodingBackend",
    "NoResultError",
    "ProviderUnavailableError",
    "format_address_for_geocoding",
    "geocode_orders",
    "get_address_resolver",
    "get_default_backend",
]
