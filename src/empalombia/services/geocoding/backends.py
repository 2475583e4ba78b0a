"""HTTP backends that turn an address into a GeocodeResult."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from ...config import settings
from ...models.domain import AddressComponent, GeocodeResult
from .errors import NoResultError, ProviderUnavailableError

logger = logging.getLogger(__name__)

# Google statuses that mean "fix configuration or retry later", not "no such address".
UNAVAILABLE_STATUSES = frozenset({"REQUEST_DENIED", "OVER_QUERY_LIMIT", "OVER_DAILY_LIMIT", "UNKNOWN_ERROR"})


class GeocodingBackend(ABC):
    """Contract for a single, uncached geocode lookup."""

    @abstractmethod
    def geocode(self, address: str) -> GeocodeResult:
        """Resolve ``address`` or raise a GeocodingError subclass."""
        raise NotImplementedError


class _HTTPBackend(GeocodingBackend):
    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        )

    def _get_json(self, url: str, params: dict) -> tuple[int, dict]:
        with self._get_client() as client:
            try:
                response = client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise ProviderUnavailableError(f"Geocoding request to {url} failed: {exc}") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderUnavailableError(
                f"Geocoding response from {url} is not JSON (HTTP {response.status_code})"
            ) from exc
        if not isinstance(data, dict):
            raise ProviderUnavailableError(f"Unexpected geocoding payload type: {type(data).__name__}")
        return response.status_code, data


def parse_google_payload(data: dict) -> GeocodeResult:
    """Build a GeocodeResult from a Google Geocoding API body (first result only)."""

    status = data.get("status")
    results = data.get("results") or []
    if status != "OK" or not results:
        message = data.get("error_message") or "Geocoding failed"
        if status in UNAVAILABLE_STATUSES:
            raise ProviderUnavailableError(message, status=status)
        raise NoResultError(message, status=status or "ZERO_RESULTS")

    first = results[0]
    try:
        location = first["geometry"]["location"]
        lat, lng = float(location["lat"]), float(location["lng"])
    except (KeyError, TypeError, ValueError) as exc:
        raise NoResultError("Geocoding result has no usable location", status=status) from exc

    components = tuple(
        AddressComponent.from_payload(item)
        for item in first.get("address_components") or ()
        if isinstance(item, dict)
    )
    return GeocodeResult(lat=lat, lng=lng, address_components=components)


class GoogleGeocodingBackend(_HTTPBackend):
    """Calls the Google Geocoding API directly with the server-side key."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        region: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = base_url or settings.google_geocode_url
        self.region = region if region is not None else settings.geocode_region

    def geocode(self, address: str) -> GeocodeResult:
        if not self.api_key:
            raise ProviderUnavailableError("Google Maps API key not configured", status="NOT_CONFIGURED")
        params = {"address": address, "key": self.api_key}
        if self.region:
            params["region"] = self.region
        logger.debug(f"Google geocode request for '{address}'")
        _, data = self._get_json(self.base_url, params)
        return parse_google_payload(data)


class GeocodeProxyBackend(_HTTPBackend):
    """Calls the /api/geocode route of a deployment of this service."""

    def __init__(
        self,
        base_url: str | None = None,
        api_prefix: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        base = base_url or settings.geocode_proxy_url
        if not base:
            raise ValueError("Geocode proxy URL is not configured.")
        self.url = f"{base.rstrip('/')}{api_prefix if api_prefix is not None else settings.api_prefix}/geocode"

    def geocode(self, address: str) -> GeocodeResult:
        status_code, data = self._get_json(self.url, {"address": address})
        coordinates = data.get("coordinates")
        if status_code == 200 and data.get("success") and isinstance(coordinates, dict):
            try:
                lat, lng = float(coordinates["lat"]), float(coordinates["lng"])
            except (KeyError, TypeError, ValueError) as exc:
                raise NoResultError("Proxy returned malformed coordinates") from exc
            components = tuple(
                AddressComponent.from_payload(item)
                for item in data.get("addressComponents") or ()
                if isinstance(item, dict)
            )
            return GeocodeResult(lat=lat, lng=lng, address_components=components)

        error = data.get("error")
        message = data.get("message") or error or f"HTTP {status_code}"
        if data.get("success") is False and error not in UNAVAILABLE_STATUSES:
            # provider answered, the proxy forwards its status
            raise NoResultError(message, status=error)
        raise ProviderUnavailableError(message, status=error)


def get_default_backend() -> GeocodingBackend:
    """Proxy when a proxy URL is configured, Google otherwise."""
    if settings.geocode_proxy_url:
        return GeocodeProxyBackend()
    return GoogleGeocodingBackend()
