"""Exceptions raised by geocoding backends."""

from __future__ import annotations


class GeocodingError(Exception):
    """Base class for failures while resolving an address."""

    def __init__(self, message: str, *, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status


class ProviderUnavailableError(GeocodingError):
    """The provider could not be reached or is not configured."""


class NoResultError(GeocodingError):
    """The provider answered but did not return a usable result."""
