"""Server-side geocoding proxy that keeps the Google Maps key off the client."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from ...schemas.geocoding import GeocodeSuccessResponse
from ...services.geocoding.backends import GoogleGeocodingBackend
from ...services.geocoding.errors import GeocodingError

router = APIRouter(tags=["geocoding"])

logger = logging.getLogger(__name__)


@router.get(
    "/geocode",
    response_model=GeocodeSuccessResponse,
    responses={400: {"description": "Missing address or provider failure"}, 500: {"description": "Key not configured or transport error"}},
)
def geocode(address: str | None = Query(default=None, description="Free-text address to geocode.")) -> JSONResponse:
    """Geocode a single address with Google and return the first result."""
    if not address:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Address parameter is required"},
        )

    backend = GoogleGeocodingBackend()
    if not backend.api_key:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Google Maps API key not configured"},
        )

    try:
        result = backend.geocode(address)
    except GeocodingError as exc:
        if exc.status is None:
            # transport failure, never reached Google
            logger.error(f"Geocoding error: {exc}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": exc.status, "message": str(exc)},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "coordinates": {"lat": result.lat, "lng": result.lng},
            "addressComponents": [component.to_payload() for component in result.address_components],
        },
    )
