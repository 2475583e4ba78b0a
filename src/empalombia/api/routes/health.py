"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Report which external collaborators are configured, without contacting them."""
    return {
        "geocoding": {
            "google_key_configured": bool(settings.google_maps_api_key),
            "proxy_url": settings.geocode_proxy_url,
        },
        "orders_database": {
            "configured": bool(settings.supabase_url and settings.supabase_key),
        },
    }
