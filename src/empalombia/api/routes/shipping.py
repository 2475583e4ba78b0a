"""API routes for delivery zone pricing."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.geocoding import ShippingQuoteRequest, ShippingQuoteResponse, ShippingZoneResponse
from ...services.shipping.zones import get_shipping_classifier

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.get(
    "/zone",
    response_model=ShippingZoneResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def shipping_zone(address: str = Query(..., min_length=1, description="Free-text delivery address.")) -> dict:
    """Classify an address into the 'centro' or 'bordes' delivery tier."""
    result = get_shipping_classifier().classify(address)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Could not resolve address '{address}'",
        )
    return result.to_payload()


@router.post(
    "/quote",
    response_model=ShippingQuoteResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def shipping_quote(payload: ShippingQuoteRequest) -> ShippingQuoteResponse:
    """Price an order: pickup is free, delivery adds the zone cost.

    An address that cannot be resolved yields no zone and no shipping cost,
    leaving the zone to be chosen by hand.
    """
    classifier = get_shipping_classifier()
    if payload.deliveryMethod == "pickup":
        return ShippingQuoteResponse(shippingCost=0, total=payload.subtotal)

    result = classifier.classify(payload.address)
    zone = result.zone if result else None
    cost, total = classifier.apply_shipping(payload.subtotal, payload.deliveryMethod, zone)
    return ShippingQuoteResponse(
        zone=zone,
        shippingCost=cost,
        total=total,
        neighborhood=result.neighborhood if result else None,
        city=result.city if result else None,
        zip=result.zip if result else None,
    )
