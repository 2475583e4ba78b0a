"""Pydantic request/response models for geocoding and shipping endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import Order, ShippingAddress


class CoordinatesModel(BaseModel):
    lat: float
    lng: float


class AddressComponentModel(BaseModel):
    longName: str
    shortName: str
    types: list[str]


class GeocodeSuccessResponse(BaseModel):
    success: Literal[True] = True
    coordinates: CoordinatesModel
    addressComponents: list[AddressComponentModel]


class ShippingZoneResponse(BaseModel):
    zone: Optional[Literal["centro", "bordes"]]
    cost: int
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None


class ShippingAddressModel(BaseModel):
    street: str
    number: Optional[str] = None
    city: str = ""
    state: str = ""
    zip: str = ""
    floor: Optional[str] = None
    apartment: Optional[str] = None


class OrderModel(BaseModel):
    id: str
    customerName: str = ""
    deliveryMethod: Literal["pickup", "delivery"] = "delivery"
    deliveryStatus: Optional[str] = None
    deliveryDate: Optional[str] = None
    shippingAddress: Optional[ShippingAddressModel] = None
    total: float = Field(default=0.0, ge=0.0)

    def to_domain(self) -> Order:
        address = None
        if self.shippingAddress is not None:
            address = ShippingAddress(**self.shippingAddress.model_dump())
        return Order(
            id=self.id,
            customer_name=self.customerName,
            delivery_method=self.deliveryMethod,
            delivery_status=self.deliveryStatus,
            delivery_date=self.deliveryDate,
            shipping_address=address,
            total=self.total,
        )


class ShippingQuoteRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Free-text delivery address.")
    deliveryMethod: Literal["pickup", "delivery"] = "delivery"
    subtotal: float = Field(default=0.0, ge=0.0, description="Order total before shipping.")


class ShippingQuoteResponse(BaseModel):
    zone: Optional[Literal["centro", "bordes"]] = None
    shippingCost: int
    total: float
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None


class MapMarkerModel(BaseModel):
    orderId: str
    customerName: str
    position: CoordinatesModel
    status: Optional[str] = None
    label: str
    color: str


class MapBoundsModel(BaseModel):
    southWest: CoordinatesModel
    northEast: CoordinatesModel


class DeliveryMapResponse(BaseModel):
    date: Optional[str] = None
    markers: list[MapMarkerModel]
    center: CoordinatesModel
    bounds: Optional[MapBoundsModel] = None
    skippedOrderIds: list[str]
