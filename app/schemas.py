from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models import (
    Dimensions,
    ItemCategory,
    Location,
    PricingItem,
    PricingRequest,
    Urgency,
    VehicleType,
)


# ----------------------
# Quote request
# ----------------------


class LocationIn(BaseModel):
    latitude: float
    longitude: float


class DimensionsIn(BaseModel):
    length: float = Field(..., description="Centimetres")
    width: float = Field(..., description="Centimetres")
    height: float = Field(..., description="Centimetres")


class PricingItemIn(BaseModel):
    category: ItemCategory
    quantity: int
    weight: Optional[float] = Field(None, description="Kilograms for the whole line")
    dimensions: Optional[DimensionsIn] = None


class PricingRequestIn(BaseModel):
    pickupLocation: LocationIn
    deliveryLocation: LocationIn
    items: List[PricingItemIn]
    scheduledAt: datetime
    vehicleType: Optional[VehicleType] = None
    urgency: Urgency = Urgency.STANDARD

    def to_domain(self) -> PricingRequest:
        return PricingRequest(
            pickup_location=Location(self.pickupLocation.latitude, self.pickupLocation.longitude),
            delivery_location=Location(self.deliveryLocation.latitude, self.deliveryLocation.longitude),
            items=[
                PricingItem(
                    category=item.category,
                    quantity=item.quantity,
                    weight=item.weight,
                    dimensions=(
                        Dimensions(item.dimensions.length, item.dimensions.width, item.dimensions.height)
                        if item.dimensions
                        else None
                    ),
                )
                for item in self.items
            ],
            scheduled_at=self.scheduledAt,
            vehicle_type=self.vehicleType,
            urgency=self.urgency,
        )


# ----------------------
# Quote response
# ----------------------


class PricingBreakdownOut(BaseModel):
    component: str
    description: str
    amount: float
    unit: Optional[str] = None


class PricingResultOut(BaseModel):
    basePrice: float
    distancePrice: float
    itemsPrice: float
    timePrice: float
    urgencyPrice: float
    totalPrice: float
    estimatedDuration: float
    recommendedVehicle: VehicleType
    breakdown: List[PricingBreakdownOut]


class ValidationOut(BaseModel):
    isValid: bool
    errors: List[str]


# ----------------------
# Rate tables
# ----------------------


class VehicleCapacityOut(BaseModel):
    maxWeight: float
    maxVolume: float
    maxItems: int
    basePrice: float
    pricePerKm: float
    pricePerMinute: float


class RatesOut(BaseModel):
    vehicleCapacities: dict[str, VehicleCapacityOut]
    vehicleSearchOrder: List[VehicleType]
    itemCategoryMultipliers: dict[str, float]
    urgencyMultipliers: dict[str, float]
