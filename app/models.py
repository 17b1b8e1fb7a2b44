"""
Speedy Van -- Pricing data model.

Enumerations, transient value objects and the static rate tables the
calculator reads. Nothing here is persisted; requests and results are
built per calculation and discarded once the caller has consumed them.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import List, Optional, Tuple


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
class VehicleType(str, Enum):
    PICKUP = "pickup"
    VAN = "van"
    TRUCK = "truck"


class ItemCategory(str, Enum):
    FURNITURE = "furniture"
    APPLIANCES = "appliances"
    BOXES = "boxes"
    FRAGILE = "fragile"
    OTHER = "other"


class Urgency(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    SAME_DAY = "same-day"


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Dimensions:
    """Item dimensions in centimetres."""

    length: float
    width: float
    height: float

    @property
    def volume_m3(self) -> float:
        return (self.length * self.width * self.height) / 1_000_000


@dataclass(frozen=True)
class PricingItem:
    category: ItemCategory
    quantity: int
    weight: Optional[float] = None  # kg, for the whole line
    dimensions: Optional[Dimensions] = None

    def __post_init__(self):
        object.__setattr__(self, "category", ItemCategory(self.category))

    @property
    def volume_m3(self) -> float:
        """Volume of a single unit, or 0 when no dimensions were given."""
        if self.dimensions is None:
            return 0.0
        return self.dimensions.volume_m3


@dataclass(frozen=True)
class PricingRequest:
    pickup_location: Location
    delivery_location: Location
    items: Tuple[PricingItem, ...]
    scheduled_at: datetime
    vehicle_type: Optional[VehicleType] = None
    urgency: Urgency = Urgency.STANDARD

    def __post_init__(self):
        # Accept any sequence but store a tuple so the request stays hashable
        object.__setattr__(self, "items", tuple(self.items))
        # Wire strings ("express", "truck") become enum members
        if self.vehicle_type is not None:
            object.__setattr__(self, "vehicle_type", VehicleType(self.vehicle_type))
        object.__setattr__(self, "urgency", Urgency(self.urgency or Urgency.STANDARD))


# ---------------------------------------------------------------------------
# Rate tables
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VehicleCapacity:
    max_weight: float  # kg
    max_volume: float  # m3
    max_items: int
    base_price: float
    price_per_km: float
    price_per_minute: float

    def fits(self, weight: float, volume: float, count: int) -> bool:
        return (
            weight <= self.max_weight
            and volume <= self.max_volume
            and count <= self.max_items
        )


VEHICLE_CAPACITIES = MappingProxyType({
    VehicleType.PICKUP: VehicleCapacity(
        max_weight=500,
        max_volume=3,
        max_items=20,
        base_price=25.0,
        price_per_km=2.0,
        price_per_minute=0.5,
    ),
    VehicleType.VAN: VehicleCapacity(
        max_weight=1500,
        max_volume=12,
        max_items=60,
        base_price=45.0,
        price_per_km=2.5,
        price_per_minute=0.75,
    ),
    VehicleType.TRUCK: VehicleCapacity(
        max_weight=5000,
        max_volume=40,
        max_items=200,
        base_price=90.0,
        price_per_km=3.5,
        price_per_minute=1.0,
    ),
})

# Smallest first; the search returns the first vehicle that fits
VEHICLE_SEARCH_ORDER = (VehicleType.PICKUP, VehicleType.VAN, VehicleType.TRUCK)

ITEM_CATEGORY_MULTIPLIERS = MappingProxyType({
    ItemCategory.FURNITURE: 1.5,
    ItemCategory.APPLIANCES: 1.8,
    ItemCategory.BOXES: 1.0,
    ItemCategory.FRAGILE: 2.0,
    ItemCategory.OTHER: 1.2,
})

URGENCY_MULTIPLIERS = MappingProxyType({
    Urgency.STANDARD: 1.0,
    Urgency.EXPRESS: 1.5,
    Urgency.SAME_DAY: 2.0,
})

BASE_ITEM_PRICE = 5.0
PRICE_PER_KG = 0.5
PRICE_PER_CBM = 10.0


# ---------------------------------------------------------------------------
# Result side
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DistanceMatrix:
    distance: float  # km
    duration: float  # minutes


@dataclass(frozen=True)
class PricingBreakdown:
    component: str
    description: str
    amount: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class PricingResult:
    base_price: float
    distance_price: float
    items_price: float
    time_price: float
    urgency_price: float
    total_price: float
    estimated_duration: float
    recommended_vehicle: VehicleType
    breakdown: List[PricingBreakdown] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-ready dict using the camelCase keys the portals expect."""
        return {
            "basePrice": self.base_price,
            "distancePrice": self.distance_price,
            "itemsPrice": self.items_price,
            "timePrice": self.time_price,
            "urgencyPrice": self.urgency_price,
            "totalPrice": self.total_price,
            "estimatedDuration": self.estimated_duration,
            "recommendedVehicle": self.recommended_vehicle.value,
            "breakdown": [
                {k: v for k, v in asdict(line).items() if v is not None}
                for line in self.breakdown
            ],
        }


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
