"""
Speedy Van -- Pricing calculator.

Turns a move request into a price made of five components: base fee,
distance charge, item handling, time charge and urgency surcharge.

``calculate_price`` does not validate its input; ``validate_request``
is a separate non-throwing check. ``quote`` composes the two and raises
``PricingValidationError`` for bad requests.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.geo import calculate_distance_matrix, validate_coordinates
from app.models import (
    BASE_ITEM_PRICE,
    ITEM_CATEGORY_MULTIPLIERS,
    PRICE_PER_CBM,
    PRICE_PER_KG,
    URGENCY_MULTIPLIERS,
    VEHICLE_CAPACITIES,
    VEHICLE_SEARCH_ORDER,
    PricingBreakdown,
    PricingItem,
    PricingRequest,
    PricingResult,
    Urgency,
    ValidationResult,
    VehicleCapacity,
    VehicleType,
)

logger = logging.getLogger("speedyvan.pricing")


class PricingError(Exception):
    """Base class for pricing failures."""


class PricingValidationError(PricingError):
    """Raised by ``quote`` when a request fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


# ---------------------------------------------------------------------------
# Component helpers
# ---------------------------------------------------------------------------
def _load_totals(items: Iterable[PricingItem]) -> tuple:
    """Return (total weight kg, total volume m3, total item count)."""
    total_weight = 0.0
    total_volume = 0.0
    total_items = 0
    for item in items:
        total_weight += item.weight or 0
        total_volume += item.volume_m3 * item.quantity
        total_items += item.quantity
    return total_weight, total_volume, total_items


def determine_vehicle_type(
    items: Iterable[PricingItem],
    preferred_type: Optional[VehicleType] = None,
) -> VehicleType:
    """Pick the preferred vehicle if it fits, else the smallest one that does.

    Loads that exceed every vehicle fall back to a truck.
    """
    weight, volume, count = _load_totals(items)

    if preferred_type is not None:
        if VEHICLE_CAPACITIES[preferred_type].fits(weight, volume, count):
            return preferred_type

    for vehicle_type in VEHICLE_SEARCH_ORDER:
        if VEHICLE_CAPACITIES[vehicle_type].fits(weight, volume, count):
            return vehicle_type

    logger.warning(
        "Load exceeds every vehicle capacity (%.1f kg, %.2f m3, %d items) -- defaulting to truck",
        weight, volume, count,
    )
    return VehicleType.TRUCK


def calculate_items_price(items: Iterable[PricingItem]) -> float:
    total = 0.0
    for item in items:
        item_price = BASE_ITEM_PRICE * item.quantity * ITEM_CATEGORY_MULTIPLIERS[item.category]
        if item.weight:
            item_price += item.weight * PRICE_PER_KG
        if item.dimensions is not None:
            # Single-unit volume, not scaled by quantity
            item_price += item.dimensions.volume_m3 * PRICE_PER_CBM
        total += item_price
    return total


def calculate_urgency_price(subtotal: float, urgency: Urgency) -> float:
    """Surcharge above the standard-rate subtotal only."""
    return subtotal * (URGENCY_MULTIPLIERS[urgency] - 1)


def _build_breakdown(
    prices: dict,
    distance: float,
    duration: float,
    urgency: Urgency,
) -> List[PricingBreakdown]:
    breakdown = [
        PricingBreakdown("base", "Base service fee", prices["base"]),
        PricingBreakdown(
            "distance",
            f"Distance charge ({distance:.1f} km)",
            prices["distance"],
            unit="km",
        ),
        PricingBreakdown("items", "Items handling fee", prices["items"]),
        PricingBreakdown(
            "time",
            f"Time charge ({round(duration)} min)",
            prices["time"],
            unit="min",
        ),
    ]
    if prices["urgency"] > 0:
        breakdown.append(
            PricingBreakdown(
                "urgency",
                f"{urgency.value} delivery surcharge",
                prices["urgency"],
            )
        )
    return breakdown


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def calculate_price(request: PricingRequest) -> PricingResult:
    """Price a move request.

    Pure and synchronous. The request is not validated here: call
    ``validate_request`` first (or use ``quote``). No rounding is applied.
    """
    matrix = calculate_distance_matrix(request.pickup_location, request.delivery_location)

    vehicle = determine_vehicle_type(request.items, request.vehicle_type)
    capacity: VehicleCapacity = VEHICLE_CAPACITIES[vehicle]
    urgency = request.urgency or Urgency.STANDARD

    base_price = capacity.base_price
    distance_price = matrix.distance * capacity.price_per_km
    items_price = calculate_items_price(request.items)
    time_price = matrix.duration * capacity.price_per_minute
    urgency_price = calculate_urgency_price(
        base_price + distance_price + items_price + time_price, urgency
    )
    total_price = base_price + distance_price + items_price + time_price + urgency_price

    breakdown = _build_breakdown(
        {
            "base": base_price,
            "distance": distance_price,
            "items": items_price,
            "time": time_price,
            "urgency": urgency_price,
        },
        matrix.distance,
        matrix.duration,
        urgency,
    )

    logger.debug(
        "Priced %.2f km %s move with %s: total %.2f",
        matrix.distance, urgency.value, vehicle.value, total_price,
    )

    return PricingResult(
        base_price=base_price,
        distance_price=distance_price,
        items_price=items_price,
        time_price=time_price,
        urgency_price=urgency_price,
        total_price=total_price,
        estimated_duration=matrix.duration,
        recommended_vehicle=vehicle,
        breakdown=breakdown,
    )


def validate_request(request: PricingRequest, now: Optional[datetime] = None) -> ValidationResult:
    """Collect every problem with *request* instead of stopping at the first."""
    errors = []

    pickup = request.pickup_location
    delivery = request.delivery_location
    if not validate_coordinates(pickup.latitude, pickup.longitude):
        errors.append("Invalid pickup location coordinates")
    if not validate_coordinates(delivery.latitude, delivery.longitude):
        errors.append("Invalid delivery location coordinates")

    if not request.items:
        errors.append("At least one item is required")

    for index, item in enumerate(request.items, start=1):
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity < 1:
            errors.append(f"Item {index}: quantity must be a positive integer")
        if item.weight is not None and item.weight < 0:
            errors.append(f"Item {index}: weight cannot be negative")
        if item.dimensions is not None and min(
            item.dimensions.length, item.dimensions.width, item.dimensions.height
        ) <= 0:
            errors.append(f"Item {index}: dimensions must be positive")

    if now is None:
        now = datetime.now(timezone.utc)
    scheduled_at = request.scheduled_at
    if scheduled_at.tzinfo is None:
        scheduled_at = scheduled_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if scheduled_at <= now:
        errors.append("Scheduled time must be in the future")

    return ValidationResult(is_valid=not errors, errors=errors)


def quote(request: PricingRequest, now: Optional[datetime] = None) -> PricingResult:
    """Validate then price *request*, raising ``PricingValidationError`` on bad input."""
    validation = validate_request(request, now=now)
    if not validation.is_valid:
        raise PricingValidationError(validation.errors)
    return calculate_price(request)
