"""
Speedy Van -- Pricing service.

JSON API in front of the pricing engine. The booking portals post a move
request (route, items, schedule, urgency) and get back a price breakdown
and a recommended vehicle.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.models import (
    ITEM_CATEGORY_MULTIPLIERS,
    URGENCY_MULTIPLIERS,
    VEHICLE_CAPACITIES,
    VEHICLE_SEARCH_ORDER,
)
from app.pricing import PricingValidationError, quote, validate_request
from app.rate_limit import limiter
from app.schemas import PricingRequestIn, PricingResultOut, RatesOut, ValidationOut

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("speedyvan")

# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Speedy Van Pricing",
    description="Price calculation for Speedy Van moves",
    version="1.0.0",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


# Global error handler -- log full tracebacks and return a JSON body
@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong. Please try again."},
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "healthy"}


# ===================================================================
#  PRICING ROUTES
# ===================================================================

@app.get("/api/pricing/rates", response_model=RatesOut)
async def pricing_rates():
    """Expose the static rate tables so the portals can show them."""
    return {
        "vehicleCapacities": {
            vehicle.value: {
                "maxWeight": capacity.max_weight,
                "maxVolume": capacity.max_volume,
                "maxItems": capacity.max_items,
                "basePrice": capacity.base_price,
                "pricePerKm": capacity.price_per_km,
                "pricePerMinute": capacity.price_per_minute,
            }
            for vehicle, capacity in VEHICLE_CAPACITIES.items()
        },
        "vehicleSearchOrder": list(VEHICLE_SEARCH_ORDER),
        "itemCategoryMultipliers": {
            category.value: multiplier
            for category, multiplier in ITEM_CATEGORY_MULTIPLIERS.items()
        },
        "urgencyMultipliers": {
            urgency.value: multiplier
            for urgency, multiplier in URGENCY_MULTIPLIERS.items()
        },
    }


@app.post("/api/pricing/quote", response_model=PricingResultOut)
@limiter.limit(settings.QUOTE_RATE_LIMIT)
async def pricing_quote(request: Request, payload: PricingRequestIn):
    try:
        result = quote(payload.to_domain())
    except PricingValidationError as e:
        logger.info("Rejected quote request: %s", e)
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid pricing request", "errors": e.errors},
        )
    return result.to_dict()


@app.post("/api/pricing/validate", response_model=ValidationOut)
async def pricing_validate(payload: PricingRequestIn):
    validation = validate_request(payload.to_domain())
    return {"isValid": validation.is_valid, "errors": validation.errors}
