"""Shared test fixtures for the Speedy Van pricing service."""

import os

# Force development mode for tests so config validation doesn't block import
os.environ.setdefault("APP_ENV", "development")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import ItemCategory, Location, PricingItem, PricingRequest, Urgency
from app.rate_limit import limiter

LONDON = Location(51.5074, -0.1278)
LONDON_NEARBY = Location(51.5072, -0.1276)
MANCHESTER = Location(53.4808, -2.2426)


def make_request(**kwargs) -> PricingRequest:
    """Build a valid London pricing request, overriding any field."""
    defaults = {
        "pickup_location": LONDON,
        "delivery_location": LONDON_NEARBY,
        "items": [PricingItem(category=ItemCategory.BOXES, quantity=1)],
        "scheduled_at": datetime.now(timezone.utc) + timedelta(days=1),
        "vehicle_type": None,
        "urgency": Urgency.STANDARD,
    }
    defaults.update(kwargs)
    return PricingRequest(**defaults)


def make_payload(**kwargs) -> dict:
    """Build a JSON quote body as the booking portals send it."""
    payload = {
        "pickupLocation": {"latitude": 51.5074, "longitude": -0.1278},
        "deliveryLocation": {"latitude": 53.4808, "longitude": -2.2426},
        "items": [{"category": "boxes", "quantity": 3}],
        "scheduledAt": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
        "urgency": "standard",
    }
    payload.update(kwargs)
    return payload


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield


@pytest.fixture()
def client():
    """FastAPI TestClient for the pricing app."""
    return TestClient(app)
