import math
from typing import Optional

from app.config import settings
from app.models import DistanceMatrix, Location

EARTH_RADIUS_KM = 6371


def validate_coordinates(lat: float, lng: float) -> bool:
    """Return True if lat/lng are within valid WGS-84 ranges."""
    return -90 <= lat <= 90 and -180 <= lng <= 180


def calculate_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two coordinates using the Haversine formula.

    Coordinates are not range-checked; callers validate first.
    """
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def estimate_duration_minutes(distance_km: float, speed_kmh: Optional[float] = None) -> float:
    """Travel time at a flat average urban speed (40 km/h unless configured)."""
    if speed_kmh is None:
        speed_kmh = settings.AVERAGE_SPEED_KMH
    return distance_km / speed_kmh * 60


def calculate_distance_matrix(pickup: Location, delivery: Location) -> DistanceMatrix:
    distance = calculate_distance_km(
        pickup.latitude, pickup.longitude, delivery.latitude, delivery.longitude
    )
    return DistanceMatrix(distance=distance, duration=estimate_duration_minutes(distance))
