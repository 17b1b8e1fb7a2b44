"""Unit tests for the geo module."""

import pytest

from app.geo import (
    calculate_distance_km,
    calculate_distance_matrix,
    estimate_duration_minutes,
    validate_coordinates,
)
from app.models import Location


class TestValidateCoordinates:
    def test_valid(self):
        assert validate_coordinates(51.5, -0.1) is True

    def test_boundary_values(self):
        assert validate_coordinates(90, 180) is True
        assert validate_coordinates(-90, -180) is True

    def test_out_of_range_lat(self):
        assert validate_coordinates(91, 0) is False
        assert validate_coordinates(-91, 0) is False

    def test_out_of_range_lng(self):
        assert validate_coordinates(0, 181) is False
        assert validate_coordinates(0, -181) is False

    def test_nan_is_invalid(self):
        assert validate_coordinates(float("nan"), -0.1278) is False
        assert validate_coordinates(51.5074, float("nan")) is False


class TestCalculateDistanceKm:
    def test_same_point(self):
        assert calculate_distance_km(51.5, -0.1, 51.5, -0.1) == 0.0

    def test_london_to_manchester(self):
        dist = calculate_distance_km(51.5074, -0.1278, 53.4808, -2.2426)
        assert 258 < dist < 266  # ~262 km

    def test_symmetric(self):
        pairs = [
            (51.5074, -0.1278, 53.4808, -2.2426),
            (-33.8688, 151.2093, 40.7128, -74.0060),
            (0, 179.9, 0, -179.9),
        ]
        for lat1, lng1, lat2, lng2 in pairs:
            assert calculate_distance_km(lat1, lng1, lat2, lng2) == pytest.approx(
                calculate_distance_km(lat2, lng2, lat1, lng1), abs=1e-9
            )

    def test_short_hop(self):
        # Two points roughly 26 m apart in central London
        dist = calculate_distance_km(51.5074, -0.1278, 51.5072, -0.1276)
        assert 0.02 < dist < 0.03


class TestEstimateDuration:
    def test_forty_kmh_default(self):
        assert estimate_duration_minutes(40) == pytest.approx(60)

    def test_explicit_speed(self):
        assert estimate_duration_minutes(30, speed_kmh=60) == pytest.approx(30)

    def test_zero_distance(self):
        assert estimate_duration_minutes(0) == 0


class TestDistanceMatrix:
    def test_matrix_matches_helpers(self):
        matrix = calculate_distance_matrix(Location(51.5074, -0.1278), Location(53.4808, -2.2426))
        assert matrix.distance == calculate_distance_km(51.5074, -0.1278, 53.4808, -2.2426)
        assert matrix.duration == pytest.approx(matrix.distance / 40 * 60)
