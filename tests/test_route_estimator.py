"""Unit tests for the distance/ETA heuristic."""
import math

import pytest

from app.services.route_estimator import (
    estimate,
    format_distance,
    format_eta,
    haversine_km,
    round_half_up,
)


def test_nearby_points():
    route = estimate(37.7749, -122.4194, 37.7849, -122.4094)
    assert route.distance_km > 0
    assert route.distance_km == pytest.approx(1.4175, abs=0.01)
    assert route.eta_minutes == max(2, round_half_up(route.distance_km * 3))
    assert route.eta_minutes == 4
    assert route.distance_label == "1.4km"
    assert route.eta_label == "4 min"


def test_identical_points_hit_the_floor():
    route = estimate(37.7749, -122.4194, 37.7749, -122.4194)
    assert route.distance_km == 0
    assert route.eta_minutes == 2
    assert route.distance_label == "0m"


def test_eta_floor_for_short_trips():
    # ~0.5 km -> 1.5 minutes of travel, still reported as 2
    route = estimate(37.7749, -122.4194, 37.7794, -122.4194)
    assert route.distance_km < 1
    assert route.eta_minutes == 2


def test_long_distance_san_francisco_to_los_angeles():
    distance = haversine_km(37.7749, -122.4194, 34.0522, -118.2437)
    assert distance == pytest.approx(559, rel=0.01)
    assert estimate(37.7749, -122.4194, 34.0522, -118.2437).eta_minutes == round_half_up(distance * 3)


def test_haversine_is_symmetric():
    there = haversine_km(51.5074, -0.1278, 48.8566, 2.3522)
    back = haversine_km(48.8566, 2.3522, 51.5074, -0.1278)
    assert there == pytest.approx(back)


@pytest.mark.parametrize("lat", [0.08, 0.0316, 1e-7, 45.0, 89.9])
def test_antipodal_points_are_half_the_circumference(lat):
    distance = haversine_km(lat, 0, -lat, 180)
    assert distance == pytest.approx(math.pi * 6371, rel=1e-6)


def test_near_antipodal_estimate():
    route = estimate(-0.08, 0.0, 0.08, 180.0)
    assert route.distance_km == pytest.approx(20015, rel=0.01)
    assert route.eta_minutes == round_half_up(route.distance_km * 3)


def test_round_half_up_differs_from_bankers_rounding():
    assert round(2.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize("km,label", [
    (0.0, "0m"),
    (0.4567, "457m"),
    (0.25, "250m"),
    (1.0, "1.0km"),
    (12.34, "12.3km"),
])
def test_format_distance(km, label):
    assert format_distance(km) == label


def test_format_eta():
    assert format_eta(7) == "7 min"
