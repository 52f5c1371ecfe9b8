"""
Straight-line distance and travel-time estimate between a receiver and a donor.

This is a presentation heuristic, not routing: haversine distance on a
spherical Earth and an effective speed of 20 km/h (3 minutes per km),
floored at 2 minutes.
"""
import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0
MINUTES_PER_KM = 3
MIN_ETA_MINUTES = 2


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a past 1.0 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def eta_minutes_for(distance_km: float) -> int:
    return max(MIN_ETA_MINUTES, round_half_up(distance_km * MINUTES_PER_KM))


def format_distance(distance_km: float) -> str:
    """Meters below 1 km, otherwise kilometers with one decimal."""
    if distance_km < 1:
        return f"{round_half_up(distance_km * 1000)}m"
    return f"{distance_km:.1f}km"


def format_eta(minutes: int) -> str:
    return f"{minutes} min"


@dataclass(frozen=True)
class RouteEstimate:
    distance_km: float
    eta_minutes: int

    @property
    def distance_label(self) -> str:
        return format_distance(self.distance_km)

    @property
    def eta_label(self) -> str:
        return format_eta(self.eta_minutes)


def estimate(receiver_lat: float, receiver_lon: float, donor_lat: float, donor_lon: float) -> RouteEstimate:
    distance_km = haversine_km(receiver_lat, receiver_lon, donor_lat, donor_lon)
    return RouteEstimate(distance_km=distance_km, eta_minutes=eta_minutes_for(distance_km))
