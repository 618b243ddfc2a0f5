"""Geospatial helper functions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..models.domain import Coordinate

EARTH_RADIUS_METERS = 6_371_000.0

# Policy limit for location attendance.
DEFAULT_GEOFENCE_METERS = 2000.0


@dataclass(slots=True, frozen=True)
class GeofenceCheck:
    within_range: bool
    distance_meters: float


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_radius(distance_meters: float, max_meters: float = DEFAULT_GEOFENCE_METERS) -> bool:
    """The boundary itself counts as inside."""
    return distance_meters <= max_meters


def verify_within_geofence(
    reported: Coordinate,
    branch: Coordinate,
    max_meters: float = DEFAULT_GEOFENCE_METERS,
) -> GeofenceCheck:
    """Classify a reported position against a branch location."""

    distance = haversine_meters(reported.latitude, reported.longitude, branch.latitude, branch.longitude)
    return GeofenceCheck(within_range=is_within_radius(distance, max_meters), distance_meters=distance)


def format_distance(distance_meters: float) -> str:
    if distance_meters >= 1000:
        return f"{distance_meters / 1000:.2f} km"
    return f"{int(round(distance_meters))} m"
