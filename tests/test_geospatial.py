import math

from src.attendance.models.domain import Coordinate
from src.attendance.services.geospatial import (
    DEFAULT_GEOFENCE_METERS,
    EARTH_RADIUS_METERS,
    format_distance,
    haversine_meters,
    is_within_radius,
    verify_within_geofence,
)


def _north_of(origin: Coordinate, meters: float) -> Coordinate:
    return Coordinate(origin.latitude + math.degrees(meters / EARTH_RADIUS_METERS), origin.longitude)


def test_distance_is_symmetric_and_zero_for_same_point():
    cairo = (30.0444, 31.2357)
    giza = (30.0131, 31.2089)

    assert haversine_meters(*cairo, *giza) == haversine_meters(*giza, *cairo)
    assert haversine_meters(*cairo, *cairo) == 0


def test_one_degree_of_latitude_is_about_111_km():
    distance = haversine_meters(30.0, 31.0, 31.0, 31.0)
    assert 110_000 <= distance <= 112_000


def test_distance_grows_with_separation():
    near = haversine_meters(30.0, 31.0, 30.01, 31.0)
    far = haversine_meters(30.0, 31.0, 30.02, 31.0)
    assert 0 < near < far


def test_radius_boundary_is_inclusive():
    assert DEFAULT_GEOFENCE_METERS == 2000
    assert is_within_radius(2000.0)
    assert not is_within_radius(2000.0001)
    assert not is_within_radius(2001.0)


def test_verify_within_geofence_classifies_positions():
    branch = Coordinate(30.0, 31.0)

    inside = verify_within_geofence(_north_of(branch, 1999), branch)
    outside = verify_within_geofence(_north_of(branch, 2001), branch)

    assert inside.within_range
    assert abs(inside.distance_meters - 1999) < 1e-6
    assert not outside.within_range
    assert abs(outside.distance_meters - 2001) < 1e-6


def test_verify_honours_custom_limit():
    branch = Coordinate(30.0, 31.0)
    check = verify_within_geofence(_north_of(branch, 600), branch, max_meters=500)
    assert not check.within_range


def test_format_distance():
    assert format_distance(2500) == "2.50 km"
    assert format_distance(350.4) == "350 m"
