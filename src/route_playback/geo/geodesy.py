"""Spherical geodesy helpers: distance, bearing and angular interpolation.

All functions are pure.  The earth is approximated as a sphere of radius
:data:`EARTH_RADIUS_M`; longitudes/latitudes are decimal degrees.
"""

from __future__ import annotations

import math

from route_playback.geo.models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between *a* and *b* in metres (haversine formula)."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    sin_d_lat = math.sin(d_lat / 2)
    sin_d_lon = math.sin(d_lon / 2)
    h = sin_d_lat * sin_d_lat + math.cos(lat1) * math.cos(lat2) * sin_d_lon * sin_d_lon
    # Rounding can push h marginally above 1 for antipodal points.
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def bearing_degrees(origin: GeoPoint, target: GeoPoint) -> float:
    """Initial great-circle bearing from *origin* to *target*, in ``[0, 360)``.

    0 is due north, angles grow clockwise.  The result is meaningless when the
    two points coincide; callers must guard that case.
    """
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    d_lon = math.radians(target.longitude - origin.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def normalize_bearing(value: float) -> float:
    """Reduce *value* modulo 360 into ``[0, 360)``."""
    result = value % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


def interpolate_bearing(start: float, end: float, t: float) -> float:
    """Interpolate from *start* to *end* along the shorter arc.

    ``interpolate_bearing(350, 10, 0.5)`` is 0, not 180.
    """
    a = normalize_bearing(start)
    b = normalize_bearing(end)
    delta = b - a
    if delta > 180.0:
        delta -= 360.0
    if delta < -180.0:
        delta += 360.0
    return normalize_bearing(a + delta * t)


def interpolate_coordinate(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
    """Component-wise linear interpolation between *a* and *b*.

    Only a good approximation of the great-circle path for short segments.
    """
    if t <= 0.0:
        return a
    if t >= 1.0:
        return b
    return GeoPoint(
        longitude=a.longitude + (b.longitude - a.longitude) * t,
        latitude=a.latitude + (b.latitude - a.latitude) * t,
    )
