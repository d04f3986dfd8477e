"""Great-circle geodesy on a spherical earth."""

from route_playback.geo.geodesy import (
    EARTH_RADIUS_M,
    bearing_degrees,
    haversine_meters,
    interpolate_bearing,
    interpolate_coordinate,
    normalize_bearing,
)
from route_playback.geo.models import GeoPoint

__all__ = [
    "EARTH_RADIUS_M",
    "GeoPoint",
    "bearing_degrees",
    "haversine_meters",
    "interpolate_bearing",
    "interpolate_coordinate",
    "normalize_bearing",
]
