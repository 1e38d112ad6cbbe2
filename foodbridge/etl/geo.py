"""Great-circle distance helpers."""

import math

from foodbridge.models import Coordinate

EARTH_RADIUS_MILES = 3959.0
METERS_PER_MILE = 1609.34


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates, in miles."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE
