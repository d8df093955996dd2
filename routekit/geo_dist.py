"""Great-circle distance between two positions given in degrees."""

from __future__ import annotations

import math

__all__ = ["geo_dist", "EARTH_RADIUS", "PI_DIV_180"]

PI_DIV_180 = 3.14159265359 / 180.0
EARTH_RADIUS = 6371000.785
"""Earth radius in meters."""


def geo_dist(lat_a: float, lon_a: float, lat_b: float, lon_b: float) -> float:
    """Return the distance in meters between two points.

    Latitudes must lie in [-90, 90] and longitudes in [-180, 180].
    """
    cos_lat_diff = math.cos((lat_a - lat_b) * PI_DIV_180)
    cos_lat_sum = math.cos((lat_a + lat_b) * PI_DIV_180)
    cos_lon_diff = math.cos((lon_a - lon_b) * PI_DIV_180)

    c = 0.5 * ((cos_lat_diff + cos_lat_sum) * cos_lon_diff + cos_lat_diff - cos_lat_sum)
    # Rounding can push the cosine just outside of [-1, 1].
    c = max(-1.0, min(1.0, c))
    return math.acos(c) * EARTH_RADIUS