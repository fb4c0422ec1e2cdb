"""
geo_math.py: Great-circle distance and small geometry helpers.

Pure functions, no state. Distances are on a spherical Earth of radius
6371 km (haversine), which is well within tolerance at city scale.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from tripviz.models.render import Bounds
from tripviz.models.trips import GeoPoint

EARTH_RADIUS_KM = 6371.0


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180)


def haversine_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points in kilometres.

    Symmetric in (a, b) and exactly 0.0 for identical points. The
    intermediate term is clamped to [0, 1] so rounding near antipodal
    points can't push sqrt(1 - h) into NaN.
    """
    d_lat = deg_to_rad(b.lat - a.lat)
    d_lng = deg_to_rad(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(deg_to_rad(a.lat)) * math.cos(deg_to_rad(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    h = min(1.0, max(0.0, h))

    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bounds_of(points: Iterable[GeoPoint]) -> Optional[Bounds]:
    """Smallest lat/lng box containing every point, or None if there are none."""
    lats: list[float] = []
    lngs: list[float] = []
    for p in points:
        lats.append(p.lat)
        lngs.append(p.lng)

    if not lats:
        return None

    return Bounds(
        south_west=GeoPoint(lat=min(lats), lng=min(lngs)),
        north_east=GeoPoint(lat=max(lats), lng=max(lngs)),
    )
