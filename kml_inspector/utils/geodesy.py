"""Great-circle distance and path length helpers.

All points are ``(lat, lon)`` tuples in decimal degrees; all distances
are kilometres.

Two Earth models are available:
- ``haversine`` — a sphere of radius ``EARTH_RADIUS_KM`` (6371 km).
- ``wgs84`` — geodesics on the WGS 84 ellipsoid via ``pyproj.Geod``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from kml_inspector.core.constants import (
    EARTH_RADIUS_KM,
    LENGTH_MODEL_HAVERSINE,
    LENGTH_MODEL_WGS84,
    METRES_PER_KILOMETRE,
)

LatLon = tuple[float, float]


def haversine_km(start: LatLon, end: LatLon, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance between two ``(lat, lon)`` points on a sphere."""
    lat1, lon1 = start
    lat2, lon2 = end
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points.
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c


def line_length_km(points: Sequence[LatLon]) -> float:
    """Sum of haversine legs between consecutive points.

    Fewer than two points measure 0.
    """
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_km(points[i - 1], points[i])
    return total


def ellipsoidal_line_length_km(points: Sequence[LatLon]) -> float:
    """Geodesic path length on the WGS 84 ellipsoid.

    Fewer than two points measure 0.
    """
    if len(points) < 2:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    lons = [p[1] for p in points]
    lats = [p[0] for p in points]
    return geod.line_length(lons, lats) / METRES_PER_KILOMETRE


def measure_length_km(points: Sequence[LatLon], *, model: str = LENGTH_MODEL_HAVERSINE) -> float:
    """Measure a path with the named Earth model.

    Raises:
        ValueError: If ``model`` is unknown.
    """
    if model == LENGTH_MODEL_HAVERSINE:
        return line_length_km(points)
    if model == LENGTH_MODEL_WGS84:
        return ellipsoidal_line_length_km(points)
    msg = f"Unknown length model {model!r}"
    raise ValueError(msg)
