"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LineString, MultiPoint

from ..models.domain import Coordinate, RouteBounds

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def polyline_bounds(polyline: Sequence[Coordinate]) -> RouteBounds | None:
    """Return the bounding box of a polyline, or None when it has no points."""

    if not polyline:
        return None
    points = [(point.longitude, point.latitude) for point in polyline]
    # shapely bounds are (minx, miny, maxx, maxy) in lon/lat order
    geometry = LineString(points) if len(points) > 1 else MultiPoint(points)
    west, south, east, north = geometry.bounds
    return RouteBounds(south=south, west=west, north=north, east=east)


def polyline_length_km(polyline: Sequence[Coordinate]) -> float:
    """Great-circle length of a polyline, summed segment by segment."""

    return sum(
        haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
        for a, b in zip(polyline, polyline[1:])
    )
