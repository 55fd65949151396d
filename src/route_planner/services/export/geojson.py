"""GeoJSON/WKT export of drawn route overlays."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, mapping

from ...models.domain import Coordinate, RouteResult
from ..geospatial import polyline_length_km

PRIMARY_ROUTE_COLOR = "#ffff00"


def generate_route_color(index: int) -> str:
    """Primary route is yellow; alternates cycle through distinct colors."""
    colors = [
        PRIMARY_ROUTE_COLOR, "#02d8e0", "#e0003e", "#38e000", "#0000c1",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def linestring_to_wkt(coordinates: Sequence[Coordinate]) -> str:
    """Convert a polyline to a WKT LINESTRING (lon lat order as per WKT spec)."""
    if not coordinates or len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    coord_pairs = [f"{point.longitude} {point.latitude}" for point in coordinates]
    return f"LINESTRING({','.join(coord_pairs)})"


def overlay_to_feature(overlay: RouteResult, index: int = 0) -> Dict[str, Any]:
    if len(overlay.polyline) < 2:
        raise ValueError("Route overlay must have at least 2 coordinates")
    line = LineString([(point.longitude, point.latitude) for point in overlay.polyline])
    return {
        "type": "Feature",
        "geometry": mapping(line),
        "properties": {
            "request_id": overlay.request_id,
            "mode": overlay.mode.value,
            "distance": overlay.distance_text,
            "travel_time": overlay.travel_time_text,
            "distance_meters": overlay.distance_meters,
            "travel_time_seconds": overlay.travel_time_seconds,
            "geometry_length_km": round(polyline_length_km(overlay.polyline), 3),
            "wkt": linestring_to_wkt(overlay.polyline),
            "stroke": generate_route_color(index),
            "stroke-width": 3,
        },
    }


def overlays_to_feature_collection(overlays: Sequence[RouteResult]) -> Dict[str, Any]:
    """Convert drawn overlays to a GeoJSON FeatureCollection.

    Overlays with fewer than two points cannot form a line and are skipped.
    """
    features: List[Dict[str, Any]] = []
    for idx, overlay in enumerate(overlays):
        try:
            features.append(overlay_to_feature(overlay, idx))
        except ValueError:
            continue
    return {"type": "FeatureCollection", "features": features}
