"""Export services."""

from .geojson import (
    linestring_to_wkt,
    overlay_to_feature,
    overlays_to_feature_collection,
)

__all__ = [
    "linestring_to_wkt",
    "overlay_to_feature",
    "overlays_to_feature_collection",
]
