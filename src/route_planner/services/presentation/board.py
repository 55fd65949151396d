"""In-memory route board: the surface that draws route overlays."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from ...models.domain import Coordinate, RouteBounds, RouteResult
from ..routing.errors import RouteError

logger = logging.getLogger(__name__)

# Span in degrees of the provisional viewport centred on the route source.
SOURCE_FOCUS_SPAN_DEGREES = 5.0


class RouteBoard:
    """Holds the currently drawn route overlays and the text shown beside them.

    Only the overlays of the most recently accepted response are kept; the
    coordinator tells the board to clear before each new request.
    """

    def __init__(self) -> None:
        self.overlays: list[RouteResult] = []
        self.viewport: RouteBounds | None = None
        self.distance_text = ""
        self.travel_time_text = ""
        self.error: RouteError | None = None
        self.clear_count = 0
        self._provisional_viewport = False

    def clear_route(self) -> None:
        self.overlays = []
        self.viewport = None
        self.distance_text = ""
        self.travel_time_text = ""
        self.error = None
        self._provisional_viewport = False
        self.clear_count += 1

    def focus_on(self, center: Coordinate, span: float = SOURCE_FOCUS_SPAN_DEGREES) -> None:
        """Frame the viewport around ``center`` until a route result replaces it."""
        half = span / 2
        self.viewport = RouteBounds(
            south=max(center.latitude - half, -90.0),
            west=max(center.longitude - half, -180.0),
            north=min(center.latitude + half, 90.0),
            east=min(center.longitude + half, 180.0),
        )
        self._provisional_viewport = True

    def show_route(self, result: RouteResult) -> None:
        self.overlays.append(result)
        if result.bounds is not None:
            if self.viewport is None or self._provisional_viewport:
                self.viewport = result.bounds
            else:
                self.viewport = self.viewport.union(result.bounds)
            self._provisional_viewport = False
        self.distance_text = result.distance_text
        self.travel_time_text = result.travel_time_text
        logger.info(
            f"Showing route for request {result.request_id}: "
            f"{result.distance_text}, {result.travel_time_text}"
        )

    def report_error(self, error: RouteError) -> None:
        self.error = error
        logger.info(f"Route error shown to user: {error.kind.value}: {error.message}")

    def snapshot(self) -> dict[str, Any]:
        return {
            "distance_text": self.distance_text,
            "travel_time_text": self.travel_time_text,
            "viewport": asdict(self.viewport) if self.viewport else None,
            "error": {"kind": self.error.kind.value, "message": self.error.message} if self.error else None,
            "overlays": [
                {
                    "request_id": overlay.request_id,
                    "mode": overlay.mode.value,
                    "distance_text": overlay.distance_text,
                    "travel_time_text": overlay.travel_time_text,
                    "distance_meters": overlay.distance_meters,
                    "travel_time_seconds": overlay.travel_time_seconds,
                    "coordinates": [[point.latitude, point.longitude] for point in overlay.polyline],
                }
                for overlay in self.overlays
            ],
        }
