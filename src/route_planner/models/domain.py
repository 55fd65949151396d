"""Domain models for coordinates, travel modes and routes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} is outside [-90, 90].")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} is outside [-180, 180].")

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class TransportMode(str, Enum):
    """Travel style picked by the user."""

    DRIVING = "driving"
    WALKING = "walking"
    BIKING = "biking"


class ProviderProfile(str, Enum):
    """Travel category understood by the directions provider."""

    AUTOMOBILE = "automobile"
    WALKING = "walking"


@dataclass(frozen=True, slots=True)
class RouteRequest:
    id: int
    source: Coordinate
    destination: Coordinate
    mode: TransportMode


@dataclass(frozen=True, slots=True)
class RouteCandidate:
    """A single route as returned by the directions provider."""

    polyline: Tuple[Coordinate, ...]
    distance_meters: float
    nominal_travel_time_seconds: float


@dataclass(frozen=True, slots=True)
class RouteBounds:
    south: float
    west: float
    north: float
    east: float

    def union(self, other: RouteBounds) -> RouteBounds:
        return RouteBounds(
            south=min(self.south, other.south),
            west=min(self.west, other.west),
            north=max(self.north, other.north),
            east=max(self.east, other.east),
        )


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Display-ready route published for one accepted provider response."""

    request_id: int
    polyline: Tuple[Coordinate, ...]
    distance_text: str
    travel_time_text: str
    mode: TransportMode
    distance_meters: float
    travel_time_seconds: float
    bounds: RouteBounds | None = None
