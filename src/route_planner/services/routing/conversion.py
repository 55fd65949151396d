"""Unit conversion and display formatting for provider routes."""

from __future__ import annotations

from ...models.domain import TransportMode

METERS_TO_MILES = 0.000621371
# Biking is approximated as one quarter of automobile speed.
BIKING_TIME_MULTIPLIER = 4


def meters_to_miles(meters: float) -> float:
    return meters * METERS_TO_MILES


def meters_to_kilometers(meters: float) -> float:
    return meters / 1000


def format_distance(meters: float) -> str:
    return "%.2f miles (%.2f km)" % (meters_to_miles(meters), meters_to_kilometers(meters))


def adjusted_travel_time(nominal_seconds: float, mode: TransportMode) -> float:
    """Scale the provider's nominal time for modes it cannot route natively.

    The multiplier is chosen from the mode the user asked for, not from the
    provider profile the route was computed with.
    """

    multiplier = BIKING_TIME_MULTIPLIER if mode is TransportMode.BIKING else 1
    return nominal_seconds * multiplier


def format_travel_time(seconds: float) -> str:
    return "%.2f minutes" % (seconds / 60)
