"""Parsing of user-entered coordinate text."""

from __future__ import annotations

import math

from ...models.domain import Coordinate
from .errors import InvalidInputError


def _parse_float(value: str | float | None) -> float:
    if value is None:
        raise InvalidInputError()
    try:
        number = float(str(value).strip())
    except ValueError as exc:
        raise InvalidInputError() from exc
    if not math.isfinite(number):
        raise InvalidInputError()
    return number


def parse_coordinate(latitude: str | float | None, longitude: str | float | None) -> Coordinate:
    try:
        return Coordinate(latitude=_parse_float(latitude), longitude=_parse_float(longitude))
    except InvalidInputError:
        raise
    except ValueError as exc:
        # out of range
        raise InvalidInputError() from exc


def parse_coordinate_fields(
    source_lat: str | float | None,
    source_lon: str | float | None,
    dest_lat: str | float | None,
    dest_lon: str | float | None,
) -> tuple[Coordinate, Coordinate]:
    """Turn the four coordinate text fields into a (source, destination) pair.

    Raises InvalidInputError if any field is empty, not a number, or out of range.
    """
    return parse_coordinate(source_lat, source_lon), parse_coordinate(dest_lat, dest_lon)
