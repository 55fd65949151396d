import pytest

from route_planner.models.domain import Coordinate, ProviderProfile, RouteCandidate, TransportMode
from route_planner.services.routing.conversion import (
    adjusted_travel_time,
    format_distance,
    format_travel_time,
    meters_to_kilometers,
    meters_to_miles,
)
from route_planner.services.routing.coordinator import build_result
from route_planner.services.routing.profiles import PROFILE_TABLE, profile_for


def _candidate(distance: float = 1609.34, duration: float = 600.0) -> RouteCandidate:
    return RouteCandidate(
        polyline=(Coordinate(37.7749, -122.4194), Coordinate(37.8044, -122.2712)),
        distance_meters=distance,
        nominal_travel_time_seconds=duration,
    )


def test_one_mile_in_meters_formats_as_one_mile():
    assert format_distance(1609.34) == "1.00 miles (1.61 km)"


def test_unit_conversion_factors():
    assert meters_to_miles(1000) == pytest.approx(0.621371)
    assert meters_to_kilometers(2500) == 2.5


@pytest.mark.parametrize(
    "mode, expected",
    [
        (TransportMode.DRIVING, "10.00 minutes"),
        (TransportMode.WALKING, "10.00 minutes"),
        (TransportMode.BIKING, "40.00 minutes"),
    ],
)
def test_travel_time_multiplier_follows_requested_mode(mode, expected):
    seconds = adjusted_travel_time(600.0, mode)
    assert format_travel_time(seconds) == expected


def test_biking_and_driving_share_a_profile():
    assert profile_for(TransportMode.BIKING) == profile_for(TransportMode.DRIVING) == ProviderProfile.AUTOMOBILE
    assert profile_for(TransportMode.WALKING) == ProviderProfile.WALKING

    driving = build_result(1, _candidate(duration=123.0), TransportMode.DRIVING)
    biking = build_result(1, _candidate(duration=123.0), TransportMode.BIKING)
    assert biking.travel_time_seconds == driving.travel_time_seconds * 4
    assert driving.travel_time_text == "2.05 minutes"
    assert biking.travel_time_text == "8.20 minutes"


def test_profile_table_is_read_only():
    with pytest.raises(TypeError):
        PROFILE_TABLE[TransportMode.BIKING] = ProviderProfile.WALKING  # type: ignore[index]


def test_build_result_carries_bounds_and_text():
    result = build_result(7, _candidate(), TransportMode.WALKING)

    assert result.request_id == 7
    assert result.distance_text == "1.00 miles (1.61 km)"
    assert result.bounds is not None
    assert result.bounds.south == pytest.approx(37.7749)
    assert result.bounds.north == pytest.approx(37.8044)
    assert result.bounds.west == pytest.approx(-122.4194)
    assert result.bounds.east == pytest.approx(-122.2712)


@pytest.mark.parametrize("lat, lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.1), (0.0, -181.0)])
def test_coordinate_rejects_out_of_range_values(lat, lon):
    with pytest.raises(ValueError):
        Coordinate(latitude=lat, longitude=lon)
