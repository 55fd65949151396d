import pytest

from route_planner.models.domain import Coordinate
from route_planner.services.routing.errors import INVALID_INPUT_MESSAGE, InvalidInputError
from route_planner.services.routing.input import parse_coordinate_fields


def test_parses_trimmed_text_fields():
    source, destination = parse_coordinate_fields(" 37.7749", "-122.4194 ", "34.0522", "-118.2437")

    assert source == Coordinate(37.7749, -122.4194)
    assert destination == Coordinate(34.0522, -118.2437)


@pytest.mark.parametrize(
    "fields",
    [
        ("", "-122.4194", "34.0522", "-118.2437"),
        ("abc", "-122.4194", "34.0522", "-118.2437"),
        ("37.7749", None, "34.0522", "-118.2437"),
        ("37.7749", "-122.4194", "nan", "-118.2437"),
        ("95", "-122.4194", "34.0522", "-118.2437"),
        ("37.7749", "-122.4194", "34.0522", "-200"),
    ],
)
def test_invalid_fields_raise_invalid_input(fields):
    with pytest.raises(InvalidInputError) as excinfo:
        parse_coordinate_fields(*fields)
    assert excinfo.value.message == INVALID_INPUT_MESSAGE
