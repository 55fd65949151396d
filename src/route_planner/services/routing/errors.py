"""Error taxonomy for route planning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

INVALID_INPUT_MESSAGE = "Please enter valid coordinates."
NO_ROUTE_FOUND_MESSAGE = "No route found between the given coordinates."


class RouteErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    PROVIDER_FAILURE = "provider_failure"
    NO_ROUTE_FOUND = "no_route_found"
    # Internal discard condition, never shown to the user.
    SUPERSEDED = "superseded"


@dataclass(frozen=True, slots=True)
class RouteError:
    """User-visible failure notice handed to the presentation sink."""

    kind: RouteErrorKind
    message: str

    @classmethod
    def provider_failure(cls, message: str) -> RouteError:
        return cls(kind=RouteErrorKind.PROVIDER_FAILURE, message=message)

    @classmethod
    def no_route_found(cls) -> RouteError:
        return cls(kind=RouteErrorKind.NO_ROUTE_FOUND, message=NO_ROUTE_FOUND_MESSAGE)

    @classmethod
    def invalid_input(cls) -> RouteError:
        return cls(kind=RouteErrorKind.INVALID_INPUT, message=INVALID_INPUT_MESSAGE)


class ProviderError(Exception):
    """Raised by a directions provider client on transport or service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ValueError):
    """Raised when coordinate text cannot be turned into valid coordinates."""

    def __init__(self, message: str = INVALID_INPUT_MESSAGE) -> None:
        super().__init__(message)
        self.message = message
