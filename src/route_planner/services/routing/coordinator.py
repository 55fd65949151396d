"""Route planning coordinator.

Turns route requests into provider calls and publishes display-ready results.
Every request is tagged with a monotonically increasing id; only the response
for the most recently submitted id may reach the presentation sink, regardless
of the order in which provider responses arrive.

All state lives on a single asyncio event loop. Completions produced on other
threads must come in through ``handle_response_threadsafe``.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from enum import Enum
from typing import Protocol, Sequence, Union

from ...models.domain import Coordinate, RouteCandidate, RouteRequest, RouteResult, TransportMode
from ..geospatial import polyline_bounds
from .conversion import adjusted_travel_time, format_distance, format_travel_time
from .errors import ProviderError, RouteError
from .osrm_client import DirectionsProvider
from .profiles import profile_for

logger = logging.getLogger(__name__)

ProviderOutcome = Union[Sequence[RouteCandidate], ProviderError]


class RouteSink(Protocol):
    def clear_route(self) -> None:
        ...

    def show_route(self, result: RouteResult) -> None:
        ...

    def report_error(self, error: RouteError) -> None:
        ...


class CoordinatorState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"


class RoutePlanningCoordinator:
    def __init__(
        self,
        provider: DirectionsProvider,
        sink: RouteSink,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        cancel_superseded: bool = True,
        show_alternates: bool = True,
    ) -> None:
        self.provider = provider
        self.sink = sink
        self.cancel_superseded = cancel_superseded
        self.show_alternates = show_alternates
        self._loop = loop
        self._ids = itertools.count(1)
        self._outstanding: RouteRequest | None = None
        self._task: asyncio.Task | None = None
        self.state = CoordinatorState.IDLE

    @property
    def outstanding_id(self) -> int | None:
        return self._outstanding.id if self._outstanding else None

    def new_request(self, source: Coordinate, destination: Coordinate, mode: TransportMode) -> RouteRequest:
        return RouteRequest(
            id=next(self._ids),
            source=source,
            destination=destination,
            mode=TransportMode(mode),
        )

    def submit_route(
        self,
        source_lat: float,
        source_lon: float,
        dest_lat: float,
        dest_lon: float,
        mode: TransportMode,
    ) -> RouteRequest:
        request = self.new_request(
            Coordinate(latitude=source_lat, longitude=source_lon),
            Coordinate(latitude=dest_lat, longitude=dest_lon),
            mode,
        )
        self.submit(request)
        return request

    def submit(self, request: RouteRequest) -> None:
        """Start routing ``request``, superseding whatever was in flight.

        Must be called from the owning event loop. Returns immediately.
        """
        current_id = self.outstanding_id
        if current_id is not None and request.id <= current_id:
            raise ValueError(f"Request id {request.id} is not newer than outstanding id {current_id}.")
        loop = self._owning_loop()

        previous = self._task
        if previous is not None and not previous.done():
            logger.debug(f"Request {current_id} superseded by {request.id}")
            if self.cancel_superseded:
                previous.cancel()

        self._outstanding = request
        self.state = CoordinatorState.REQUESTING
        self.sink.clear_route()

        profile = profile_for(request.mode)
        logger.info(
            f"Routing request {request.id}: {request.source.as_tuple()} -> "
            f"{request.destination.as_tuple()} ({request.mode.value} via {profile.value})"
        )
        self._task = loop.create_task(self._run(request))
        self._task.add_done_callback(_log_task_failure)

    async def _run(self, request: RouteRequest) -> None:
        try:
            outcome: ProviderOutcome = await self.provider.compute_route(
                request.source, request.destination, profile_for(request.mode)
            )
        except asyncio.CancelledError:
            logger.debug(f"Provider call for request {request.id} cancelled")
            raise
        except ProviderError as exc:
            outcome = exc
        except Exception as exc:
            logger.exception(f"Unexpected provider error for request {request.id}: {exc}")
            outcome = ProviderError(str(exc) or exc.__class__.__name__)
        self.on_provider_response(request.id, outcome)

    def handle_response_threadsafe(self, request_id: int, outcome: ProviderOutcome) -> None:
        """Redispatch a completion from a worker thread onto the owning loop."""
        self._owning_loop().call_soon_threadsafe(self.on_provider_response, request_id, outcome)

    def on_provider_response(self, request_id: int, outcome: ProviderOutcome) -> None:
        request = self._outstanding
        if request is None or request_id != request.id:
            logger.debug(f"Discarding stale response for request {request_id} (outstanding: {self.outstanding_id})")
            return
        if self.state is not CoordinatorState.REQUESTING:
            # request already settled; one accepted response per request
            logger.debug(f"Discarding duplicate response for settled request {request_id}")
            return
        self.state = CoordinatorState.IDLE

        if isinstance(outcome, ProviderError):
            logger.warning(f"Provider failure for request {request_id}: {outcome.message}")
            self.sink.report_error(RouteError.provider_failure(outcome.message))
            return
        if not outcome:
            logger.info(f"No route found for request {request_id}")
            self.sink.report_error(RouteError.no_route_found())
            return

        candidates = list(outcome) if self.show_alternates else [outcome[0]]
        for candidate in candidates:
            self.sink.show_route(build_result(request_id, candidate, request.mode))

    async def aclose(self) -> None:
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.state = CoordinatorState.IDLE

    def _owning_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Route task failed: {exc!r}")


def build_result(request_id: int, candidate: RouteCandidate, mode: TransportMode) -> RouteResult:
    travel_time_seconds = adjusted_travel_time(candidate.nominal_travel_time_seconds, mode)
    return RouteResult(
        request_id=request_id,
        polyline=tuple(candidate.polyline),
        distance_text=format_distance(candidate.distance_meters),
        travel_time_text=format_travel_time(travel_time_seconds),
        mode=mode,
        distance_meters=candidate.distance_meters,
        travel_time_seconds=travel_time_seconds,
        bounds=polyline_bounds(candidate.polyline),
    )
