"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from ...schemas.routing import (
    RouteBoardResponse,
    RouteFormSubmission,
    RouteSubmission,
    RouteSubmissionResponse,
    TransportModesResponse,
)
from ...services.export.geojson import overlays_to_feature_collection
from ...services.presentation.board import RouteBoard
from ...services.routing.coordinator import RoutePlanningCoordinator
from ...services.routing.errors import InvalidInputError, RouteError
from ...services.routing.input import parse_coordinate_fields
from ...services.routing.profiles import PROFILE_TABLE, profile_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


def _coordinator(request: Request) -> RoutePlanningCoordinator:
    return request.app.state.coordinator


def _board(request: Request) -> RouteBoard:
    return request.app.state.board


def _submission_response(coordinator: RoutePlanningCoordinator, route_request) -> RouteSubmissionResponse:
    return RouteSubmissionResponse(
        request_id=route_request.id,
        mode=route_request.mode,
        profile=profile_for(route_request.mode).value,
        status=coordinator.state.value,
    )


@router.post("", response_model=RouteSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
async def submit_route(payload: RouteSubmission, request: Request) -> RouteSubmissionResponse:
    coordinator = _coordinator(request)
    try:
        route_request = coordinator.submit_route(
            payload.source_latitude,
            payload.source_longitude,
            payload.destination_latitude,
            payload.destination_longitude,
            payload.mode,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error submitting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to submit route: {str(exc)}",
        ) from exc
    _board(request).focus_on(route_request.source)
    return _submission_response(coordinator, route_request)


@router.post("/form", response_model=RouteSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
async def submit_route_form(payload: RouteFormSubmission, request: Request) -> RouteSubmissionResponse:
    """Submit a route from raw form text; malformed input never reaches the coordinator."""
    try:
        source, destination = parse_coordinate_fields(
            payload.source_latitude,
            payload.source_longitude,
            payload.destination_latitude,
            payload.destination_longitude,
        )
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=RouteError.invalid_input().message,
        ) from exc

    coordinator = _coordinator(request)
    route_request = coordinator.new_request(source, destination, payload.mode)
    coordinator.submit(route_request)
    _board(request).focus_on(route_request.source)
    return _submission_response(coordinator, route_request)


@router.get("/current", response_model=RouteBoardResponse, status_code=status.HTTP_200_OK)
async def current_route(request: Request) -> RouteBoardResponse:
    coordinator = _coordinator(request)
    return RouteBoardResponse(
        state=coordinator.state.value,
        outstanding_request_id=coordinator.outstanding_id,
        **_board(request).snapshot(),
    )


@router.get("/current/geojson", status_code=status.HTTP_200_OK)
async def current_route_geojson(request: Request) -> dict:
    return overlays_to_feature_collection(_board(request).overlays)


@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
async def clear_current_route(request: Request) -> None:
    _board(request).clear_route()


@router.get("/modes", response_model=TransportModesResponse, status_code=status.HTTP_200_OK)
async def transport_modes() -> TransportModesResponse:
    return TransportModesResponse(profiles={mode: profile.value for mode, profile in PROFILE_TABLE.items()})
