"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import TransportMode


class RouteSubmission(BaseModel):
    source_latitude: float = Field(..., ge=-90, le=90)
    source_longitude: float = Field(..., ge=-180, le=180)
    destination_latitude: float = Field(..., ge=-90, le=90)
    destination_longitude: float = Field(..., ge=-180, le=180)
    mode: TransportMode = TransportMode.DRIVING


class RouteFormSubmission(BaseModel):
    """Raw text fields as typed into the coordinate form."""

    source_latitude: str = ""
    source_longitude: str = ""
    destination_latitude: str = ""
    destination_longitude: str = ""
    mode: TransportMode = TransportMode.DRIVING


class RouteSubmissionResponse(BaseModel):
    request_id: int
    mode: TransportMode
    profile: str
    status: str = "requesting"


class ViewportModel(BaseModel):
    south: float
    west: float
    north: float
    east: float


class RouteErrorModel(BaseModel):
    kind: str
    message: str


class RouteOverlayModel(BaseModel):
    request_id: int
    mode: TransportMode
    distance_text: str
    travel_time_text: str
    distance_meters: float
    travel_time_seconds: float
    coordinates: List[List[float]]


class RouteBoardResponse(BaseModel):
    state: str
    outstanding_request_id: Optional[int] = None
    distance_text: str = ""
    travel_time_text: str = ""
    viewport: Optional[ViewportModel] = None
    error: Optional[RouteErrorModel] = None
    overlays: List[RouteOverlayModel] = Field(default_factory=list)


class TransportModesResponse(BaseModel):
    profiles: Dict[TransportMode, str]
