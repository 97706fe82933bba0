"""Route planning request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StartCoords(_CamelModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class StopInput(_CamelModel):
    id: str = Field(..., description="Caller-assigned identifier, unique within the request.")
    query: str = Field(..., description="Free-text description such as a brand name or address.")


class OptimizeRouteRequest(_CamelModel):
    start_query: Optional[str] = Field(default=None, alias="startQuery", description="ZIP or address of the start.")
    start_coords: Optional[StartCoords] = Field(default=None, alias="startCoords")
    destination_id: Optional[str] = Field(default=None, alias="destinationId")
    preview_only: bool = Field(default=False, alias="previewOnly")
    stops: List[StopInput] = Field(default_factory=list)


class StartUsed(_CamelModel):
    lat: float
    lon: float
    source: Literal["gps", "zip"]


class ResolvedStopModel(_CamelModel):
    id: str
    lat: float
    lon: float
    picked_from: str = Field(..., alias="pickedFrom")


class PreviewStopModel(_CamelModel):
    id: str
    dist_mi: float
    eta_min: Optional[int] = None
    lat: float
    lon: float
    picked_from: str = Field(..., alias="pickedFrom")


class PreviewResponse(_CamelModel):
    preview: bool = True
    optimized: bool = False
    start_used: StartUsed = Field(..., alias="startUsed")
    suggested_destination_id: str = Field(..., alias="suggestedDestinationId")
    stops: List[PreviewStopModel]
    note: str


class OptimizedRouteResponse(_CamelModel):
    optimized: bool = True
    ordered_ids: List[str] = Field(..., alias="orderedIds")
    destination_id: str = Field(..., alias="destinationId")
    route_distance_m: Optional[float] = Field(default=None, alias="routeDistance_m")
    route_duration_s: Optional[float] = Field(default=None, alias="routeDuration_s")
    start_used: StartUsed = Field(..., alias="startUsed")
    resolved_stops: List[ResolvedStopModel] = Field(..., alias="resolvedStops")
    directions_url: Optional[str] = Field(default=None, alias="directionsUrl")
    apple_directions_url: Optional[str] = Field(default=None, alias="appleDirectionsUrl")
    note: str


class ErrorResponse(_CamelModel):
    optimized: bool = False
    note: str
