"""Compose preview and final response payloads."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Origin, ResolvedStop, RouteResult
from ...schemas.routing import (
    OptimizedRouteResponse,
    PreviewResponse,
    PreviewStopModel,
    ResolvedStopModel,
    StartUsed,
)
from ..geospatial import meters_to_miles
from .navigation import build_directions_url

PREVIEW_NOTE = "Preview distances + ETA computed"
FINAL_NOTE = "Optimized route"


def _start_used(origin: Origin) -> StartUsed:
    return StartUsed(lat=origin.coordinate.lat, lon=origin.coordinate.lon, source=origin.source)


def build_preview_response(
    origin: Origin,
    stops: Sequence[ResolvedStop],
    suggested_destination_id: str,
) -> PreviewResponse:
    return PreviewResponse(
        start_used=_start_used(origin),
        suggested_destination_id=suggested_destination_id,
        stops=[
            PreviewStopModel(
                id=stop.id,
                dist_mi=meters_to_miles(stop.ranking_meters),
                eta_min=stop.eta_minutes,
                lat=stop.coordinate.lat,
                lon=stop.coordinate.lon,
                picked_from=stop.resolution_source,
            )
            for stop in stops
        ],
        note=PREVIEW_NOTE,
    )


def build_final_response(
    origin: Origin,
    stops: Sequence[ResolvedStop],
    result: RouteResult,
) -> OptimizedRouteResponse:
    by_id = {stop.id: stop for stop in stops}
    ordered_points = [by_id[stop_id].coordinate for stop_id in result.ordered_stop_ids]
    return OptimizedRouteResponse(
        ordered_ids=list(result.ordered_stop_ids),
        destination_id=result.destination_id,
        route_distance_m=result.total_distance_meters,
        route_duration_s=result.total_duration_seconds,
        start_used=_start_used(origin),
        resolved_stops=[
            ResolvedStopModel(
                id=stop.id,
                lat=stop.coordinate.lat,
                lon=stop.coordinate.lon,
                picked_from=stop.resolution_source,
            )
            for stop in stops
        ],
        directions_url=build_directions_url(origin.coordinate, ordered_points),
        apple_directions_url=build_directions_url(origin.coordinate, ordered_points, provider="apple"),
        note=FINAL_NOTE,
    )
