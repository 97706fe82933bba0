"""Route optimization endpoint."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, status

from ...schemas.routing import OptimizedRouteResponse, OptimizeRouteRequest, PreviewResponse
from ...services.routing.service import RoutePlanner
from ..dependencies import get_planner

router = APIRouter(tags=["routes"])


@router.post(
    "/optimize-route",
    response_model=Union[OptimizedRouteResponse, PreviewResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def optimize_route(
    payload: OptimizeRouteRequest,
    planner: RoutePlanner = Depends(get_planner),
) -> OptimizedRouteResponse | PreviewResponse:
    """Resolve stops and return either a distance preview or the optimized order.

    Failures are raised as ``RoutePlannerError`` subclasses and rendered by the
    application-level handlers as ``{"optimized": false, "note": ...}``.
    """
    return await planner.plan(payload)
