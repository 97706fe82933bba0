"""Driving distance and duration from the start to every resolved stop."""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from ...exceptions import RoutePlannerError, UpstreamFailureError
from ...models.domain import Coordinate, MatrixResult, ResolvedStop
from ..geospatial import eta_minutes
from .ors_client import OrsClient

logger = logging.getLogger(__name__)


def _finite_or_none(value: Any) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return None


def _first_row(data: Any, key: str) -> list | None:
    rows = data.get(key) if isinstance(data, dict) else None
    if isinstance(rows, list) and rows and isinstance(rows[0], list):
        return rows[0]
    return None


class DistanceMatrixClient:
    def __init__(self, ors: OrsClient) -> None:
        self.ors = ors

    async def matrix(self, origin: Coordinate, stops: Sequence[Coordinate]) -> MatrixResult:
        """One distance/duration per stop, in input order."""
        data = await self.ors.matrix(origin, stops)
        distances = _first_row(data, "distances")
        durations = _first_row(data, "durations")
        if not isinstance(distances, list) or not isinstance(durations, list):
            raise UpstreamFailureError("ORS matrix returned unexpected format", operation="ORS matrix")
        count = len(stops)
        return MatrixResult(
            distances_meters=[_finite_or_none(distances[i]) if i < len(distances) else None for i in range(count)],
            durations_seconds=[_finite_or_none(durations[i]) if i < len(durations) else None for i in range(count)],
        )

    async def enrich(self, origin: Coordinate, stops: list[ResolvedStop]) -> bool:
        """Attach driving distance and ETA to ``stops``; failures leave them untouched.

        Returns True when the matrix call succeeded.
        """
        if not stops:
            return False
        try:
            result = await self.matrix(origin, [stop.coordinate for stop in stops])
        except RoutePlannerError as exc:
            logger.warning(f"Skipping driving distances, falling back to straight-line: {exc.note}")
            return False

        for stop, meters, seconds in zip(stops, result.distances_meters, result.durations_seconds):
            stop.driving_meters = meters
            stop.eta_minutes = eta_minutes(seconds) if seconds is not None else None
        return True
