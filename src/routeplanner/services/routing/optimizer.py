"""Single-vehicle visiting order via the external optimization solver."""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from ...config import Settings, settings as default_settings
from ...exceptions import SolverFailureError
from ...models.domain import Coordinate, OptimizationJob, ResolvedStop, RouteResult, Vehicle
from .ors_client import OrsClient

logger = logging.getLogger(__name__)


def build_jobs(stops: Sequence[ResolvedStop], destination_id: str) -> list[OptimizationJob]:
    """Dense 1..N job ids for every non-destination stop, in input order."""
    remaining = [stop for stop in stops if stop.id != destination_id]
    return [
        OptimizationJob(job_id=index, stop_id=stop.id, coordinate=stop.coordinate)
        for index, stop in enumerate(remaining, start=1)
    ]


def _optional_metric(value: Any) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return None


def parse_solution(
    solution: Any,
    jobs: Sequence[OptimizationJob],
    destination_id: str,
) -> RouteResult:
    """Map solver steps back to stop ids, destination appended last."""
    routes = solution.get("routes") if isinstance(solution, dict) else None
    if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
        raise SolverFailureError("ORS optimization returned no route")
    route = routes[0]

    job_to_stop = {job.job_id: job.stop_id for job in jobs}
    ordered: list[str] = []
    for step in route.get("steps") or []:
        job_ref = step.get("job") if isinstance(step, dict) else None
        if not isinstance(job_ref, int) or isinstance(job_ref, bool):
            continue
        stop_id = job_to_stop.get(job_ref)
        if stop_id is None:
            logger.warning(f"Solver referenced unknown job {job_ref}; ignoring")
            continue
        ordered.append(stop_id)

    return RouteResult(
        ordered_stop_ids=[*ordered, destination_id],
        destination_id=destination_id,
        total_distance_meters=_optional_metric(route.get("distance")),
        total_duration_seconds=_optional_metric(route.get("duration")),
    )


class RouteOptimizer:
    def __init__(self, ors: OrsClient, config: Settings | None = None) -> None:
        self.ors = ors
        self.config = config or default_settings

    def _vehicle_payload(self, vehicle: Vehicle) -> dict:
        return {
            "id": vehicle.vehicle_id,
            "profile": self.config.ors_profile,
            "start": vehicle.start.as_lon_lat(),
            "end": vehicle.end.as_lon_lat(),
        }

    async def optimize(
        self,
        origin: Coordinate,
        stops: Sequence[ResolvedStop],
        destination_id: str,
    ) -> RouteResult:
        destination = next((stop for stop in stops if stop.id == destination_id), None)
        if destination is None:
            raise ValueError(f"Destination '{destination_id}' is not among the stops.")

        jobs = build_jobs(stops, destination_id)
        if not jobs:
            # the solver omits vehicles without tasks from its routes
            logger.info(f"Only the destination {destination_id} to visit; skipping solver")
            return RouteResult(ordered_stop_ids=[destination_id], destination_id=destination_id)

        vehicle = Vehicle(start=origin, end=destination.coordinate)
        payload_jobs = [{"id": job.job_id, "location": job.coordinate.as_lon_lat()} for job in jobs]

        solution = await self.ors.optimization(payload_jobs, [self._vehicle_payload(vehicle)])
        result = parse_solution(solution, jobs, destination_id)
        logger.info(
            f"Solver ordered {len(result.ordered_stop_ids) - 1}/{len(jobs)} jobs ending at {destination_id}"
        )
        return result
