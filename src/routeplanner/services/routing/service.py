"""Route planning orchestration service."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import httpx

from ...config import Settings, settings as default_settings
from ...exceptions import InvalidInputError, SolverFailureError
from ...models.domain import Coordinate, Origin, ResolvedStop, RouteRequest, RouteResult, StopRequest
from ...schemas.routing import OptimizedRouteResponse, OptimizeRouteRequest, PreviewResponse
from ..geocoding.brands import BrandRegistry
from ..geocoding.cache import GeoCache
from ..geocoding.places_client import PlacesClient
from ..geocoding.resolver import GeoResolver
from ..geospatial import haversine_meters
from ..outputs.formatter import build_final_response, build_preview_response
from .destination import select_destination, suggest_destination
from .matrix_client import DistanceMatrixClient
from .optimizer import RouteOptimizer
from .ors_client import OrsClient

logger = logging.getLogger(__name__)


def validate_request(payload: OptimizeRouteRequest) -> RouteRequest:
    """Convert the HTTP payload into a domain request, rejecting bad input early."""
    if not payload.stops:
        raise InvalidInputError("No stops provided")

    stops: list[StopRequest] = []
    seen: set[str] = set()
    for stop in payload.stops:
        if not stop.id.strip():
            raise InvalidInputError("Every stop needs an id")
        if stop.id in seen:
            raise InvalidInputError(f"Duplicate stop id: {stop.id}")
        if not stop.query.strip():
            raise InvalidInputError(f"Stop '{stop.id}' has an empty query")
        seen.add(stop.id)
        stops.append(StopRequest(id=stop.id, query=stop.query))

    origin: Coordinate | None = None
    origin_query: str | None = None
    if payload.start_coords is not None:
        origin = Coordinate(lat=payload.start_coords.lat, lon=payload.start_coords.lon)
        if not origin.is_valid():
            raise InvalidInputError("Start coordinates are out of range")
    elif payload.start_query and payload.start_query.strip():
        origin_query = payload.start_query.strip()
    else:
        raise InvalidInputError("Missing start (coords or zip)")

    return RouteRequest(
        stops=stops,
        origin=origin,
        origin_query=origin_query,
        destination_id=(payload.destination_id or "").strip() or None,
        preview_only=payload.preview_only,
    )


async def _resolve_stop(resolver: GeoResolver, origin: Coordinate, stop: StopRequest) -> ResolvedStop:
    resolved = await resolver.resolve(stop.query, origin)
    return ResolvedStop(
        id=stop.id,
        query=stop.query,
        coordinate=resolved.coordinate,
        resolution_source=resolved.source,
        straight_line_meters=haversine_meters(origin, resolved.coordinate),
    )


async def resolve_stops(
    resolver: GeoResolver,
    origin: Coordinate,
    stops: Sequence[StopRequest],
) -> list[ResolvedStop]:
    """Resolve every stop concurrently; the first failure cancels the rest and propagates."""
    tasks = [asyncio.create_task(_resolve_stop(resolver, origin, stop)) for stop in stops]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _ensure_complete(result: RouteResult, stops: Sequence[ResolvedStop]) -> None:
    if sorted(result.ordered_stop_ids) != sorted(stop.id for stop in stops):
        missing = {stop.id for stop in stops} - set(result.ordered_stop_ids)
        logger.warning(f"Solver route is not a permutation of the stops (missing: {sorted(missing)})")
        raise SolverFailureError("ORS optimization did not return a route covering every stop")


class RoutePlanner:
    """Per-process entry point: one ``plan`` call per HTTP request.

    The brand cache is shared across requests; everything else lives for one call.
    """

    def __init__(
        self,
        config: Settings | None = None,
        cache: GeoCache | None = None,
        brands: BrandRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or default_settings
        self.config.require_credentials()
        self.cache = (
            cache
            if cache is not None
            else GeoCache(
                ttl_seconds=self.config.places_cache_ttl_seconds,
                max_entries=self.config.places_cache_max_entries,
            )
        )
        self.brands = brands if brands is not None else BrandRegistry.from_settings(self.config.brands)
        self.transport = transport

    async def _resolve_origin(self, request: RouteRequest, resolver: GeoResolver) -> Origin:
        if request.origin is not None:
            return Origin(coordinate=request.origin, source="gps")
        coordinate = await resolver.resolve_origin(request.origin_query or "")
        return Origin(coordinate=coordinate, source="zip")

    async def plan(self, payload: OptimizeRouteRequest) -> PreviewResponse | OptimizedRouteResponse:
        request = validate_request(payload)
        logger.info(
            f"Planning {len(request.stops)} stops ({'preview' if request.preview_only else 'final'})"
        )

        async with httpx.AsyncClient(transport=self.transport) as http:
            ors = OrsClient(http, self.config)
            places = PlacesClient(http, self.config)
            resolver = GeoResolver(ors, places, self.cache, self.brands, self.config)

            origin = await self._resolve_origin(request, resolver)
            logger.info(f"Origin from {origin.source}: {origin.coordinate.lat:.5f},{origin.coordinate.lon:.5f}")

            stops = await resolve_stops(resolver, origin.coordinate, request.stops)
            await DistanceMatrixClient(ors).enrich(origin.coordinate, stops)

            if request.preview_only:
                return build_preview_response(origin, stops, suggest_destination(stops))

            destination_id = select_destination(stops, request.destination_id)
            logger.info(f"Destination: {destination_id}")
            result = await RouteOptimizer(ors, self.config).optimize(origin.coordinate, stops, destination_id)
            _ensure_complete(result, stops)
            return build_final_response(origin, stops, result)
