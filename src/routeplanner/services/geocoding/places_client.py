"""HTTP client for the Google Places nearby search."""

from __future__ import annotations

import httpx

from ...config import Settings, settings as default_settings
from ...exceptions import MissingCredentialError, UpstreamFailureError
from ...models.domain import Coordinate
from ..upstream import fetch_json

# anything else (REQUEST_DENIED, OVER_QUERY_LIMIT, INVALID_REQUEST...) is an upstream failure
SEARCH_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


class PlacesClient:
    def __init__(self, http: httpx.AsyncClient, config: Settings | None = None) -> None:
        self.config = config or default_settings
        if not self.config.google_places_api_key:
            raise MissingCredentialError(setting="GOOGLE_PLACES_API_KEY")
        self.api_key = self.config.google_places_api_key
        self.base_url = self.config.places_base_url.rstrip("/")
        self.http = http

    async def _nearby(self, params: dict[str, str], operation: str) -> tuple[list[dict], str]:
        data = await fetch_json(
            self.http,
            "GET",
            f"{self.base_url}/nearbysearch/json",
            operation=operation,
            timeout_seconds=self.config.places_timeout_seconds,
            params={"key": self.api_key, **params},
        )
        if not isinstance(data, dict):
            return [], "unknown"
        results = data.get("results")
        status = str(data["status"]) if data.get("status") else "unknown"
        if status != "unknown" and status not in SEARCH_STATUSES:
            detail = data.get("error_message")
            message = f"{operation} failed ({status})"
            raise UpstreamFailureError(f"{message}: {detail}" if detail else message, operation=operation)
        return (results if isinstance(results, list) else []), status

    async def nearby_by_distance(self, location: Coordinate, name: str) -> tuple[list[dict], str]:
        """Places named ``name`` ranked by distance from ``location``."""
        return await self._nearby(
            {"location": f"{location.lat},{location.lon}", "rankby": "distance", "name": name},
            "Places NearbySearch",
        )

    async def nearby_within_radius(
        self, location: Coordinate, name: str, radius_meters: int
    ) -> tuple[list[dict], str]:
        return await self._nearby(
            {"location": f"{location.lat},{location.lon}", "radius": str(radius_meters), "name": name},
            "Places NearbySearch (radius)",
        )
