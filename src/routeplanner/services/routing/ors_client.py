"""HTTP client for interacting with OpenRouteService endpoints."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from ...config import Settings, settings as default_settings
from ...exceptions import MissingCredentialError
from ...models.domain import Coordinate
from ..upstream import fetch_json

logger = logging.getLogger(__name__)


class OrsClient:
    """Geocoding, matrix and optimization calls against one ORS account."""

    def __init__(self, http: httpx.AsyncClient, config: Settings | None = None) -> None:
        self.config = config or default_settings
        if not self.config.ors_api_key:
            raise MissingCredentialError(setting="ORS_API_KEY")
        self.api_key = self.config.ors_api_key
        self.base_url = self.config.ors_base_url.rstrip("/")
        self.http = http

    @property
    def _json_headers(self) -> dict[str, str]:
        return {"Authorization": self.api_key, "Content-Type": "application/json"}

    async def geocode_search(
        self,
        text: str,
        focus: Coordinate,
        radius_meters: int,
        size: int,
    ) -> list[dict]:
        """Return raw GeoJSON features for ``text`` inside a circle around ``focus``."""
        params = {
            "api_key": self.api_key,
            "text": text,
            "size": str(size),
            "boundary.country": self.config.geocode_country,
            "layers": self.config.geocode_layers,
            "focus.point.lat": str(focus.lat),
            "focus.point.lon": str(focus.lon),
            "boundary.circle.lat": str(focus.lat),
            "boundary.circle.lon": str(focus.lon),
            "boundary.circle.radius": str(radius_meters),
        }
        data = await fetch_json(
            self.http,
            "GET",
            f"{self.base_url}/geocode/search",
            operation="Geocode",
            timeout_seconds=self.config.geocode_timeout_seconds,
            params=params,
        )
        features = data.get("features") if isinstance(data, dict) else None
        return features if isinstance(features, list) else []

    async def matrix(self, origin: Coordinate, destinations: Sequence[Coordinate]) -> dict[str, Any]:
        """One-source matrix: ``origin`` to each destination, distances in meters."""
        body = {
            "locations": [origin.as_lon_lat(), *(point.as_lon_lat() for point in destinations)],
            "sources": [0],
            "destinations": list(range(1, len(destinations) + 1)),
            "metrics": ["distance", "duration"],
            "units": "m",
        }
        return await fetch_json(
            self.http,
            "POST",
            f"{self.base_url}/v2/matrix/{self.config.ors_profile}",
            operation="ORS matrix",
            timeout_seconds=self.config.matrix_timeout_seconds,
            json=body,
            headers=self._json_headers,
        )

    async def optimization(self, jobs: list[dict], vehicles: list[dict]) -> dict[str, Any]:
        return await fetch_json(
            self.http,
            "POST",
            f"{self.base_url}/optimization",
            operation="ORS optimization",
            timeout_seconds=self.config.solver_timeout_seconds,
            json={"jobs": jobs, "vehicles": vehicles},
            headers=self._json_headers,
        )
