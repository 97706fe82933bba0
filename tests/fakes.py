"""In-memory stand-ins for the ORS and Google Places HTTP APIs."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx

from routeplanner.config import Settings


def make_settings(**overrides: Any) -> Settings:
    values = {"ors_api_key": "ors-test-key", "google_places_api_key": "places-test-key", **overrides}
    return Settings(_env_file=None, **values)


def feature(lat: float, lon: float, label: str = "") -> dict:
    return {"type": "Feature", "properties": {"label": label}, "geometry": {"coordinates": [lon, lat]}}


def place(name: str, lat: float, lon: float) -> dict:
    return {"name": name, "geometry": {"location": {"lat": lat, "lng": lon}}}


def reverse_order_solver(body: dict) -> dict:
    """Visit the jobs in reverse submission order."""
    jobs = body["jobs"]
    steps = [{"type": "start"}]
    steps += [{"type": "job", "job": job["id"]} for job in reversed(jobs)]
    steps.append({"type": "end"})
    return {"code": 0, "routes": [{"vehicle": 1, "steps": steps, "distance": 12345.0, "duration": 678.0}]}


class FakeUpstream:
    """Routes requests by URL path; records every request it receives."""

    def __init__(self) -> None:
        # text -> radius meters -> GeoJSON features
        self.geocode: dict[str, dict[int, list[dict]]] = {}
        self.geocode_status = 200
        self.places_ranked: dict[str, list[dict]] = {}
        self.places_radius: dict[str, list[dict]] = {}
        # overrides the Places body status, e.g. "REQUEST_DENIED"
        self.places_status: str | None = None
        self.matrix: dict | None = None
        self.matrix_status = 200
        self.matrix_delay = 0.0
        self.optimization: Callable[[dict], dict] | dict = reverse_order_solver
        self.optimization_status = 200
        self.requests: list[httpx.Request] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def count(self, fragment: str) -> int:
        return sum(1 for request in self.requests if fragment in request.url.path)

    def json_bodies(self, fragment: str) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if fragment in r.url.path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params

        if path.endswith("/geocode/search"):
            if self.geocode_status != 200:
                return httpx.Response(self.geocode_status, text="geocoder unavailable")
            radius = int(params["boundary.circle.radius"])
            features = self.geocode.get(params["text"], {}).get(radius, [])
            return httpx.Response(200, json={"features": features})

        if path.endswith("/nearbysearch/json"):
            if self.places_status:
                return httpx.Response(
                    200, json={"results": [], "status": self.places_status, "error_message": "key rejected"}
                )
            name = params["name"]
            source = self.places_ranked if "rankby" in params else self.places_radius
            results = source.get(name, [])
            return httpx.Response(200, json={"results": results, "status": "OK" if results else "ZERO_RESULTS"})

        if "/v2/matrix/" in path:
            if self.matrix_delay:
                await asyncio.sleep(self.matrix_delay)
            if self.matrix_status != 200:
                return httpx.Response(self.matrix_status, text="matrix unavailable")
            if self.matrix is not None:
                return httpx.Response(200, json=self.matrix)
            body = json.loads(request.content)
            count = len(body["destinations"])
            return httpx.Response(
                200,
                json={
                    "distances": [[1000.0 * (i + 1) for i in range(count)]],
                    "durations": [[90.0 * (i + 1) for i in range(count)]],
                },
            )

        if path.endswith("/optimization"):
            if self.optimization_status != 200:
                return httpx.Response(self.optimization_status, text="solver unavailable")
            body = json.loads(request.content)
            solution = self.optimization(body) if callable(self.optimization) else self.optimization
            return httpx.Response(200, json=solution)

        return httpx.Response(404, text=f"unexpected path {path}")
