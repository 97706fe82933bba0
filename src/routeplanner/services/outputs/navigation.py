"""Turn-by-turn hand-off links for an optimized stop order."""

from __future__ import annotations

from typing import Literal, Sequence
from urllib.parse import quote

from ...models.domain import Coordinate

GOOGLE_DIRECTIONS_URL = "https://www.google.com/maps/dir/?api=1"
APPLE_MAPS_URL = "https://maps.apple.com/"


def _point(coordinate: Coordinate) -> str:
    return f"{coordinate.lat},{coordinate.lon}"


def build_directions_url(
    origin: Coordinate,
    ordered_points: Sequence[Coordinate],
    provider: Literal["google", "apple"] = "google",
) -> str:
    """Driving directions from ``origin`` through ``ordered_points``; the last point is the destination."""
    if not ordered_points:
        raise ValueError("At least one stop is required to build directions.")

    destination = _point(ordered_points[-1])
    waypoints = [_point(point) for point in ordered_points[:-1]]

    if provider == "apple":
        daddr = " to: ".join([*waypoints, destination])
        return f"{APPLE_MAPS_URL}?saddr={quote(_point(origin), safe='')}&daddr={quote(daddr, safe='')}"

    url = (
        f"{GOOGLE_DIRECTIONS_URL}"
        f"&origin={quote(_point(origin), safe='')}"
        f"&destination={quote(destination, safe='')}"
    )
    if waypoints:
        url += f"&waypoints={quote('|'.join(waypoints), safe='')}"
    return url + "&travelmode=driving"
