"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Coordinate

EARTH_RADIUS_M = 6371000.0
METERS_PER_MILE = 1609.34


def haversine_meters(a: Coordinate, b: Coordinate) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def eta_minutes(duration_seconds: float) -> int:
    """Whole minutes for a drive duration, never reported as zero."""
    return max(1, math.floor(duration_seconds / 60 + 0.5))


def dedup_key(coordinate: Coordinate, places: int = 5) -> str:
    return f"{coordinate.lon:.{places}f},{coordinate.lat:.{places}f}"
