"""Domain models for stops, coordinates and solver inputs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 point in degrees."""

    lat: float
    lon: float

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat)
            and math.isfinite(self.lon)
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lon <= 180.0
        )

    def as_lon_lat(self) -> list[float]:
        return [self.lon, self.lat]


@dataclass(slots=True)
class StopRequest:
    id: str
    query: str


@dataclass(frozen=True, slots=True)
class ResolvedCoordinate:
    coordinate: Coordinate
    source: str


@dataclass(slots=True)
class ResolvedStop:
    """A stop after geocoding, optionally enriched with driving distance and ETA."""

    id: str
    query: str
    coordinate: Coordinate
    resolution_source: str
    straight_line_meters: float
    driving_meters: Optional[float] = None
    eta_minutes: Optional[int] = None

    @property
    def ranking_meters(self) -> float:
        if self.driving_meters is not None:
            return self.driving_meters
        return self.straight_line_meters


@dataclass(frozen=True, slots=True)
class Origin:
    coordinate: Coordinate
    source: str  # "gps" or "zip"


@dataclass(slots=True)
class OptimizationJob:
    job_id: int
    stop_id: str
    coordinate: Coordinate


@dataclass(slots=True)
class Vehicle:
    start: Coordinate
    end: Coordinate
    vehicle_id: int = 1


@dataclass(slots=True)
class MatrixResult:
    distances_meters: list[Optional[float]]
    durations_seconds: list[Optional[float]]


@dataclass(slots=True)
class RouteResult:
    ordered_stop_ids: list[str]
    destination_id: str
    total_distance_meters: Optional[float] = None
    total_duration_seconds: Optional[float] = None


@dataclass(slots=True)
class RouteRequest:
    stops: list[StopRequest]
    origin: Optional[Coordinate] = None
    origin_query: Optional[str] = None
    destination_id: Optional[str] = None
    preview_only: bool = False
