"""Resolve free-text stop queries to coordinates near a reference point."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ...config import Settings, settings as default_settings
from ...exceptions import GeocodeNotFoundError
from ...models.domain import Coordinate, ResolvedCoordinate
from ..geospatial import dedup_key, haversine_meters
from ..routing.ors_client import OrsClient
from .brands import Brand, BrandRegistry
from .cache import GeoCache
from .places_client import PlacesClient

logger = logging.getLogger(__name__)

GENERIC_SOURCE = "ors"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _feature_coordinate(feature: Any) -> Coordinate | None:
    """GeoJSON features carry ``[lon, lat]``."""
    geometry = feature.get("geometry") if isinstance(feature, dict) else None
    coords = geometry.get("coordinates") if isinstance(geometry, dict) else None
    if not isinstance(coords, list) or len(coords) < 2:
        return None
    lon, lat = coords[0], coords[1]
    if not (_is_number(lon) and _is_number(lat)):
        return None
    return Coordinate(lat=float(lat), lon=float(lon))


def _place_coordinate(place: Any) -> Coordinate | None:
    if not isinstance(place, dict):
        return None
    geometry = place.get("geometry")
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(location, dict):
        return None
    lat, lon = location.get("lat"), location.get("lng")
    if not (_is_number(lat) and _is_number(lon)):
        return None
    return Coordinate(lat=float(lat), lon=float(lon))


def _closest(reference: Coordinate, candidates: Iterable[Coordinate]) -> Coordinate | None:
    best: Coordinate | None = None
    best_distance = float("inf")
    for candidate in candidates:
        distance = haversine_meters(reference, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


class GeoResolver:
    """Brand-aware (Places, cached) or generic (ORS radius passes) resolution."""

    def __init__(
        self,
        ors: OrsClient,
        places: PlacesClient,
        cache: GeoCache,
        brands: BrandRegistry | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or default_settings
        self.ors = ors
        self.places = places
        self.cache = cache
        self.brands = brands if brands is not None else BrandRegistry.from_settings(self.config.brands)

    async def resolve(self, query: str, reference: Coordinate) -> ResolvedCoordinate:
        brand = self.brands.match(query)
        if brand is not None:
            coordinate = await self.resolve_brand(brand, reference)
            return ResolvedCoordinate(coordinate=coordinate, source=f"google_places:{brand.name}")
        coordinate = await self.resolve_generic(query, reference)
        return ResolvedCoordinate(coordinate=coordinate, source=GENERIC_SOURCE)

    async def resolve_origin(self, query: str) -> Coordinate:
        """Geocode a free-text start (usually a ZIP) around the configured seed point."""
        seed = Coordinate(lat=self.config.start_seed_lat, lon=self.config.start_seed_lon)
        return await self.resolve_generic(f"{query.strip()}{self.config.start_query_suffix}", seed)

    async def resolve_brand(self, brand: Brand, reference: Coordinate) -> Coordinate:
        cached = self.cache.get(brand.name, reference)
        if cached is not None:
            logger.debug(f"Cache hit for {brand.name} near {reference.lat:.2f},{reference.lon:.2f}")
            return cached

        target = brand.name.lower()

        def qualifying(results: list[dict]) -> list[Coordinate]:
            matches = []
            for place in results:
                if target not in str(place.get("name") or "").lower():
                    continue
                coordinate = _place_coordinate(place)
                if coordinate is not None:
                    matches.append(coordinate)
            return matches

        nearest, _ = await self.places.nearby_by_distance(reference, brand.name)
        matches = qualifying(nearest)
        if matches:
            picked = matches[0]
        else:
            logger.debug(f"No ranked match for {brand.name}; trying radius search")
            within, status = await self.places.nearby_within_radius(
                reference, brand.name, self.config.places_radius_meters
            )
            picked = _closest(reference, qualifying(within))
            if picked is None:
                raise GeocodeNotFoundError(
                    f'Places returned no strict match for "{brand.name}" (status={status})',
                    query=brand.name,
                )

        self.cache.put(brand.name, reference, picked)
        return picked

    async def resolve_generic(self, query: str, reference: Coordinate) -> Coordinate:
        candidates: list[Coordinate] = []
        seen: set[str] = set()

        for radius, size in self.config.geocode_passes:
            features = await self.ors.geocode_search(query, reference, radius, size)
            for feature in features:
                coordinate = _feature_coordinate(feature)
                if coordinate is None:
                    continue
                key = dedup_key(coordinate)
                if key in seen:
                    continue
                seen.add(key)
                candidates.append(coordinate)
            logger.debug(f"Geocode pass r={radius}m for '{query}': {len(candidates)} unique candidates")
            if len(candidates) >= self.config.geocode_min_candidates:
                break

        best = _closest(reference, candidates)
        if best is None:
            raise GeocodeNotFoundError(query=query)
        return best
