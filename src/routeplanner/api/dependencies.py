"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..config import settings
from ..services.geocoding.cache import GeoCache
from ..services.routing.service import RoutePlanner


@lru_cache()
def get_geo_cache() -> GeoCache:
    """Process-wide brand cache; survives planner re-creation."""
    return GeoCache(
        ttl_seconds=settings.places_cache_ttl_seconds,
        max_entries=settings.places_cache_max_entries,
    )


@lru_cache()
def get_planner() -> RoutePlanner:
    """Build the planner once. Raises ``MissingCredentialError`` (not cached) if a key is absent."""
    return RoutePlanner(config=settings, cache=get_geo_cache())
