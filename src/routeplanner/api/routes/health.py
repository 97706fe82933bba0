"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ..dependencies import get_geo_cache

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Report which upstream credentials are configured, without calling them."""
    ors_configured = bool(settings.ors_api_key)
    places_configured = bool(settings.google_places_api_key)
    return {
        "ors_configured": ors_configured,
        "places_configured": places_configured,
        "ready": ors_configured and places_configured,
        "brands": [brand.name for brand in settings.brands],
        "cache_entries": len(get_geo_cache()),
    }
