"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import MissingCredentialError


class BrandSetting(BaseModel):
    """A chain name plus the lower-case keywords that identify it in free text."""

    name: str
    keywords: tuple[str, ...]


DEFAULT_BRANDS: tuple[BrandSetting, ...] = (
    BrandSetting(name="Starbucks", keywords=("starbucks",)),
    BrandSetting(name="Chipotle", keywords=("chipotle",)),
    BrandSetting(name="Nothing Bundt Cakes", keywords=("nothing bundt",)),
)


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEPLANNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Stop Route Planner API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    ors_api_key: Optional[str] = Field(
        default=None,
        description="OpenRouteService key used for geocoding, matrix and optimization calls.",
    )
    google_places_api_key: Optional[str] = Field(
        default=None,
        description="Google Places key used for brand-aware nearby searches.",
    )
    ors_base_url: str = "https://api.openrouteservice.org"
    places_base_url: str = "https://maps.googleapis.com/maps/api/place"
    ors_profile: str = Field(default="driving-car", description="ORS routing profile.")

    geocode_timeout_seconds: float = Field(default=9.0, gt=0.0)
    places_timeout_seconds: float = Field(default=8.0, gt=0.0)
    matrix_timeout_seconds: float = Field(default=9.0, gt=0.0)
    solver_timeout_seconds: float = Field(default=20.0, gt=0.0)

    geocode_passes: tuple[tuple[int, int], ...] = Field(
        default=((8000, 35), (20000, 35), (50000, 35)),
        description="(radius meters, result size) per generic geocoding pass.",
    )
    geocode_min_candidates: int = Field(default=15, ge=1)
    geocode_country: str = "US"
    geocode_layers: str = "venue,address"
    places_radius_meters: int = Field(default=50000, ge=1)
    places_cache_ttl_seconds: float = Field(default=24 * 60 * 60, gt=0.0)
    places_cache_max_entries: int = Field(default=4096, ge=1)

    start_seed_lat: float = Field(default=36.1699, ge=-90.0, le=90.0)
    start_seed_lon: float = Field(default=-115.1398, ge=-180.0, le=180.0)
    start_query_suffix: str = Field(
        default=" United States",
        description="Appended to a free-text start before it is geocoded.",
    )

    brands: tuple[BrandSetting, ...] = Field(default=DEFAULT_BRANDS)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("brands", mode="before")
    @classmethod
    def _parse_brands(cls, value: Any) -> Any:
        """Accept the brand registry as a JSON document from the environment."""
        if isinstance(value, str):
            value = json.loads(value)
        if isinstance(value, list):
            return tuple(value)
        return value

    def require_credentials(self) -> None:
        """Raise if a key needed for outbound calls is missing."""
        if not self.ors_api_key:
            raise MissingCredentialError(setting="ORS_API_KEY")
        if not self.google_places_api_key:
            raise MissingCredentialError(setting="GOOGLE_PLACES_API_KEY")


settings = Settings()
