"""Stop geocoding helpers."""

from .brands import Brand, BrandRegistry
from .cache import GeoCache
from .resolver import GeoResolver

__all__ = [
    "Brand",
    "BrandRegistry",
    "GeoCache",
    "GeoResolver",
]
