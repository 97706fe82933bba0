"""Registry of chains that get brand-aware resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ...config import BrandSetting


@dataclass(frozen=True, slots=True)
class Brand:
    name: str
    keywords: tuple[str, ...]


class BrandRegistry:
    """Ordered keyword -> canonical brand lookup; the first match wins."""

    def __init__(self, brands: Iterable[Brand] = ()) -> None:
        self._brands: list[Brand] = []
        for brand in brands:
            self.register(brand.name, brand.keywords)

    @classmethod
    def from_settings(cls, entries: Sequence[BrandSetting]) -> "BrandRegistry":
        return cls(Brand(name=entry.name, keywords=tuple(entry.keywords)) for entry in entries)

    def register(self, name: str, keywords: Iterable[str]) -> None:
        normalized = tuple(keyword.strip().lower() for keyword in keywords if keyword.strip())
        if not normalized:
            raise ValueError(f"Brand '{name}' needs at least one keyword.")
        self._brands.append(Brand(name=name, keywords=normalized))

    def match(self, query: str) -> Brand | None:
        text = query.lower()
        for brand in self._brands:
            if any(keyword in text for keyword in brand.keywords):
                return brand
        return None

    def __len__(self) -> int:
        return len(self._brands)
