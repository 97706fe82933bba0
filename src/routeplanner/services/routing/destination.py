"""Pick the trip's final stop."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import ResolvedStop

logger = logging.getLogger(__name__)


def suggest_destination(stops: Sequence[ResolvedStop]) -> str:
    """Farthest stop by driving distance, else straight-line; first one wins ties."""
    if not stops:
        raise ValueError("Cannot choose a destination without stops.")
    suggested = stops[0]
    for stop in stops:
        if stop.ranking_meters > suggested.ranking_meters:
            suggested = stop
    return suggested.id


def select_destination(stops: Sequence[ResolvedStop], requested_id: str | None = None) -> str:
    """Caller's choice when it names a known stop, otherwise the suggestion."""
    requested = (requested_id or "").strip()
    if requested and any(stop.id == requested for stop in stops):
        return requested
    if requested:
        logger.warning(f"Requested destination '{requested}' is not among the stops; using suggestion")
    return suggest_destination(stops)
