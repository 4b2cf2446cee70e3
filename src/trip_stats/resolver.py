"""Per-day stats resolution: manual override if present, else computed from the track."""

from __future__ import annotations

from typing import Callable, TypeVar

from .geometry import track_distance, track_elevation_gain
from .models import DayResult, TrackRecord
from .parser import extract_override_properties, extract_track

T = TypeVar("T")


def coalesce(override: T | None, compute: Callable[[], T]) -> T:
    """Return ``override`` verbatim unless it is None, otherwise ``compute()``."""
    return override if override is not None else compute()


def resolve_day(record: TrackRecord, index: int, filename: str | None = None) -> DayResult:
    """Resolve distance, elevation gain and day number for one parsed day record.

    ``index`` is the 0-based position in the trip's day list; the day number
    falls back to ``index + 1`` when the properties carry no ``day``.
    """
    track = extract_track(record)
    props = extract_override_properties(record)

    day = props.day if props else None
    distance = props.distance_miles if props else None
    elevation = props.elevation_gain_ft if props else None

    return DayResult(
        index=index,
        day_number=coalesce(day, lambda: index + 1),
        success=True,
        distance_miles=coalesce(distance, lambda: track_distance(track)),
        elevation_gain_ft=coalesce(elevation, lambda: track_elevation_gain(track)),
        filename=filename,
    )
