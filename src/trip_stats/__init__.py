"""Trip statistics engine for a static hiking journal."""

from .aggregator import aggregate
from .duration import elapsed
from .geometry import distance_between, track_distance, track_elevation_gain
from .models import DayResult, FetchFailure, FetchSuccess, TripMeta, TripStats, TripTotals
from .parser import extract_override_properties, extract_track, parse_track_record
from .resolver import resolve_day

__all__ = [
    "DayResult",
    "FetchFailure",
    "FetchSuccess",
    "TripMeta",
    "TripStats",
    "TripTotals",
    "aggregate",
    "distance_between",
    "elapsed",
    "extract_override_properties",
    "extract_track",
    "parse_track_record",
    "resolve_day",
    "track_distance",
    "track_elevation_gain",
]
