"""
trip_stats.errors

Exception hierarchy for the trip statistics engine.

Per-day problems (a missing day file, a malformed payload) are recorded as
data on DayResult and never raised across the aggregation boundary. These
exceptions cover the conditions the caller has to deal with before or
instead of aggregating.
"""


class TripStatsError(RuntimeError):
    """Base class for all trip_stats errors."""


class MalformedRecordError(TripStatsError, ValueError):
    """A day payload could not be read as a GeoJSON track record."""


class NoDayDataError(TripStatsError):
    """Trip meta lists no day files, so there is nothing to aggregate."""


# ---- Loading errors ------------------------------

class DataLoadError(TripStatsError):
    """A structurally required file (trip index, meta) could not be loaded."""

class MetaLoadError(DataLoadError):
    """meta.json for a trip is missing or malformed."""
