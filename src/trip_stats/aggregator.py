"""Trip-level aggregation over independently fetched day payloads."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .duration import elapsed
from .errors import MalformedRecordError, NoDayDataError
from .geometry import round_tenth, round_to_ten
from .models import (
    DayResult,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    TripMeta,
    TripStats,
    TripTotals,
)
from .parser import RECORD_TYPES, parse_track_record
from .resolver import resolve_day

logger = logging.getLogger(__name__)


def failed_day(index: int, reason: str, filename: str | None = None) -> DayResult:
    """A DayResult for a day whose payload could not be used."""
    return DayResult(
        index=index,
        day_number=index + 1,
        success=False,
        distance_miles=0,
        elevation_gain_ft=0,
        filename=filename,
        error=reason,
    )


def resolve_outcome(index: int, outcome: FetchOutcome, filename: str | None = None) -> DayResult:
    """Turn one fetch outcome into a DayResult; never raises for bad payloads."""
    if isinstance(outcome, FetchFailure):
        return failed_day(index, outcome.reason, filename)
    if not isinstance(outcome, FetchSuccess):
        raise TypeError(f"Unsupported fetch outcome: {type(outcome).__name__}")

    payload = outcome.payload
    if not isinstance(payload, RECORD_TYPES):
        try:
            payload = parse_track_record(payload)
        except MalformedRecordError as e:
            logger.warning("Day %d (%s): malformed payload: %s", index + 1, filename or "?", e)
            return failed_day(index, f"malformed payload: {e}", filename)
    return resolve_day(payload, index, filename)


def compute_totals(meta: TripMeta, days: Sequence[DayResult]) -> TripTotals:
    """Sum successful days only; failed days contribute nothing.

    Per-day values are already rounded, so the trip elevation is rounded a
    second time over their sum.
    """
    ok_days = [d for d in days if d.success]
    distance = sum(d.distance_miles for d in ok_days)
    elevation = sum(d.elevation_gain_ft for d in ok_days)
    return TripTotals(
        distance_miles=round_tenth(distance),
        elevation_gain_ft=round_to_ten(elevation),
        days=len(ok_days),
        duration=elapsed(meta.start_date, meta.start_time, meta.end_date, meta.end_time),
    )


def aggregate(meta: TripMeta, outcomes: Sequence[FetchOutcome]) -> TripStats:
    """Resolve every day of a trip and fold the results into trip totals.

    ``outcomes`` holds one fetch outcome per entry of ``meta.days``, in the
    same order. A failed or malformed day becomes a failure row and the rest
    of the trip is still totalled.

    Raises:
        NoDayDataError: if ``meta.days`` is empty.
        ValueError: if the outcome count does not match the day list.
    """
    if not meta.days:
        raise NoDayDataError("No day files listed in meta.json.")
    if len(outcomes) != len(meta.days):
        raise ValueError(f"Expected {len(meta.days)} day outcomes, got {len(outcomes)}")

    days = [
        resolve_outcome(index, outcome, filename)
        for index, (filename, outcome) in enumerate(zip(meta.days, outcomes))
    ]
    totals = compute_totals(meta, days)
    logger.debug(
        "Aggregated %d/%d days: %s mi, %s ft",
        totals.days, len(days), totals.distance_miles, totals.elevation_gain_ft,
    )
    return TripStats(totals=totals, days=days)
