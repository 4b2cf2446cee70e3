"""Load trip data from a static data root and feed it to the aggregator.

Layout::

    <root>/trips.json                 [{"trip_id": ..., "page_url": ...}, ...]
    <root>/<trip_id>/meta.json        title, dates, ordered list of day files
    <root>/<trip_id>/<day file>       GeoJSON track for one day
    <root>/<trip_id>/gear.json        optional gear sheet

Day files are fetched concurrently; each fetch succeeds or fails on its own.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .aggregator import aggregate
from .duration import elapsed
from .errors import DataLoadError, MetaLoadError, NoDayDataError
from .formatting import date_range
from .models import (
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    GearList,
    TripCard,
    TripIndexEntry,
    TripMeta,
    TripStats,
)

logger = logging.getLogger(__name__)

TRIP_INDEX = "trips.json"
META_FILE = "meta.json"
GEAR_FILE = "gear.json"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _read_json(path: Path) -> FetchOutcome:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return FetchFailure(reason=f"not found: {path.name}")
    except OSError as e:
        return FetchFailure(reason=f"unreadable: {path.name} ({e.strerror})")
    except UnicodeDecodeError:
        return FetchFailure(reason=f"malformed payload: {path.name} is not UTF-8 text")
    try:
        return FetchSuccess(payload=json.loads(text, parse_constant=_reject_constant))
    except json.JSONDecodeError as e:
        return FetchFailure(reason=f"malformed payload: {e.msg} (line {e.lineno})")
    except ValueError as e:
        return FetchFailure(reason=f"malformed payload: {e}")


def trip_dir(root: str | Path, trip_id: str) -> Path:
    """Directory holding a trip's files; ``trip_id`` must name a folder directly under ``root``."""
    if not _is_plain_name(trip_id):
        raise MetaLoadError(f"Invalid trip id: {trip_id!r}")
    return Path(root) / trip_id


def _is_plain_name(name: str) -> bool:
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


async def fetch_json(path: str | Path) -> FetchOutcome:
    """Read and decode one JSON file without blocking the event loop."""
    return await asyncio.to_thread(_read_json, Path(path))


async def load_trip_index(root: str | Path) -> list[TripIndexEntry]:
    """Read trips.json.

    Raises:
        DataLoadError: if the index is missing, malformed or not a list.
    """
    outcome = await fetch_json(Path(root) / TRIP_INDEX)
    if isinstance(outcome, FetchFailure):
        raise DataLoadError(f"Could not load {TRIP_INDEX} ({outcome.reason})")
    if not isinstance(outcome.payload, list):
        raise DataLoadError(f"{TRIP_INDEX} must be a list of trips")
    try:
        return [TripIndexEntry.model_validate(row) for row in outcome.payload]
    except ValidationError as e:
        raise DataLoadError(f"Invalid entry in {TRIP_INDEX}: {e.errors()[0]['msg']}") from e


async def load_meta(root: str | Path, trip_id: str) -> TripMeta:
    """Read a trip's meta.json.

    Raises:
        MetaLoadError: if meta.json is missing or malformed.
    """
    outcome = await fetch_json(trip_dir(root, trip_id) / META_FILE)
    if isinstance(outcome, FetchFailure):
        logger.warning("Trip %s: could not load %s: %s", trip_id, META_FILE, outcome.reason)
        raise MetaLoadError(f"Could not load {META_FILE} ({outcome.reason})")
    try:
        return TripMeta.model_validate(outcome.payload)
    except ValidationError as e:
        logger.warning("Trip %s: invalid %s", trip_id, META_FILE)
        raise MetaLoadError(f"Could not load {META_FILE} (invalid: {e.errors()[0]['msg']})") from e


async def _fetch_day(folder: Path, name: str) -> FetchOutcome:
    # Day files must sit directly in the trip folder.
    if not _is_plain_name(name):
        return FetchFailure(reason=f"invalid day file: {name!r}")
    return await fetch_json(folder / name)


async def fetch_days(root: str | Path, trip_id: str, meta: TripMeta) -> list[FetchOutcome]:
    """Fetch every day file listed in ``meta`` concurrently, in day-list order."""
    folder = trip_dir(root, trip_id)
    outcomes = await asyncio.gather(*(_fetch_day(folder, name) for name in meta.days))
    for name, outcome in zip(meta.days, outcomes):
        if isinstance(outcome, FetchFailure):
            logger.warning("Trip %s: failed to load %s: %s", trip_id, name, outcome.reason)
    return list(outcomes)


async def load_trip_stats(root: str | Path, trip_id: str) -> tuple[TripMeta, TripStats]:
    """Load meta and all day files for a trip and aggregate them.

    Raises:
        MetaLoadError: if meta.json cannot be loaded.
        NoDayDataError: if meta.json lists no day files.
    """
    meta = await load_meta(root, trip_id)
    if not meta.days:
        raise NoDayDataError("No day files listed in meta.json.")
    outcomes = await fetch_days(root, trip_id, meta)
    return meta, aggregate(meta, outcomes)


async def summarize_trip(root: str | Path, entry: TripIndexEntry) -> TripCard:
    """Build the homepage card for one trip. Never raises for missing data."""
    card = TripCard(trip_id=entry.trip_id, page_url=entry.page_url, title=entry.trip_id)

    try:
        meta = await load_meta(root, entry.trip_id)
    except MetaLoadError as e:
        return card.model_copy(update={"error": str(e)})

    update = {
        "title": meta.title or entry.trip_id,
        "description": meta.description or "",
        "start_date": meta.start_date or None,
        "start_time": meta.start_time or None,
        "end_date": meta.end_date or None,
        "end_time": meta.end_time or None,
        "date_range": date_range(meta.start_date, meta.end_date),
    }
    if meta.start_date and meta.end_date:
        update["duration"] = elapsed(meta.start_date, meta.start_time, meta.end_date, meta.end_time)

    if meta.days:
        outcomes = await fetch_days(root, entry.trip_id, meta)
        totals = aggregate(meta, outcomes).totals
        update["total_distance_miles"] = totals.distance_miles
        update["total_elevation_gain_ft"] = totals.elevation_gain_ft

    return card.model_copy(update=update)


async def summarize_trips(root: str | Path) -> list[TripCard]:
    """Homepage cards for every trip in trips.json, computed concurrently.

    Raises:
        DataLoadError: if trips.json cannot be loaded.
    """
    entries = await load_trip_index(root)
    return list(await asyncio.gather(*(summarize_trip(root, e) for e in entries)))


async def load_gear(root: str | Path, trip_id: str) -> GearList | None:
    """Read a trip's gear.json; a missing or malformed sheet yields None."""
    outcome = await fetch_json(trip_dir(root, trip_id) / GEAR_FILE)
    if isinstance(outcome, FetchFailure):
        return None
    try:
        return GearList.model_validate(outcome.payload)
    except ValidationError:
        logger.warning("Trip %s: ignoring invalid %s", trip_id, GEAR_FILE)
        return None
