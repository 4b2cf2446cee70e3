"""GeoJSON track record parsing.

A day file is one of three shapes: a ``FeatureCollection`` (the first feature
with a line geometry supplies the track), a single ``Feature``, or a bare
geometry. Raw JSON is validated once, at :func:`parse_track_record`, into the
``TrackRecord`` tagged union; everything downstream matches on the model type.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import MalformedRecordError
from .models import (
    DayOverrideProperties,
    Feature,
    FeatureCollection,
    LineString,
    MultiLineString,
    OtherGeometry,
    TrackRecord,
    is_geo_point,
)

_RECORD_ADAPTER: TypeAdapter[TrackRecord] = TypeAdapter(TrackRecord)
RECORD_TYPES = (FeatureCollection, Feature, LineString, MultiLineString, OtherGeometry)


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_has_non_finite(v) for v in value)
    return False


def parse_track_record(raw: Any) -> TrackRecord:
    """Validate raw JSON into a TrackRecord.

    Raises:
        MalformedRecordError: if the payload is not a GeoJSON object, carries
            NaN or infinite numbers (not valid JSON), or its structure does
            not validate.
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError(f"expected a GeoJSON object, got {type(raw).__name__}")
    if _has_non_finite(raw):
        raise MalformedRecordError("NaN or infinite number in GeoJSON")
    try:
        return _RECORD_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise MalformedRecordError(f"invalid GeoJSON: {e.error_count()} error(s), first: {e.errors()[0]['msg']}") from e


def _path(coordinates: Any) -> list[list[Any]]:
    """A list of usable points, or an empty track if any point is unusable."""
    if not isinstance(coordinates, list) or not all(is_geo_point(p) for p in coordinates):
        return []
    return list(coordinates)


def track_from_geometry(geometry: LineString | MultiLineString | OtherGeometry | None) -> list[list[Any]]:
    """Coordinates of a line geometry; any other geometry has no track.

    Unusable coordinates also mean no track, so a later feature of a
    collection can still supply one.
    """
    if isinstance(geometry, LineString):
        return _path(geometry.coordinates)
    if isinstance(geometry, MultiLineString):
        paths = geometry.coordinates
        if not isinstance(paths, list) or not all(isinstance(p, list) for p in paths):
            return []
        points = [point for path in paths for point in path]
        return _path(points)
    return []


def extract_track(record: TrackRecord) -> list[list[Any]]:
    """Return the record's track as one flat coordinate sequence (possibly empty)."""
    if isinstance(record, FeatureCollection):
        # First feature with a non-empty track wins.
        for feature in record.features:
            track = track_from_geometry(feature.geometry)
            if track:
                return track
        return []
    if isinstance(record, Feature):
        return track_from_geometry(record.geometry)
    if isinstance(record, (LineString, MultiLineString, OtherGeometry)):
        return track_from_geometry(record)
    raise TypeError(f"Unsupported track record: {type(record).__name__}")


def extract_override_properties(record: TrackRecord) -> DayOverrideProperties | None:
    """Properties of the first feature (collection) or of the feature itself.

    Note that for a collection these come from ``features[0]`` even when a
    later feature supplied the track.
    """
    if isinstance(record, FeatureCollection):
        return record.features[0].properties if record.features else None
    if isinstance(record, Feature):
        return record.properties
    return None
