"""Distance and elevation-gain computation over GeoJSON coordinate tracks."""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Real
from typing import Any

EARTH_RADIUS_MILES = 3958.8
FEET_PER_METER = 3.28084


def round_tenth(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def round_to_ten(value: float) -> int:
    """Round half-up to the nearest 10."""
    return int(math.floor(value / 10 + 0.5) * 10)


def distance_between(a: Sequence[float], b: Sequence[float]) -> float:
    """Great-circle distance in miles between two ``[lon, lat, ...]`` points (haversine)."""
    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    d_lat = math.radians(b[1] - a[1])
    d_lon = math.radians(b[0] - a[0])

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h just past 1 for near-antipodal points.
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def track_distance(points: Sequence[Sequence[float]]) -> float:
    """Total track length in miles, rounded to one decimal."""
    if len(points) < 2:
        return 0
    total = 0.0
    for p1, p2 in zip(points, points[1:]):
        total += distance_between(p1, p2)
    return round_tenth(total)


def _elevation(point: Sequence[Any]) -> float | None:
    if len(point) < 3:
        return None
    ele = point[2]
    if isinstance(ele, Real) and not isinstance(ele, bool) and math.isfinite(ele):
        return ele
    return None


def track_elevation_gain(points: Sequence[Sequence[Any]]) -> int:
    """Cumulative climb in feet, rounded to the nearest 10.

    Only ascents count. A segment contributes nothing unless both of its
    endpoints carry a numeric elevation (meters, third coordinate).
    """
    if len(points) < 2:
        return 0
    gain_m = 0.0
    for p1, p2 in zip(points, points[1:]):
        ele1, ele2 = _elevation(p1), _elevation(p2)
        if ele1 is None or ele2 is None:
            continue
        diff = ele2 - ele1
        if diff > 0:
            gain_m += diff
    return round_to_ten(gain_m * FEET_PER_METER)
