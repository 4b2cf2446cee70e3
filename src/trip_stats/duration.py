"""Elapsed trip time between two (date, time-of-day) pairs."""

from __future__ import annotations

from datetime import datetime

UNKNOWN_DURATION = "—"
UNDER_A_MINUTE = "< 1m"

_DAY_S = 86_400
_HOUR_S = 3_600
_MINUTE_S = 60


def _instant(date: str, time: str | None) -> datetime:
    return datetime.fromisoformat(f"{date}T{time or '00:00'}")


def elapsed(
    start_date: str | None,
    start_time: str | None,
    end_date: str | None,
    end_time: str | None,
) -> str:
    """Format the time from start to end as e.g. ``"14d 7h 30m"``.

    A missing time of day means midnight. Returns :data:`UNKNOWN_DURATION`
    when either instant is missing or unparseable, or when the end is not
    strictly after the start; :data:`UNDER_A_MINUTE` when the gap is shorter
    than a minute.
    """
    try:
        start = _instant(start_date, start_time)
        end = _instant(end_date, end_time)
        remaining = (end - start).total_seconds()
    except (TypeError, ValueError):
        return UNKNOWN_DURATION
    if remaining <= 0:
        return UNKNOWN_DURATION

    days = int(remaining // _DAY_S)
    remaining -= days * _DAY_S
    hours = int(remaining // _HOUR_S)
    remaining -= hours * _HOUR_S
    minutes = int(remaining // _MINUTE_S)

    parts = [f"{n}{unit}" for n, unit in ((days, "d"), (hours, "h"), (minutes, "m")) if n]
    return " ".join(parts) or UNDER_A_MINUTE
