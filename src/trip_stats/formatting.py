"""Display helpers shared by the homepage and trip pages."""

from __future__ import annotations

import math
from datetime import date
from typing import Final

PLACEHOLDER: Final[str] = "—"

# Muted route colour per day, and the brighter colour used on hover.
# The two tables correspond 1-to-1.
DAY_COLORS_NEUTRAL: Final[tuple[str, ...]] = (
    "#6a85a0",  # steel blue
    "#7a9e78",  # sage green
    "#a09060",  # khaki
    "#9e7878",  # dusty rose
    "#6a9e9e",  # slate teal
    "#8878a0",  # muted lavender
    "#a07860",  # terracotta
    "#6878a0",  # periwinkle
    "#a09878",  # warm sand
    "#6a9080",  # eucalyptus
)

DAY_COLORS_HOVER: Final[tuple[str, ...]] = (
    "#4a9ed4",  # bright blue
    "#5cba5c",  # bright green
    "#d4a832",  # golden yellow
    "#d45c5c",  # coral red
    "#3ab8b8",  # bright teal
    "#a060d0",  # violet
    "#e07832",  # burnt orange
    "#4868d4",  # indigo
    "#c8b050",  # ochre
    "#40a890",  # jade
)


def day_color_neutral(index: int) -> str:
    """Neutral route colour for a 0-based day index, wrapping past the table end."""
    return DAY_COLORS_NEUTRAL[index % len(DAY_COLORS_NEUTRAL)]


def day_color_hover(index: int) -> str:
    return DAY_COLORS_HOVER[index % len(DAY_COLORS_HOVER)]


def format_number(n: float | None) -> str:
    """Thousands-separated number, e.g. ``12345 -> "12,345"``."""
    if n is None or (isinstance(n, float) and math.isnan(n)):
        return PLACEHOLDER
    if float(n).is_integer():
        return f"{int(n):,}"
    return f"{n:,.3f}".rstrip("0").rstrip(".")


def _parse_date(text: str) -> date:
    return date.fromisoformat(text)


def _month_day(d: date) -> str:
    return f"{d.strftime('%B')} {d.day}"


def format_date(text: str | None) -> str:
    """``"2024-06-01" -> "June 1, 2024"``; unparseable input is returned as is."""
    if not text:
        return PLACEHOLDER
    try:
        d = _parse_date(text)
    except ValueError:
        return text
    return f"{_month_day(d)}, {d.year}"


def date_range(start: str | None, end: str | None) -> str:
    """Human-readable date range; the start drops its year when both share one."""
    if not start:
        return PLACEHOLDER
    s = format_date(start)
    if not end or end == start:
        return s
    e = format_date(end)
    if start[:4] == end[:4] and s != start:
        s = _month_day(_parse_date(start))
    return f"{s} – {e}"
