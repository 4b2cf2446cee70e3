"""Tests for display helpers."""

import pytest

from trip_stats.formatting import (
    DAY_COLORS_HOVER,
    DAY_COLORS_NEUTRAL,
    date_range,
    day_color_hover,
    day_color_neutral,
    format_date,
    format_number,
)


class TestFormatNumber:
    @pytest.mark.parametrize("n,expected", [
        (12345, "12,345"),
        (920, "920"),
        (3920.0, "3,920"),
        (1234.5, "1,234.5"),
        (None, "—"),
        (float("nan"), "—"),
    ])
    def test_format(self, n, expected):
        assert format_number(n) == expected


class TestDates:
    def test_format_date(self):
        assert format_date("2024-06-01") == "June 1, 2024"

    def test_format_date_empty_and_invalid(self):
        assert format_date(None) == "—"
        assert format_date("") == "—"
        assert format_date("sometime in June") == "sometime in June"

    def test_range_same_year_drops_start_year(self):
        assert date_range("2024-06-01", "2024-06-15") == "June 1 – June 15, 2024"

    def test_range_across_years(self):
        assert date_range("2023-12-30", "2024-01-02") == "December 30, 2023 – January 2, 2024"

    def test_range_single_day(self):
        assert date_range("2024-07-04", "2024-07-04") == "July 4, 2024"
        assert date_range("2024-07-04", None) == "July 4, 2024"
        assert date_range(None, "2024-07-04") == "—"


class TestDayColors:
    def test_tables_correspond(self):
        assert len(DAY_COLORS_NEUTRAL) == len(DAY_COLORS_HOVER) == 10

    def test_wraps_around(self):
        assert day_color_neutral(0) == day_color_neutral(10) == "#6a85a0"
        assert day_color_hover(13) == DAY_COLORS_HOVER[3]
