"""Tests for per-day override-vs-computed resolution."""

from trip_stats.parser import parse_track_record
from trip_stats.resolver import coalesce, resolve_day


def _feature(coordinates, **properties):
    return parse_track_record({
        "type": "Feature",
        "properties": properties or None,
        "geometry": {"type": "LineString", "coordinates": coordinates},
    })


class TestCoalesce:
    def test_override_wins(self):
        assert coalesce(0, lambda: 99) == 0

    def test_none_computes(self):
        assert coalesce(None, lambda: 99) == 99


class TestResolveDay:
    def test_computed_from_track(self, sample_track):
        day = resolve_day(_feature(sample_track), 0, "day1.geojson")
        assert day.success is True
        assert day.day_number == 1
        assert day.distance_miles == 1.0
        assert day.elevation_gain_ft == 920
        assert day.filename == "day1.geojson"
        assert day.error is None

    def test_distance_override_is_verbatim(self, sample_track):
        day = resolve_day(_feature(sample_track, distance_miles=14.2), 0)
        assert day.distance_miles == 14.2
        assert day.elevation_gain_ft == 920

    def test_overrides_are_not_clamped(self, sample_track):
        day = resolve_day(_feature(sample_track, distance_miles=-3.33, elevation_gain_ft=1234.5), 0)
        assert day.distance_miles == -3.33
        assert day.elevation_gain_ft == 1234.5

    def test_null_override_falls_back(self, sample_track):
        day = resolve_day(_feature(sample_track, distance_miles=None, elevation_gain_ft=None, day=None), 4)
        assert day.distance_miles == 1.0
        assert day.day_number == 5

    def test_day_number_override(self, sample_track):
        assert resolve_day(_feature(sample_track, day=7), 0).day_number == 7

    def test_no_track_no_overrides(self):
        day = resolve_day(parse_track_record({"type": "Point", "coordinates": [0, 0]}), 2)
        assert day.success is True
        assert day.day_number == 3
        assert day.distance_miles == 0
        assert day.elevation_gain_ft == 0

    def test_unusable_override_falls_back_to_computed(self, sample_track):
        day = resolve_day(_feature(sample_track, day="1a", distance_miles="far"), 1)
        assert day.success is True
        assert day.day_number == 2
        assert day.distance_miles == 1.0
        assert day.elevation_gain_ft == 920

    def test_whole_number_stats_stay_integers(self, sample_track):
        day = resolve_day(_feature(sample_track, distance_miles=12), 0)
        assert isinstance(day.distance_miles, int)
        assert isinstance(day.elevation_gain_ft, int)
        assert day.model_dump()["elevation_gain_ft"] == 920

    def test_day_carries_route_colors(self, sample_track):
        day = resolve_day(_feature(sample_track), 11)
        dumped = day.model_dump()
        assert dumped["color"] == "#7a9e78"
        assert dumped["hover_color"] == "#5cba5c"
