import json
from pathlib import Path

import pytest

# Three points heading south up a climb: 2100 -> 2210 -> 2380 m.
SAMPLE_TRACK = [
    [-118.2923, 36.5785, 2100],
    [-118.2901, 36.5712, 2210],
    [-118.2876, 36.5648, 2380],
]


def _write(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def sample_track():
    return [list(p) for p in SAMPLE_TRACK]


@pytest.fixture
def data_root(tmp_path) -> Path:
    """A data root with four trips covering the success and failure paths.

    - sierra-loop: day 1 computed, day 2 missing, day 3 overridden, gear sheet
    - no-days: meta lists no day files
    - broken: no meta.json at all
    - bad-payload: its only day file is not valid JSON
    """
    root = tmp_path / "data"
    _write(root / "trips.json", [
        {"trip_id": "sierra-loop", "page_url": "trips/sierra-loop.html"},
        {"trip_id": "no-days", "page_url": "trips/no-days.html"},
        {"trip_id": "broken"},
        {"trip_id": "bad-payload"},
    ])

    _write(root / "sierra-loop" / "meta.json", {
        "title": "Sierra Loop",
        "description": "Three days around the lakes.",
        "start_date": "2024-06-01",
        "start_time": "07:00",
        "end_date": "2024-06-03",
        "end_time": "16:45",
        "days": ["day1.geojson", "day2.geojson", "day3.geojson"],
    })
    _write(root / "sierra-loop" / "day1.geojson", {
        "type": "FeatureCollection",
        "features": [{
            "type": "Feature",
            "properties": {"name": "Day 1"},
            "geometry": {"type": "LineString", "coordinates": SAMPLE_TRACK},
        }],
    })
    _write(root / "sierra-loop" / "day3.geojson", {
        "type": "Feature",
        "properties": {"day": 3, "distance_miles": 14.2, "elevation_gain_ft": 3000},
        "geometry": {"type": "LineString", "coordinates": [[-118.3, 36.6, 2000], [-118.2, 36.7, 2500]]},
    })
    _write(root / "sierra-loop" / "gear.json", {
        "title": "Sierra Loop - June 2024",
        "summary": [
            {"category": "Big 4", "weight_lbs": "5.39"},
            {"category": "Total Base Weight", "weight_lbs": "10.00 lbs"},
        ],
        "categories": [
            {"name": "Big 4", "items": [
                {"gear": "Tent", "item_type": "Shelter", "quantity": 1, "weight_oz": 20.6},
            ]},
            {"name": "Empty", "items": []},
        ],
    })

    _write(root / "no-days" / "meta.json", {
        "title": "Day Hike", "start_date": "2024-07-04", "end_date": "2024-07-04", "days": [],
    })

    _write(root / "bad-payload" / "meta.json", {
        "start_date": "2024-08-01", "days": ["day1.geojson"],
    })
    _write(root / "bad-payload" / "day1.geojson", "{not json")

    return root
