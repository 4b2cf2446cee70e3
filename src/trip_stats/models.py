"""Pydantic data models for trip statistics."""

from __future__ import annotations

import math
from numbers import Real
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    computed_field,
    field_validator,
    model_validator,
)

from .formatting import PLACEHOLDER, day_color_hover, day_color_neutral, format_number


def is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def is_geo_point(point: Any) -> bool:
    """``[longitude, latitude, elevation?]`` with finite lon/lat; elevation may be anything."""
    return (
        isinstance(point, (list, tuple))
        and len(point) >= 2
        and is_finite_number(point[0])
        and is_finite_number(point[1])
    )


# ---------------------------------------------------------------------------
# GeoJSON track records
# ---------------------------------------------------------------------------
# Coordinates are kept as written. Point shape is checked only when a
# geometry is asked for its track, so features that never supply the track
# cannot fail the record.

class LineString(BaseModel):
    """A single path."""

    type: Literal["LineString"]
    coordinates: Any = None


class MultiLineString(BaseModel):
    """Several paths, flattened into one track for stats."""

    type: Literal["MultiLineString"]
    coordinates: Any = None


class OtherGeometry(BaseModel):
    """Any geometry kind that carries no track (Point, Polygon, ...)."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None


def _geometry_kind(value: Any) -> str | None:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if kind in ("LineString", "MultiLineString"):
        return kind
    return "other" if isinstance(value, (dict, OtherGeometry)) else None


Geometry = Annotated[
    Union[
        Annotated[LineString, Tag("LineString")],
        Annotated[MultiLineString, Tag("MultiLineString")],
        Annotated[OtherGeometry, Tag("other")],
    ],
    Discriminator(_geometry_kind),
]


class DayOverrideProperties(BaseModel):
    """Manually supplied day stats; a non-null value wins over the computed one."""

    model_config = ConfigDict(extra="allow")

    day: int | None = None
    distance_miles: int | float | None = None
    elevation_gain_ft: int | float | None = None

    # An unusable value is treated as absent for that stat alone.
    @field_validator("day", mode="before")
    @classmethod
    def _whole_number_or_none(cls, v: Any) -> Any:
        if is_finite_number(v) and float(v).is_integer():
            return int(v)
        return None

    @field_validator("distance_miles", "elevation_gain_ft", mode="before")
    @classmethod
    def _finite_number_or_none(cls, v: Any) -> Any:
        return v if is_finite_number(v) else None


class Feature(BaseModel):
    """A single GeoJSON feature."""

    type: Literal["Feature"] = "Feature"
    geometry: Geometry | None = None
    properties: DayOverrideProperties | None = None


class FeatureCollection(BaseModel):
    """A GeoJSON feature collection."""

    type: Literal["FeatureCollection"]
    features: list[Feature] = Field(default_factory=list)

    @field_validator("features", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


def _record_kind(value: Any) -> str | None:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if kind in ("FeatureCollection", "Feature"):
        return kind
    return _geometry_kind(value)


TrackRecord = Annotated[
    Union[
        Annotated[FeatureCollection, Tag("FeatureCollection")],
        Annotated[Feature, Tag("Feature")],
        Annotated[LineString, Tag("LineString")],
        Annotated[MultiLineString, Tag("MultiLineString")],
        Annotated[OtherGeometry, Tag("other")],
    ],
    Discriminator(_record_kind),
]


# ---------------------------------------------------------------------------
# Fetch outcomes
# ---------------------------------------------------------------------------

class FetchSuccess(BaseModel):
    """A day payload that was retrieved; ``payload`` is raw JSON or a parsed record."""

    ok: Literal[True] = True
    payload: Any


class FetchFailure(BaseModel):
    """A day payload that could not be retrieved."""

    ok: Literal[False] = False
    reason: str


FetchOutcome = Union[FetchSuccess, FetchFailure]


# ---------------------------------------------------------------------------
# Trip data and results
# ---------------------------------------------------------------------------

class TripMeta(BaseModel):
    """Contents of a trip's meta.json."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    description: str | None = None
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None
    days: list[str] = Field(default_factory=list)

    @field_validator("days", mode="before")
    @classmethod
    def _non_list_is_empty(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []


class DayResult(BaseModel):
    """Resolved stats for one day file."""

    model_config = ConfigDict(frozen=True)

    index: int
    day_number: int
    success: bool
    distance_miles: int | float = 0
    elevation_gain_ft: int | float = 0
    filename: str | None = None
    error: str | None = None

    @computed_field
    @property
    def color(self) -> str:
        """Route colour for this day on the map and in the day table."""
        return day_color_neutral(self.index)

    @computed_field
    @property
    def hover_color(self) -> str:
        return day_color_hover(self.index)


class TripTotals(BaseModel):
    """Trip-level totals over successful days."""

    distance_miles: float
    elevation_gain_ft: int
    days: int
    duration: str


class TripStats(BaseModel):
    """Output of trip aggregation."""

    totals: TripTotals
    days: list[DayResult]


class TripIndexEntry(BaseModel):
    """One row of trips.json."""

    model_config = ConfigDict(extra="allow")

    trip_id: str
    page_url: str | None = None


class TripCard(BaseModel):
    """Homepage summary of one trip."""

    trip_id: str
    page_url: str | None = None
    title: str
    description: str = ""
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None
    date_range: str = PLACEHOLDER
    total_distance_miles: float | None = None
    total_elevation_gain_ft: int | None = None
    duration: str | None = None
    error: str | None = None

    @computed_field
    @property
    def distance_label(self) -> str:
        """Card text for the distance stat, e.g. ``"15.2 mi"``."""
        if self.total_distance_miles is None:
            return PLACEHOLDER
        return f"{self.total_distance_miles} mi"

    @computed_field
    @property
    def elevation_label(self) -> str:
        if self.total_elevation_gain_ft is None:
            return PLACEHOLDER
        return f"{format_number(self.total_elevation_gain_ft)} ft"


# ---------------------------------------------------------------------------
# Gear sheet
# ---------------------------------------------------------------------------

class _GearModel(BaseModel):
    """Gear sheet cells are free text; numbers are kept as written, nulls dropped."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class GearSummaryRow(_GearModel):
    category: str
    weight_lbs: str = ""

    @property
    def is_total(self) -> bool:
        return self.category.lower().startswith("total")


class GearItem(_GearModel):
    gear: str = ""
    item_type: str = ""
    quantity: str = ""
    weight_oz: str = ""


class GearCategory(_GearModel):
    name: str | None = None
    items: list[GearItem] = Field(default_factory=list)


class GearList(_GearModel):
    """A trip's optional gear.json."""

    title: str | None = None
    summary: list[GearSummaryRow] = Field(default_factory=list)
    categories: list[GearCategory] = Field(default_factory=list)

    @property
    def listed_categories(self) -> list[GearCategory]:
        """Categories worth showing: named and with at least one item."""
        return [c for c in self.categories if c.name and c.items]
