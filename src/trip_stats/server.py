"""FastAPI server for hiking trip statistics."""

from __future__ import annotations

import csv
import io
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from .errors import DataLoadError, MetaLoadError, NoDayDataError
from .loader import load_gear, load_trip_stats, summarize_trips
from .models import DayResult, GearList, TripCard

DEFAULT_DATA_ROOT = Path("data")
DATA_ROOT_ENV = "TRIP_STATS_DATA_ROOT"

DAY_TABLE_FIELDS = [
    "day", "file", "color", "success",
    "distance_miles", "elevation_gain_ft", "error",
]


def create_app(data_root: str | Path | None = None) -> FastAPI:
    """Build the app; ``data_root`` overrides the environment and the default."""
    app = FastAPI(title="Hiking Journal Stats", version="0.1.0")
    app.state.data_root = Path(data_root or os.environ.get(DATA_ROOT_ENV) or DEFAULT_DATA_ROOT)

    @app.get("/trips", response_model=list[TripCard])
    async def list_trips(request: Request):
        """Homepage cards for every trip in trips.json."""
        try:
            return await summarize_trips(request.app.state.data_root)
        except DataLoadError as e:
            raise HTTPException(status_code=503, detail=str(e)) from e

    @app.get("/trips/{trip_id}")
    async def trip_stats(
        request: Request,
        trip_id: str,
        format: str = Query("json", pattern="^(csv|json)$"),
    ):
        """Per-day stats and trip totals, as JSON or as a CSV day table.

        Failed days are kept in the output as failure rows.
        """
        try:
            meta, stats = await load_trip_stats(request.app.state.data_root, trip_id)
        except MetaLoadError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except NoDayDataError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        if format == "csv":
            return _days_to_csv_response(trip_id, stats.days)
        return {"meta": meta, "stats": stats}

    @app.get("/trips/{trip_id}/gear", response_model=GearList)
    async def trip_gear(request: Request, trip_id: str):
        try:
            gear = await load_gear(request.app.state.data_root, trip_id)
        except MetaLoadError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        if gear is None:
            raise HTTPException(status_code=404, detail="No gear list for this trip")
        return gear

    return app


def _days_to_csv_response(trip_id: str, days: list[DayResult]) -> StreamingResponse:
    """Convert day results to a streaming CSV response."""

    def generate():
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=DAY_TABLE_FIELDS)
        writer.writeheader()
        yield buf.getvalue()
        buf.seek(0)
        buf.truncate(0)

        for day in days:
            writer.writerow({
                "day": day.day_number,
                "file": day.filename or "",
                "color": day.color,
                "success": day.success,
                "distance_miles": day.distance_miles,
                "elevation_gain_ft": day.elevation_gain_ft,
                "error": day.error or "",
            })
            yield buf.getvalue()
            buf.seek(0)
            buf.truncate(0)

    return StreamingResponse(
        generate(),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={trip_id}_days.csv"},
    )


app = create_app()
