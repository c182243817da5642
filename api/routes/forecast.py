"""
Forecast routes projecting sales series forward with the selected method, for single series, batches of independent series, parsed sales rows and geographic locations, plus management of the forecast cache.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from api.requests import BatchForecastRequest, ForecastRequest, LocationForecastRequest, SalesForecastRequest
from api.responses import (
    BatchForecastResponse,
    CacheEntryModel,
    CacheStatsResponse,
    CountryRollupModel,
    ForecastPointModel,
    ForecastResponse,
    LocationForecastModel,
    LocationForecastResponse,
    SalesForecastResponse,
    SeriesResult,
    SummaryModel,
)
from api.routes.exception import handle_exceptions
from config import CATEGORY_NAMES
from engine.exceptions import ForecastError
from engine.forecast import summarize
from engine.geo import LocationSeries
from services.forecast_service import (
    ForecastOutcome,
    clear_cache,
    forecast_geo,
    forecast_many,
    forecast_sales,
    forecast_series,
)
from store import forecasts as forecast_store

router = APIRouter(tags=["Forecast"])


def _points(outcome: ForecastOutcome) -> list[ForecastPointModel]:
    return [ForecastPointModel.from_point(p) for p in outcome.points]


def _summary(outcome: ForecastOutcome) -> SummaryModel:
    return SummaryModel.from_summary(summarize(outcome.history, outcome.points))


@router.post("/forecast", summary="Forecast one series", response_model=ForecastResponse)
@handle_exceptions
async def forecast_one(req: ForecastRequest) -> ForecastResponse:
    outcome = await forecast_series(
        req.data,
        req.trend_config(),
        req.periods,
        series_id=req.series_id,
        labels=req.labels,
    )
    return ForecastResponse(
        series_id=outcome.series_id,
        method=req.method,
        periods=req.periods,
        points=_points(outcome),
        summary=_summary(outcome),
        cached=outcome.cached,
    )


@router.post("/forecast/batch", summary="Forecast many independent series", response_model=BatchForecastResponse)
@handle_exceptions
async def forecast_batch(req: BatchForecastRequest) -> BatchForecastResponse:
    outcomes = await forecast_many(req.series, req.trend_config(), req.periods)
    results: Dict[str, SeriesResult] = {}
    for sid, outcome in outcomes.items():
        if isinstance(outcome, ForecastError):
            results[sid] = SeriesResult(error=f"cannot forecast: {outcome}")
        else:
            results[sid] = SeriesResult(
                points=_points(outcome),
                summary=_summary(outcome),
                cached=outcome.cached,
            )
    return BatchForecastResponse(method=req.method, periods=req.periods, results=results)


@router.post("/forecast/sales", summary="Forecast a category series from sales rows", response_model=SalesForecastResponse)
@handle_exceptions
async def forecast_sales_rows(req: SalesForecastRequest) -> SalesForecastResponse:
    window, outcome = await forecast_sales(
        req.rows, req.category, req.trend_config(), req.periods, start=req.start, end=req.end
    )
    series = window.series
    return SalesForecastResponse(
        series_id=outcome.series_id,
        method=req.method,
        periods=len(outcome.points),
        points=_points(outcome),
        summary=_summary(outcome),
        cached=outcome.cached,
        category=series.category,
        category_name=CATEGORY_NAMES[series.category],
        future=window.future,
        history_labels=series.labels,
        history=series.values,
    )


@router.post("/forecast/locations", summary="One-step forecast per location", response_model=LocationForecastResponse)
@handle_exceptions
async def forecast_locations_route(req: LocationForecastRequest) -> LocationForecastResponse:
    locations = [
        LocationSeries(
            city=loc.city,
            country=loc.country,
            actual=loc.actual,
            history=list(loc.history),
            lat=loc.lat,
            lng=loc.lng,
        )
        for loc in req.locations
    ]
    results, countries = await forecast_geo(locations, req.trend_config(), req.sort_by)
    return LocationForecastResponse(
        locations=[LocationForecastModel(**r.__dict__) for r in results],
        countries=[CountryRollupModel(**c.__dict__) for c in countries],
    )


@router.get("/forecast/cache/stats", summary="Forecast cache contents", response_model=CacheStatsResponse)
@handle_exceptions
async def cache_stats() -> CacheStatsResponse:
    stats = await forecast_store.stats()
    return CacheStatsResponse(
        total_entries=stats.total_entries,
        total_size=stats.total_size,
        entries=[CacheEntryModel(**e.__dict__) for e in stats.entries],
    )


@router.delete("/forecast/cache", summary="Drop cached forecasts")
@handle_exceptions
async def cache_clear(series_id: Optional[str] = Query(default=None)) -> Dict[str, Any]:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    raw = series_id.default if hasattr(series_id, "default") else series_id
    removed = await clear_cache(raw)
    return {"removed": removed}
