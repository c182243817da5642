"""
Forecast service that runs the pure forecast engine off the event loop, consulting the TTL side cache first and fanning out across independent series with bounded parallelism.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from config import settings
from engine.exceptions import ForecastError
from engine.forecast import ForecastPoint, TrendConfig, generate_forecast
from engine.geo import CountryRollup, LocationForecast, LocationSeries, forecast_locations, rollup_by_country
from engine.enums import LocationSort
from engine.series import SalesWindow, extract_series, select_window
from store import forecasts as forecast_store, keys

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastOutcome:
    series_id: str
    history: List[float]
    points: List[ForecastPoint]
    cached: bool = False


async def forecast_series(
    values: Sequence[float],
    config: TrendConfig | None,
    periods: int,
    series_id: str | None = None,
    labels: Optional[Sequence[str]] = None,
    use_cache: bool = True,
) -> ForecastOutcome:
    config = config or TrendConfig()
    history = list(values)
    sid = series_id or keys.values_digest(history)

    if use_cache:
        cached = await forecast_store.load(sid, history, config, periods, labels)
        if cached is not None and len(cached) == periods:
            log.debug("forecast cache hit series=%s method=%s", sid, config.type.value)
            return ForecastOutcome(series_id=sid, history=history, points=cached, cached=True)

    points = await asyncio.to_thread(generate_forecast, history, config, periods, labels)
    if use_cache:
        await forecast_store.save(sid, history, config, periods, points, labels)
    return ForecastOutcome(series_id=sid, history=history, points=points)


async def forecast_many(
    series: Mapping[str, Sequence[float]],
    config: TrendConfig | None,
    periods: int,
    use_cache: bool = True,
) -> Dict[str, Union[ForecastOutcome, ForecastError]]:
    """Forecast every series independently.

    A series that cannot be forecast maps to its :class:`ForecastError`
    instead of failing the whole batch.
    """
    max_parallel = max(1, int(settings.forecast_max_parallel_series))
    sem = asyncio.Semaphore(max_parallel)

    async def _one(sid: str, vals: Sequence[float]) -> ForecastOutcome:
        async with sem:
            return await forecast_series(vals, config, periods, series_id=sid, use_cache=use_cache)

    ids = list(series)
    raw = await asyncio.gather(*[_one(sid, series[sid]) for sid in ids], return_exceptions=True)

    results: Dict[str, Union[ForecastOutcome, ForecastError]] = {}
    for sid, r in zip(ids, raw):
        if isinstance(r, ForecastError):
            log.warning("forecast series=%s failed: %s", sid, r)
            results[sid] = r
        elif isinstance(r, BaseException):
            raise r
        else:
            results[sid] = r
    return results


async def forecast_sales(
    rows: Iterable[Mapping[str, Any]],
    category: str,
    config: TrendConfig | None,
    periods: int,
    use_cache: bool = True,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[SalesWindow, ForecastOutcome]:
    window = select_window(extract_series(rows, category), periods, start, end)
    if window.future:
        log.debug("sales range %s..%s lies after the data, forecasting %d days", start, end, window.periods)
    outcome = await forecast_series(
        window.series.values,
        config,
        window.periods,
        series_id=f"sales:{category}",
        labels=window.labels,
        use_cache=use_cache,
    )
    return window, outcome


async def forecast_geo(
    locations: Sequence[LocationSeries],
    config: TrendConfig | None,
    sort_by: LocationSort | str = LocationSort.forecast,
) -> Tuple[List[LocationForecast], List[CountryRollup]]:
    results = await asyncio.to_thread(forecast_locations, locations, config, sort_by)
    return results, rollup_by_country(results)


async def clear_cache(series_id: str | None = None) -> int:
    removed = await forecast_store.clear(series_id)
    log.info("forecast cache cleared series=%s removed=%d", series_id or "*", removed)
    return removed
