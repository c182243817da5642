"""
Geographic forecasting across cities and countries, producing a one-step forecast per location from its supplied history, with growth percentage, trend tag and confidence score, plus a per-country roll-up of actual and forecast totals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from config import settings
from engine.enums import LocationSort, Trend
from engine.exceptions import InsufficientData, InvalidParameter
from engine.forecast.generate import generate_forecast
from engine.forecast.points import TrendConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationSeries:
    city: str
    country: str
    actual: float
    history: List[float] = field(default_factory=list)
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass(frozen=True)
class LocationForecast:
    city: str
    country: str
    actual: float
    forecast: float
    growth: float
    trend: Trend
    confidence: float
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass(frozen=True)
class CountryRollup:
    country: str
    actual: float
    forecast: float
    growth: float
    cities: int


def _growth_pct(actual: float, forecast: float) -> float:
    return (forecast - actual) / actual * 100 if actual > 0 else 0.0


def _growth_trend(growth: float) -> Trend:
    threshold = settings.geo_growth_threshold_pct
    if growth > threshold:
        return Trend.up
    if growth < -threshold:
        return Trend.down
    return Trend.stable


def _confidence(growth: float) -> float:
    # larger projected swings are trusted less
    score = settings.geo_confidence_base - abs(growth) * settings.geo_confidence_growth_penalty
    return min(settings.geo_confidence_cap, score)


def forecast_location(location: LocationSeries, config: TrendConfig | None = None) -> LocationForecast:
    try:
        points = generate_forecast(location.history, config, 1)
        value = points[0].forecast
    except InsufficientData as exc:
        log.debug("location %s/%s falls back to actual: %s", location.country, location.city, exc)
        value = location.actual

    growth = _growth_pct(location.actual, value)
    return LocationForecast(
        city=location.city,
        country=location.country,
        actual=location.actual,
        forecast=value,
        growth=round(growth, 4),
        trend=_growth_trend(growth),
        confidence=round(_confidence(growth), 4),
        lat=location.lat,
        lng=location.lng,
    )


def forecast_locations(
    locations: Sequence[LocationSeries],
    config: TrendConfig | None = None,
    sort_by: LocationSort | str = LocationSort.forecast,
) -> List[LocationForecast]:
    try:
        key = LocationSort(sort_by)
    except ValueError:
        raise InvalidParameter(f"cannot sort locations by {sort_by!r}") from None
    results = [forecast_location(loc, config) for loc in locations]
    results.sort(key=lambda r: getattr(r, key.value), reverse=True)
    return results


def rollup_by_country(results: Sequence[LocationForecast]) -> List[CountryRollup]:
    totals: Dict[str, List[float]] = {}
    for r in results:
        acc = totals.setdefault(r.country, [0.0, 0.0, 0])
        acc[0] += r.actual
        acc[1] += r.forecast
        acc[2] += 1

    return [
        CountryRollup(
            country=country,
            actual=actual,
            forecast=forecast,
            growth=round(_growth_pct(actual, forecast), 4),
            cities=int(cities),
        )
        for country, (actual, forecast, cities) in totals.items()
    ]
