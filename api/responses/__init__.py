"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from engine.enums import ForecastMethod, Trend
from engine.forecast.points import ForecastPoint
from engine.forecast.summary import ForecastSummary


class ForecastPointModel(BaseModel):

    label: str
    forecast: float
    lower_bound: float
    upper_bound: float
    trend: Optional[Trend] = None

    @classmethod
    def from_point(cls, p: ForecastPoint) -> ForecastPointModel:
        return cls(
            label=p.label,
            forecast=p.forecast,
            lower_bound=p.lower_bound,
            upper_bound=p.upper_bound,
            trend=p.trend,
        )


class SummaryModel(BaseModel):

    avg_actual: float
    avg_forecast: float
    direction: Trend
    data_points: int

    @classmethod
    def from_summary(cls, s: ForecastSummary) -> SummaryModel:
        return cls(
            avg_actual=s.avg_actual,
            avg_forecast=s.avg_forecast,
            direction=s.direction,
            data_points=s.data_points,
        )


class ForecastResponse(BaseModel):

    series_id: str
    method: ForecastMethod
    periods: int
    points: List[ForecastPointModel]
    summary: SummaryModel
    cached: bool = False


class SeriesResult(BaseModel):

    points: Optional[List[ForecastPointModel]] = None
    summary: Optional[SummaryModel] = None
    cached: bool = False
    error: Optional[str] = None


class BatchForecastResponse(BaseModel):

    method: ForecastMethod
    periods: int
    results: Dict[str, SeriesResult] = Field(default_factory=dict)


class SalesForecastResponse(ForecastResponse):

    category: str
    category_name: str
    future: bool = False
    history_labels: List[str] = Field(default_factory=list)
    history: List[float] = Field(default_factory=list)


class LocationForecastModel(BaseModel):

    city: str
    country: str
    actual: float
    forecast: float
    growth: float
    trend: Trend
    confidence: float
    lat: Optional[float] = None
    lng: Optional[float] = None


class CountryRollupModel(BaseModel):

    country: str
    actual: float
    forecast: float
    growth: float
    cities: int


class LocationForecastResponse(BaseModel):

    locations: List[LocationForecastModel]
    countries: List[CountryRollupModel]


class CacheEntryModel(BaseModel):

    key: str
    size: int
    age_seconds: float
    expires_in: Optional[float] = None


class CacheStatsResponse(BaseModel):

    total_entries: int
    total_size: int
    entries: List[CacheEntryModel] = Field(default_factory=list)
