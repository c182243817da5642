from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from config import ALL_CATEGORIES, settings
from engine.enums import ForecastMethod, LocationSort
from engine.forecast.points import TrendConfig


class MethodParams(BaseModel):
    method: ForecastMethod = ForecastMethod.linear
    window: Optional[int] = Field(default=None, ge=1)
    alpha: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    def trend_config(self) -> TrendConfig:
        return TrendConfig(type=self.method, window=self.window, alpha=self.alpha)


class ForecastRequest(MethodParams):
    series_id: Optional[str] = None
    data: List[float]
    periods: int = Field(default=settings.forecast_default_periods, ge=1, le=settings.forecast_max_periods)
    labels: Optional[List[str]] = None


class BatchForecastRequest(MethodParams):
    series: Dict[str, List[float]]
    periods: int = Field(default=settings.forecast_default_periods, ge=1, le=settings.forecast_max_periods)


class SalesForecastRequest(MethodParams):
    rows: List[Dict[str, Any]]
    category: str = ALL_CATEGORIES
    periods: int = Field(default=settings.forecast_default_periods, ge=1, le=settings.forecast_max_periods)
    start: Optional[date] = None
    end: Optional[date] = None


class LocationInput(BaseModel):
    city: str
    country: str
    actual: float = Field(ge=0.0)
    history: List[float] = Field(default_factory=list)
    lat: Optional[float] = None
    lng: Optional[float] = None


class LocationForecastRequest(MethodParams):
    locations: List[LocationInput]
    sort_by: LocationSort = LocationSort.forecast
