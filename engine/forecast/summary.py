"""
Summary statistics over a history and its forecast, comparing the average forecast against the average observation to give an overall direction for the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from config import settings
from engine.enums import Trend
from engine.forecast.points import ForecastPoint


@dataclass(frozen=True)
class ForecastSummary:
    avg_actual: float
    avg_forecast: float
    direction: Trend
    data_points: int


def summarize(history: Sequence[float], points: Sequence[ForecastPoint], band: float | None = None) -> ForecastSummary:
    if band is None:
        band = settings.forecast_summary_band
    avg_actual = float(np.mean(np.array(list(history), dtype=float))) if len(history) else 0.0
    avg_forecast = float(np.mean([p.forecast for p in points])) if points else 0.0

    if avg_forecast > avg_actual * (1 + band):
        direction = Trend.up
    elif avg_forecast < avg_actual * (1 - band):
        direction = Trend.down
    else:
        direction = Trend.stable

    return ForecastSummary(
        avg_actual=round(avg_actual, 4),
        avg_forecast=round(avg_forecast, 4),
        direction=direction,
        data_points=len(history),
    )
