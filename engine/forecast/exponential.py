"""
Exponential smoothing forecasting for sales series, smoothing the history into a current level estimate and extrapolating it with a trend slope taken from the most recent observations, bounded by a flat relative band around each forecast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from config import settings
from engine.forecast.points import (
    ForecastPoint,
    as_series,
    bounded_point,
    default_label,
    validate_alpha,
    validate_periods,
)


def _smoothed_level(vals: np.ndarray, alpha: float) -> float:
    level = float(vals[0])
    for i in range(1, len(vals)):
        level = alpha * float(vals[i]) + (1 - alpha) * level
    return level


def _recent_trend(vals: np.ndarray, lookback: int | None = None) -> float:
    if lookback is None:
        lookback = settings.forecast_exp_trend_lookback
    recent = vals[-max(1, lookback):]
    return float(recent[-1] - recent[0]) / len(recent)


def exponential_smoothing_forecast(data: Sequence[float], alpha: float, periods: int) -> List[ForecastPoint]:
    periods = validate_periods(periods)
    alpha = validate_alpha(alpha)
    vals = as_series(data)
    n = len(vals)

    level = _smoothed_level(vals, alpha)
    trend = _recent_trend(vals)
    band = settings.forecast_exp_band

    points: List[ForecastPoint] = []
    for i in range(periods):
        estimate = level + trend * (i + 1)
        points.append(bounded_point(default_label(n, i), estimate, abs(estimate) * band))
    return points
