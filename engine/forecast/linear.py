"""
Linear regression forecasting for sales series, fitting an ordinary least squares line over the observation index and extending it forward with a 95% prediction interval that widens with distance from the historical mean index.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from config import settings
from engine.exceptions import InsufficientData
from engine.forecast.points import ForecastPoint, as_series, bounded_point, default_label, validate_periods


def _linear_fit(vals: np.ndarray) -> tuple[float, float]:
    n = len(vals)
    x = np.arange(n, dtype=float)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(vals))
    sum_xy = float(np.sum(x * vals))
    sum_x2 = float(np.sum(x * x))

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        raise InsufficientData(f"cannot fit a line through {n} observation(s)")
    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        raise InsufficientData("regression coefficients are not finite")
    return slope, intercept


def _standard_error(vals: np.ndarray, slope: float, intercept: float) -> float:
    n = len(vals)
    predicted = slope * np.arange(n, dtype=float) + intercept
    sse = float(np.sum((vals - predicted) ** 2))
    return math.sqrt(sse / (n - 2))


def linear_regression_forecast(data: Sequence[float], periods: int) -> List[ForecastPoint]:
    periods = validate_periods(periods)
    vals = as_series(data, min_points=max(3, settings.forecast_linear_min_points))
    n = len(vals)

    slope, intercept = _linear_fit(vals)
    se = _standard_error(vals, slope, intercept)

    mean_x = (n - 1) / 2.0
    sum_x2 = float(np.sum(np.arange(n, dtype=float) ** 2))
    z = settings.forecast_z_score

    points: List[ForecastPoint] = []
    for i in range(n, n + periods):
        estimate = slope * i + intercept
        margin = z * se * math.sqrt(1 + 1 / n + (i - mean_x) ** 2 / sum_x2)
        points.append(bounded_point(default_label(n, i - n), estimate, margin))
    return points
