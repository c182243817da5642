"""
Moving average forecasting for sales series, producing each point autoregressively from the mean of the most recent window of values, where the window slides over previously forecast points once the horizon runs past the history, with a population standard deviation band that does not widen with distance.

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
    validate_periods,
    validate_window,
)


def moving_average_forecast(data: Sequence[float], window: int, periods: int) -> List[ForecastPoint]:
    periods = validate_periods(periods)
    window = validate_window(window)
    vals = as_series(data)
    n = len(vals)
    z = settings.forecast_z_score

    # seeded with history; every forecast is appended so later windows see it
    buffer: List[float] = [float(v) for v in vals]
    points: List[ForecastPoint] = []
    for i in range(periods):
        # step 0 reads history only; the buffer holds nothing else yet
        recent = np.array(buffer[-window:], dtype=float)
        avg = float(np.mean(recent))
        std = float(np.std(recent))
        point = bounded_point(default_label(n, i), avg, z * std)
        points.append(point)
        buffer.append(point.forecast)
    return points
