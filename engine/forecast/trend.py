"""
Trend classification for forecast points, tagging each point as up, down or stable by its relative change against the value immediately preceding it in the combined history and forecast timeline.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from config import settings
from engine.enums import Trend
from engine.forecast.points import ForecastPoint


def classify_trend(value: float, previous: Optional[float], threshold: float | None = None) -> Trend:
    if threshold is None:
        threshold = settings.forecast_trend_threshold
    if previous is None or previous == 0:
        return Trend.stable

    change = (value - previous) / previous
    if change > threshold:
        return Trend.up
    if change < -threshold:
        return Trend.down
    return Trend.stable


def assign_trends(
    history: Sequence[float],
    points: Sequence[ForecastPoint],
    threshold: float | None = None,
) -> List[ForecastPoint]:
    """Return *points* with ``trend`` set against their predecessor.

    The predecessor of the first point is the last observation; every later
    point is compared with the forecast before it.
    """
    combined = [float(v) for v in history] + [p.forecast for p in points]
    n = len(history)
    tagged: List[ForecastPoint] = []
    for idx, point in enumerate(points):
        pos = n + idx - 1
        previous = combined[pos] if pos >= 0 else None
        tagged.append(point.with_trend(classify_trend(point.forecast, previous, threshold)))
    return tagged
