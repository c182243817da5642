"""
Forecast dispatch, selecting the regression, moving average or exponential smoothing strategy from a method configuration, applying default parameters, optional caller labels and the trend classification pass.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from engine.enums import ForecastMethod
from engine.exceptions import InvalidParameter
from engine.forecast.exponential import exponential_smoothing_forecast
from engine.forecast.linear import linear_regression_forecast
from engine.forecast.moving_average import moving_average_forecast
from engine.forecast.points import ForecastPoint, TrendConfig, validate_periods
from engine.forecast.trend import assign_trends

log = logging.getLogger(__name__)

_Strategy = Callable[[Sequence[float], TrendConfig, int], List[ForecastPoint]]

_STRATEGIES: Dict[ForecastMethod, _Strategy] = {
    ForecastMethod.linear: lambda data, cfg, periods: linear_regression_forecast(data, periods),
    ForecastMethod.moving_average: lambda data, cfg, periods: moving_average_forecast(
        data, cfg.resolved_window, periods
    ),
    ForecastMethod.exponential: lambda data, cfg, periods: exponential_smoothing_forecast(
        data, cfg.resolved_alpha, periods
    ),
}

_unmapped = set(ForecastMethod) - set(_STRATEGIES)
if _unmapped:
    raise RuntimeError(f"no forecast strategy registered for: {sorted(m.value for m in _unmapped)}")


def generate_forecast(
    data: Sequence[float],
    config: TrendConfig | None,
    periods: int,
    labels: Optional[Sequence[str]] = None,
) -> List[ForecastPoint]:
    if config is None:
        config = TrendConfig()
    periods = validate_periods(periods)
    if labels is not None and len(labels) != periods:
        raise InvalidParameter(f"expected {periods} labels, got {len(labels)}")

    history = list(data)
    points = _STRATEGIES[config.type](history, config, periods)
    if labels is not None:
        points = [p.with_label(str(label)) for p, label in zip(points, labels)]

    log.debug(
        "forecast method=%s n=%d periods=%d params=%s",
        config.type.value, len(history), periods, config.cache_params(),
    )
    return assign_trends(history, points)
