"""
Shared forecast types and helpers, including the forecast point record returned by every strategy, the method configuration with its defaults, and the input validation and interval clamping rules common to all forecasting strategies.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import ForecastMethod, Trend
from engine.exceptions import InsufficientData, InvalidParameter


@dataclass(frozen=True)
class ForecastPoint:
    label: str
    forecast: float
    lower_bound: float
    upper_bound: float
    trend: Optional[Trend] = None

    def with_trend(self, trend: Trend) -> ForecastPoint:
        return replace(self, trend=trend)

    def with_label(self, label: str) -> ForecastPoint:
        return replace(self, label=label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "forecast": self.forecast,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "trend": self.trend.value if self.trend is not None else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ForecastPoint:
        trend = d.get("trend")
        return cls(
            label=str(d["label"]),
            forecast=float(d["forecast"]),
            lower_bound=float(d["lower_bound"]),
            upper_bound=float(d["upper_bound"]),
            trend=Trend(trend) if trend is not None else None,
        )


@dataclass(frozen=True)
class TrendConfig:
    """Forecast method selection plus its method-specific parameters.

    ``window`` only applies to the moving average and ``alpha`` only to
    exponential smoothing. Unset values resolve to the configured defaults.
    """

    type: ForecastMethod = ForecastMethod.linear
    window: Optional[int] = None
    alpha: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ForecastMethod.parse(self.type))

    @property
    def resolved_window(self) -> int:
        return settings.forecast_default_window if self.window is None else self.window

    @property
    def resolved_alpha(self) -> float:
        return settings.forecast_default_alpha if self.alpha is None else self.alpha

    def cache_params(self) -> Dict[str, Any]:
        # only the parameter that affects the chosen method takes part in identity
        params: Dict[str, Any] = {"type": self.type.value}
        if self.type is ForecastMethod.moving_average:
            params["window"] = self.resolved_window
        elif self.type is ForecastMethod.exponential:
            params["alpha"] = self.resolved_alpha
        return params


def validate_periods(periods: Any) -> int:
    if isinstance(periods, bool) or not isinstance(periods, (int, np.integer)):
        raise InvalidParameter(f"periods must be a positive integer, got {periods!r}")
    if periods <= 0:
        raise InvalidParameter(f"periods must be a positive integer, got {periods}")
    return int(periods)


def validate_window(window: Any) -> int:
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise InvalidParameter(f"window must be a positive integer, got {window!r}")
    if window <= 0:
        raise InvalidParameter(f"window must be a positive integer, got {window}")
    return int(window)


def validate_alpha(alpha: Any) -> float:
    try:
        value = float(alpha)
    except (TypeError, ValueError):
        raise InvalidParameter(f"alpha must be a number in [0, 1], got {alpha!r}") from None
    if not 0.0 <= value <= 1.0:
        raise InvalidParameter(f"alpha must be a number in [0, 1], got {value}")
    return value


def as_series(data: Sequence[float], min_points: int = 1) -> np.ndarray:
    # np.array copies, so callers' sequences are never touched
    try:
        arr = np.array(list(data), dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"observations must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidParameter("observations must be a flat sequence of numbers")
    if len(arr) < min_points:
        raise InsufficientData(
            f"need at least {min_points} observation{'s' if min_points != 1 else ''}, got {len(arr)}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter("observations must be finite numbers")
    return arr


def default_label(n: int, step: int) -> str:
    return f"Day {n + step + 1}"


def bounded_point(label: str, estimate: float, margin: float) -> ForecastPoint:
    if not (np.isfinite(estimate) and np.isfinite(margin)):
        raise InsufficientData(f"forecast for {label} is not finite")
    forecast = max(0.0, float(estimate))
    lower = max(0.0, float(estimate - margin))
    # a negative raw estimate clamps the forecast up to zero; keep upper >= forecast
    upper = max(float(estimate + margin), forecast)
    return ForecastPoint(label=label, forecast=forecast, lower_bound=lower, upper_bound=upper)
