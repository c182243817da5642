"""
Forecasting engine for sales series, exposing the linear regression, moving average and exponential smoothing strategies, the dispatching entry point with trend classification, and summary statistics over a history and its forecast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.points import ForecastPoint, TrendConfig
from engine.forecast.linear import linear_regression_forecast
from engine.forecast.moving_average import moving_average_forecast
from engine.forecast.exponential import exponential_smoothing_forecast
from engine.forecast.trend import assign_trends, classify_trend
from engine.forecast.generate import generate_forecast
from engine.forecast.summary import ForecastSummary, summarize

__all__ = [
    "ForecastPoint", "TrendConfig", "linear_regression_forecast", "moving_average_forecast",
    "exponential_smoothing_forecast", "assign_trends", "classify_trend", "generate_forecast",
    "ForecastSummary", "summarize",
]
