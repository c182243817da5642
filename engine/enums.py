"""
Enumerations for forecast methods, trend tags and location sort keys.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class ForecastMethod(str, Enum):
    linear = "linear"
    moving_average = "movingAverage"
    exponential = "exponential"

    @classmethod
    def parse(cls, value: "ForecastMethod | str") -> ForecastMethod:
        # imported lazily so the enum module stays free of engine imports
        from engine.exceptions import InvalidParameter

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidParameter(f"unknown forecast method {value!r}; expected one of: {allowed}") from None


class Trend(str, Enum):
    up = "up"
    down = "down"
    stable = "stable"


class LocationSort(str, Enum):
    forecast = "forecast"
    actual = "actual"
    growth = "growth"
