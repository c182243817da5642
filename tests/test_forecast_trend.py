"""
Test cases for trend classification, including the strict two percent boundary, zero predecessors and predecessor selection across the history and forecast timeline.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Trend
from engine.forecast.points import ForecastPoint
from engine.forecast.trend import assign_trends, classify_trend


def _point(value: float) -> ForecastPoint:
    return ForecastPoint(label="x", forecast=value, lower_bound=value, upper_bound=value)


def test_boundary_is_strict():
    assert classify_trend(102.0, 100.0) == Trend.stable
    assert classify_trend(102.0001, 100.0) == Trend.up
    assert classify_trend(98.0, 100.0) == Trend.stable
    assert classify_trend(97.9, 100.0) == Trend.down


@pytest.mark.parametrize("previous", [0, 0.0, None])
def test_zero_or_missing_previous_is_stable(previous):
    assert classify_trend(50.0, previous) == Trend.stable


def test_custom_threshold():
    assert classify_trend(105.0, 100.0, threshold=0.1) == Trend.stable
    assert classify_trend(111.0, 100.0, threshold=0.1) == Trend.up


def test_assign_trends_compares_with_predecessor():
    tagged = assign_trends([100.0], [_point(110.0), _point(110.0), _point(100.0)])
    assert [p.trend for p in tagged] == [Trend.up, Trend.stable, Trend.down]


def test_assign_trends_without_history():
    tagged = assign_trends([], [_point(3.0), _point(6.0)])
    assert [p.trend for p in tagged] == [Trend.stable, Trend.up]


def test_assign_trends_keeps_values():
    raw = [_point(1.5), _point(1.0)]
    tagged = assign_trends([1.0], raw)
    assert [p.forecast for p in tagged] == [1.5, 1.0]
    assert all(p.trend is None for p in raw)
