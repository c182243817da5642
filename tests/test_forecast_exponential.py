"""
Test cases for the exponential smoothing forecast, including level smoothing, the recent trend slope, the flat relative band and alpha validation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from engine.exceptions import InsufficientData, InvalidParameter
from engine.forecast.exponential import _recent_trend, _smoothed_level, exponential_smoothing_forecast


def test_smoothed_level_and_trend():
    vals = np.array([1, 2, 3, 4, 5], dtype=float)
    assert _smoothed_level(vals, 0.5) == pytest.approx(4.0625)
    assert _recent_trend(vals) == pytest.approx(0.8)


def test_trend_uses_last_ten_observations():
    vals = np.arange(20, dtype=float)
    assert _recent_trend(vals) == pytest.approx(0.9)


def test_flat_series_continues_level():
    points = exponential_smoothing_forecast([10, 10, 10, 10, 10], alpha=0.5, periods=1)
    assert points[0].forecast == 10.0
    assert points[0].lower_bound == pytest.approx(8.0)
    assert points[0].upper_bound == pytest.approx(12.0)


def test_trend_compounds_per_step():
    points = exponential_smoothing_forecast([1, 2, 3, 4, 5], alpha=0.5, periods=2)
    assert points[0].forecast == pytest.approx(4.8625)
    assert points[1].forecast == pytest.approx(5.6625)
    assert points[0].lower_bound == pytest.approx(4.8625 * 0.8)
    assert points[0].upper_bound == pytest.approx(4.8625 * 1.2)


def test_alpha_one_tracks_last_value():
    points = exponential_smoothing_forecast(list(range(20)), alpha=1.0, periods=1)
    assert points[0].forecast == pytest.approx(19.9)


def test_alpha_zero_keeps_first_value():
    points = exponential_smoothing_forecast([7, 7, 7], alpha=0.0, periods=1)
    assert points[0].forecast == pytest.approx(7.0)


def test_falling_series_clamps_at_zero():
    points = exponential_smoothing_forecast([10, 5, 1], alpha=1.0, periods=3)
    for p in points:
        assert p.forecast == 0.0
        assert p.lower_bound == 0.0
        assert p.upper_bound >= p.forecast


def test_single_observation():
    points = exponential_smoothing_forecast([4], alpha=0.3, periods=2)
    assert [p.forecast for p in points] == pytest.approx([4.0, 4.0])


def test_empty_series_is_insufficient():
    with pytest.raises(InsufficientData):
        exponential_smoothing_forecast([], alpha=0.3, periods=1)


@pytest.mark.parametrize("alpha", [-0.1, 1.5, "high"])
def test_invalid_alpha(alpha):
    with pytest.raises(InvalidParameter):
        exponential_smoothing_forecast([1, 2, 3], alpha=alpha, periods=1)
