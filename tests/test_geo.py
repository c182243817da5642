"""
Test cases for geographic forecasting, including growth and confidence scoring, fallback for short histories, sorting and the per-country roll-up.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import LocationSort, Trend
from engine.exceptions import InvalidParameter
from engine.forecast import TrendConfig
from engine.geo import LocationSeries, forecast_location, forecast_locations, rollup_by_country

FLAT = LocationSeries(city="Cluj", country="RO", actual=100.0, history=[100.0] * 10)
RISING = LocationSeries(city="Iasi", country="RO", actual=100.0, history=[10.0 * (k + 1) for k in range(10)])
SHORT = LocationSeries(city="Lyon", country="FR", actual=50.0, history=[5.0])


def test_flat_location_is_stable():
    r = forecast_location(FLAT)
    assert r.forecast == pytest.approx(100.0)
    assert r.growth == pytest.approx(0.0)
    assert r.trend == Trend.stable
    assert r.confidence == pytest.approx(95.0)


def test_rising_location_scores_growth():
    r = forecast_location(RISING, TrendConfig(type="linear"))
    assert r.forecast == pytest.approx(110.0)
    assert r.growth == pytest.approx(10.0)
    assert r.trend == Trend.up
    assert r.confidence == pytest.approx(75.0)


def test_short_history_falls_back_to_actual():
    r = forecast_location(SHORT, TrendConfig(type="linear"))
    assert r.forecast == 50.0
    assert r.growth == 0.0
    assert r.trend == Trend.stable


def test_zero_actual_has_zero_growth():
    r = forecast_location(LocationSeries(city="A", country="B", actual=0.0, history=[1, 2, 3, 4]))
    assert r.growth == 0.0


def test_sorting():
    by_growth = forecast_locations([FLAT, SHORT, RISING], sort_by=LocationSort.growth)
    assert by_growth[0].city == "Iasi"
    by_actual = forecast_locations([SHORT, FLAT], sort_by="actual")
    assert [r.city for r in by_actual] == ["Cluj", "Lyon"]


def test_bad_sort_key():
    with pytest.raises(InvalidParameter):
        forecast_locations([FLAT], sort_by="population")


def test_rollup_by_country():
    results = forecast_locations([FLAT, RISING, SHORT])
    rollup = {c.country: c for c in rollup_by_country(results)}
    assert rollup["RO"].cities == 2
    assert rollup["RO"].actual == pytest.approx(200.0)
    assert rollup["RO"].forecast == pytest.approx(210.0)
    assert rollup["RO"].growth == pytest.approx(5.0)
    assert rollup["FR"].growth == 0.0


def test_invalid_method_config_is_not_masked_by_fallback():
    with pytest.raises(InvalidParameter):
        forecast_locations([FLAT, SHORT], TrendConfig(type="movingAverage", window=0))
    with pytest.raises(InvalidParameter):
        forecast_location(FLAT, TrendConfig(type="exponential", alpha=1.5))
