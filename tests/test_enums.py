"""
Test cases for enums used in the forecast engine, including ForecastMethod parsing, Trend and LocationSort values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import ForecastMethod, LocationSort, Trend
from engine.exceptions import ForecastError, InvalidParameter


def test_forecast_method_parse():
    assert ForecastMethod.parse("movingAverage") is ForecastMethod.moving_average
    assert ForecastMethod.parse(ForecastMethod.linear) is ForecastMethod.linear
    with pytest.raises(InvalidParameter):
        ForecastMethod.parse("moving_average")


def test_invalid_parameter_is_value_error():
    err = InvalidParameter("bad")
    assert isinstance(err, ForecastError)
    assert isinstance(err, ValueError)


def test_trend_and_sort_values():
    assert [t.value for t in Trend] == ["up", "down", "stable"]
    assert LocationSort("growth") is LocationSort.growth
