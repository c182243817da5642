"""
Test cases for sales series extraction, including category selection, summing across all categories, tolerance of blank cells, row labels, calendar labels and date range selection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date

import pytest

from engine.exceptions import InsufficientData, InvalidParameter
from engine.series import SalesSeries, calendar_labels, extract_series, label_date, select_window

ROWS = [
    {"datum": "2014-01-02", "M01AB": 1, "N02BE": 2.5, "R06": "x"},
    {"M01AB": None, "R03": 4, "N05B": True},
]


def test_extract_all_categories_sums_numeric_cells():
    series = extract_series(ROWS, "all")
    assert series.values == [3.5, 4.0]
    assert series.labels == ["2014-01-02", "Day 2"]
    assert len(series) == 2


def test_extract_single_category():
    series = extract_series(ROWS, "M01AB")
    assert series.category == "M01AB"
    assert series.values == [1.0, 0.0]


def test_unknown_category_rejected():
    with pytest.raises(InvalidParameter):
        extract_series(ROWS, "XYZ")


def test_calendar_labels_cross_month():
    assert calendar_labels(date(2024, 1, 30), 3) == ["2024-01-30", "2024-01-31", "2024-02-01"]
    assert calendar_labels(date(2024, 1, 1), 2, step_days=7) == ["2024-01-01", "2024-01-08"]


def test_calendar_labels_validation():
    with pytest.raises(InvalidParameter):
        calendar_labels(date(2024, 1, 1), 0)


DATED = SalesSeries(
    category="all",
    labels=["2014-01-01", "2014-01-02 00:00:00", "2014-01-03", "2014-01-04"],
    values=[1.0, 2.0, 3.0, 4.0],
)


def test_label_date_parses_iso_prefix():
    assert label_date("2014-01-02 00:00:00") == date(2014, 1, 2)
    assert label_date("Day 3") is None


def test_select_window_without_range_keeps_everything():
    window = select_window(DATED, 5)
    assert window.series is DATED
    assert window.periods == 5
    assert not window.future


def test_select_window_narrows_to_range():
    window = select_window(DATED, 5, start=date(2014, 1, 2))
    assert window.series.values == [2.0, 3.0, 4.0]
    window = select_window(DATED, 5, end=date(2014, 1, 2))
    assert window.series.labels == ["2014-01-01", "2014-01-02 00:00:00"]
    assert window.labels is None


def test_select_window_keeps_undated_rows():
    mixed = SalesSeries(category="all", labels=["Day 1", "2014-01-05"], values=[7.0, 8.0])
    window = select_window(mixed, 1, start=date(2014, 1, 5), end=date(2014, 1, 5))
    assert window.series.values == [7.0, 8.0]


def test_select_window_needs_two_observations():
    with pytest.raises(InsufficientData):
        select_window(DATED, 5, start=date(2014, 1, 4), end=date(2014, 1, 4))


def test_select_window_future_range():
    window = select_window(DATED, 5, start=date(2014, 2, 27), end=date(2014, 3, 2))
    assert window.future
    assert window.series is DATED
    assert window.periods == 4
    assert window.labels == ["2014-02-27", "2014-02-28", "2014-03-01", "2014-03-02"]


def test_select_window_open_ended_future_uses_periods():
    window = select_window(DATED, 2, start=date(2015, 1, 1))
    assert window.labels == ["2015-01-01", "2015-01-02"]


def test_select_window_rejects_inverted_and_oversized_ranges():
    with pytest.raises(InvalidParameter):
        select_window(DATED, 5, start=date(2014, 1, 3), end=date(2014, 1, 1))
    with pytest.raises(InvalidParameter):
        select_window(DATED, 5, start=date(2015, 1, 1), end=date(2017, 1, 1))
