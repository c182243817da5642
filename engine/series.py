"""
Series extraction from parsed sales records, selecting one medicine category or summing every category per row, to build the ordered observation series consumed by the forecast engine, and narrowing that series to a requested date range.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from config import ALL_CATEGORIES, MEDICINE_CATEGORIES, settings
from engine.exceptions import InsufficientData, InvalidParameter

DATE_FIELD = "datum"


@dataclass(frozen=True)
class SalesSeries:
    category: str
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


def _categories_for(category: str) -> Tuple[str, ...]:
    if category == ALL_CATEGORIES:
        return MEDICINE_CATEGORIES
    if category in MEDICINE_CATEGORIES:
        return (category,)
    allowed = ", ".join((ALL_CATEGORIES,) + MEDICINE_CATEGORIES)
    raise InvalidParameter(f"unknown category {category!r}; expected one of: {allowed}")


def _cell(row: Mapping[str, Any], key: str) -> float:
    # only real numbers count; blanks and text cells contribute nothing
    value = row.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    return value if math.isfinite(value) else 0.0


def extract_series(rows: Iterable[Mapping[str, Any]], category: str = ALL_CATEGORIES) -> SalesSeries:
    cats = _categories_for(category)
    labels: List[str] = []
    values: List[float] = []
    for idx, row in enumerate(rows):
        values.append(sum(_cell(row, c) for c in cats))
        stamp = row.get(DATE_FIELD)
        labels.append(str(stamp) if stamp else f"Day {idx + 1}")
    return SalesSeries(category=category, labels=labels, values=values)


def calendar_labels(start: date, periods: int, step_days: int = 1) -> List[str]:
    if periods <= 0:
        raise InvalidParameter(f"periods must be a positive integer, got {periods}")
    if step_days <= 0:
        raise InvalidParameter(f"step_days must be a positive integer, got {step_days}")
    return [(start + timedelta(days=i * step_days)).isoformat() for i in range(periods)]


def label_date(label: str) -> Optional[date]:
    # "2014-01-02" and "2014-01-02 00:00:00" both count; "Day 3" has no date
    try:
        return date.fromisoformat(str(label).strip()[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class SalesWindow:
    """What to forecast for a requested date range.

    ``labels`` is set only when the range lies wholly after the last dated
    observation; the forecast then spans exactly the days of the range.
    """

    series: SalesSeries
    periods: int
    labels: Optional[List[str]] = None

    @property
    def future(self) -> bool:
        return self.labels is not None


def select_window(
    series: SalesSeries,
    periods: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> SalesWindow:
    """Narrow *series* to the observations dated within ``[start, end]``.

    Undated observations are always kept. A range with fewer than two
    observations is rejected unless it starts after the last dated one, in
    which case the whole history forecasts one period per day of the range.
    """
    if start is None and end is None:
        return SalesWindow(series=series, periods=periods)
    if start is not None and end is not None and end < start:
        raise InvalidParameter(f"range end {end} is before start {start}")

    dates = [label_date(label) for label in series.labels]
    dated = [d for d in dates if d is not None]
    if start is not None and dated and start > dated[-1] and len(series) >= 2:
        days = (end - start).days + 1 if end is not None else periods
        if days > settings.forecast_max_periods:
            raise InvalidParameter(
                f"range spans {days} days, more than the {settings.forecast_max_periods} allowed"
            )
        return SalesWindow(series=series, periods=days, labels=calendar_labels(start, days))

    keep = [
        idx for idx, d in enumerate(dates)
        if d is None or ((start is None or d >= start) and (end is None or d <= end))
    ]
    if len(keep) < 2:
        raise InsufficientData(
            f"range {start or '..'} to {end or '..'} holds {len(keep)} observation(s); at least 2 are needed"
        )
    narrowed = SalesSeries(
        category=series.category,
        labels=[series.labels[i] for i in keep],
        values=[series.values[i] for i in keep],
    )
    return SalesWindow(series=narrowed, periods=periods)
