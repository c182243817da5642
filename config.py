"""
Constants and configuration for the salescast forecast engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Tuple

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
FORECAST_CACHE_TTL: int = int(os.getenv("FORECAST_CACHE_TTL", "300"))

SALESCAST_LOG_LEVEL = os.getenv("SALESCAST_LOG_LEVEL", "INFO").upper()
SALESCAST_PORT = int(os.getenv("SALESCAST_PORT", "4322"))

# ATC codes of the medicine categories present in the sales records
MEDICINE_CATEGORIES: Tuple[str, ...] = (
    "M01AB",
    "M01AE",
    "N02BA",
    "N02BE",
    "N05B",
    "N05C",
    "R03",
    "R06",
)
ALL_CATEGORIES = "all"

# display names used when labelling category series
CATEGORY_NAMES: dict[str, str] = {
    "M01AB": "Anti-inflammatory (M01AB)",
    "M01AE": "Anti-inflammatory (M01AE)",
    "N02BA": "Analgesics (N02BA)",
    "N02BE": "Analgesics (N02BE)",
    "N05B": "Anxiolytics (N05B)",
    "N05C": "Sedatives (N05C)",
    "R03": "Respiratory (R03)",
    "R06": "Antihistamines (R06)",
    ALL_CATEGORIES: "All categories",
}

CACHE_KEY_PREFIX = "sc"


class Settings(BaseSettings):
    log_level: str = SALESCAST_LOG_LEVEL
    port: int = SALESCAST_PORT

    # method defaults applied when a TrendConfig leaves them unset
    forecast_default_window: int = 7
    forecast_default_alpha: float = 0.3
    forecast_default_periods: int = 30
    forecast_max_periods: int = 365

    # two-sided 95% normal quantile used by regression and moving average bands
    forecast_z_score: float = 1.96
    forecast_linear_min_points: int = 3

    # exponential smoothing: flat relative band and trend lookback
    forecast_exp_band: float = 0.2
    forecast_exp_trend_lookback: int = 10

    # relative change beyond which a point is tagged up / down (strict)
    forecast_trend_threshold: float = 0.02
    # relative gap between average forecast and average actual for summaries
    forecast_summary_band: float = 0.02

    # geographic forecast scoring
    geo_growth_threshold_pct: float = 2.0
    geo_confidence_base: float = 95.0
    geo_confidence_growth_penalty: float = 2.0
    geo_confidence_cap: float = 100.0

    # service fan-out across independent series
    forecast_max_parallel_series: int = 4

    # side cache
    forecast_cache_ttl: int = FORECAST_CACHE_TTL
    forecast_cache_max_points: int = 10_000
    store_redis_retry_cooldown_seconds: float = 10.0
    store_fallback_max_items: int = 10_000

    model_config = {
        "env_prefix": "SALESCAST_",
        "extra": "ignore",
    }


settings = Settings()
