"""
Cache key construction for forecast results, hashing the series identity, its observations and the method parameters into stable Redis keys.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping, Sequence

from config import CACHE_KEY_PREFIX


def _slug(value: str) -> str:
    # Internal cache keys do not require reversibility; use strong stable hashing.
    return hashlib.sha256(value.encode()).hexdigest()[:32]


def _params(params: Mapping[str, Any]) -> str:
    return "|".join(f"{k}:{json.dumps(params[k], sort_keys=True)}" for k in sorted(params))


def values_digest(values: Sequence[float]) -> str:
    return _slug(json.dumps([float(v) for v in values]))


def forecast(series_id: str, values: Sequence[float], params: Mapping[str, Any], periods: int) -> str:
    return (
        f"{CACHE_KEY_PREFIX}:forecast:{_slug(series_id)}:{values_digest(values)}"
        f":{_slug(_params(params))}:{int(periods)}"
    )


def forecast_pattern(series_id: str | None = None) -> str:
    if series_id is None:
        return f"{CACHE_KEY_PREFIX}:forecast:*"
    return f"{CACHE_KEY_PREFIX}:forecast:{_slug(series_id)}:*"
