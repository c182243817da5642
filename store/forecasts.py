from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from engine.forecast.points import ForecastPoint, TrendConfig
from store import keys
from store.client import redis_delete, redis_get, redis_scan, redis_set, redis_ttl

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntryStats:
    key: str
    size: int
    age_seconds: float
    expires_in: Optional[float] = None


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    total_size: int
    entries: List[CacheEntryStats] = field(default_factory=list)


def _params(config: TrendConfig, labels: Optional[Sequence[str]]) -> Dict[str, Any]:
    params = config.cache_params()
    if labels is not None:
        params["labels"] = [str(label) for label in labels]
    return params


def _key(
    series_id: str,
    values: Sequence[float],
    config: TrendConfig,
    periods: int,
    labels: Optional[Sequence[str]],
) -> str:
    return keys.forecast(series_id, values, _params(config, labels), periods)


def _to_json(points: Sequence[ForecastPoint]) -> str:
    return json.dumps({
        "created_at": time.time(),
        "points": [p.to_dict() for p in points],
    })


def _from_json(data: str) -> List[ForecastPoint]:
    d = json.loads(data)
    return [ForecastPoint.from_dict(p) for p in d["points"]]


async def load(
    series_id: str,
    values: Sequence[float],
    config: TrendConfig,
    periods: int,
    labels: Optional[Sequence[str]] = None,
) -> Optional[List[ForecastPoint]]:
    try:
        raw = await redis_get(_key(series_id, values, config, periods, labels))
        if raw:
            return _from_json(raw)
    except Exception as exc:
        log.debug("Forecast cache load failed %s: %s", series_id, exc)
    return None


async def save(
    series_id: str,
    values: Sequence[float],
    config: TrendConfig,
    periods: int,
    points: Sequence[ForecastPoint],
    labels: Optional[Sequence[str]] = None,
) -> None:
    if len(points) > settings.forecast_cache_max_points:
        log.warning(
            "Forecast cache entry size (%d) exceeds max (%d) for %s",
            len(points), settings.forecast_cache_max_points, series_id,
        )
    try:
        await redis_set(
            _key(series_id, values, config, periods, labels),
            _to_json(points),
            ttl=settings.forecast_cache_ttl,
        )
    except Exception as exc:
        log.debug("Forecast cache save failed %s: %s", series_id, exc)


async def clear(series_id: str | None = None) -> int:
    found = await redis_scan(keys.forecast_pattern(series_id))
    for key in found:
        await redis_delete(key)
    return len(found)


async def _expires_in(key: str) -> Optional[float]:
    remaining = await redis_ttl(key)
    return None if remaining is None else round(remaining, 3)


async def stats() -> CacheStats:
    now = time.time()
    entries: List[CacheEntryStats] = []
    for key in await redis_scan(keys.forecast_pattern()):
        raw = await redis_get(key)
        if not raw:
            continue
        try:
            d = json.loads(raw)
            entries.append(CacheEntryStats(
                key=key,
                size=len(d.get("points", [])),
                age_seconds=round(max(0.0, now - float(d.get("created_at", now))), 3),
                expires_in=await _expires_in(key),
            ))
        except (ValueError, TypeError) as exc:
            log.debug("Skipping unreadable cache entry %s: %s", key, exc)
    return CacheStats(
        total_entries=len(entries),
        total_size=sum(e.size for e in entries),
        entries=entries,
    )
