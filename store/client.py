"""
Client code for Redis access, with in-memory fallback if Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import time
from typing import Any, Optional

log = logging.getLogger(__name__)

_redis_client: Any = None
_fallback: dict[str, str] = {}
_fallback_expiry: dict[str, float] = {}
_using_fallback = False
_init_lock = asyncio.Lock()
_retry_after_monotonic: float = 0.0

try:
    from config import settings
    _MAX_FALLBACK_SIZE = int(settings.store_fallback_max_items)
    _REDIS_RETRY_COOLDOWN_SECONDS = float(settings.store_redis_retry_cooldown_seconds)
    _REDIS_OP_TIMEOUT_SECONDS = 0.5
except Exception:
    _MAX_FALLBACK_SIZE = 10_000
    _REDIS_RETRY_COOLDOWN_SECONDS = 10.0
    _REDIS_OP_TIMEOUT_SECONDS = 0.5


def _fallback_live(key: str) -> bool:
    expires = _fallback_expiry.get(key)
    if expires is not None and time.monotonic() >= expires:
        _fallback.pop(key, None)
        _fallback_expiry.pop(key, None)
        return False
    return key in _fallback


def _fallback_get(key: str) -> Optional[str]:
    return _fallback.get(key) if _fallback_live(key) else None


def _fallback_set(key: str, value: str, ttl: Optional[int]) -> None:
    if key not in _fallback and len(_fallback) >= _MAX_FALLBACK_SIZE:
        # drop expired entries before giving up on the write
        for k in list(_fallback):
            _fallback_live(k)
        if len(_fallback) >= _MAX_FALLBACK_SIZE:
            log.debug("In-memory fallback full, dropping %s", key)
            return
    _fallback[key] = value
    if ttl:
        _fallback_expiry[key] = time.monotonic() + ttl
    else:
        _fallback_expiry.pop(key, None)


def _fallback_delete(key: str) -> None:
    _fallback.pop(key, None)
    _fallback_expiry.pop(key, None)


def _fallback_scan(pattern: str) -> list[str]:
    return [k for k in list(_fallback) if fnmatch.fnmatch(k, pattern) and _fallback_live(k)]


def fallback_clear() -> None:
    _fallback.clear()
    _fallback_expiry.clear()


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        _using_fallback = True
        return None

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            _using_fallback = True
            return None
        try:
            import redis.asyncio as aioredis
            from config import REDIS_URL

            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=0.5,
                socket_timeout=0.5,
            )
            await asyncio.wait_for(client.ping(), timeout=0.5)
            _redis_client = client
            _retry_after_monotonic = 0.0
            _using_fallback = False
            log.info("Redis connected: %s", REDIS_URL)
            return _redis_client
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(0.0, _REDIS_RETRY_COOLDOWN_SECONDS)
            if not _using_fallback:
                log.warning("Redis unavailable (%s), using in-memory fallback", exc)
                _using_fallback = True
            return None


async def close_redis() -> None:
    global _redis_client
    client, _redis_client = _redis_client, None
    if client is None:
        return
    try:
        await client.aclose()
    except Exception as exc:
        log.debug("Redis close error: %s", exc)


async def redis_get(key: str) -> Optional[str]:
    client = await get_redis()
    if client is None:
        return _fallback_get(key)
    try:
        return await asyncio.wait_for(client.get(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis GET error %s: %s", key, exc)
        return _fallback_get(key)


async def redis_set(key: str, value: str, ttl: Optional[int] = None) -> None:
    client = await get_redis()
    if client is None:
        _fallback_set(key, value, ttl)
        return
    try:
        if ttl:
            await asyncio.wait_for(client.setex(key, ttl, value), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        else:
            await asyncio.wait_for(client.set(key, value), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis SET error %s: %s", key, exc)
        _fallback_set(key, value, ttl)


async def redis_delete(key: str) -> None:
    client = await get_redis()
    if client is None:
        _fallback_delete(key)
        return
    try:
        await asyncio.wait_for(client.delete(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis DEL error %s: %s", key, exc)
        _fallback_delete(key)


async def redis_ttl(key: str) -> Optional[float]:
    client = await get_redis()
    if client is None:
        if not _fallback_live(key):
            return None
        expires = _fallback_expiry.get(key)
        return None if expires is None else max(0.0, expires - time.monotonic())
    try:
        remaining = await asyncio.wait_for(client.ttl(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        return float(remaining) if remaining is not None and remaining >= 0 else None
    except Exception as exc:
        log.debug("Redis TTL error %s: %s", key, exc)
        return None


async def redis_scan(pattern: str) -> list[str]:
    client = await get_redis()
    if client is None:
        return _fallback_scan(pattern)
    try:
        async def _scan_keys() -> list[str]:
            return [key async for key in client.scan_iter(pattern)]

        return await asyncio.wait_for(_scan_keys(), timeout=1.0)
    except Exception as exc:
        log.debug("Redis SCAN error %s: %s", pattern, exc)
        return _fallback_scan(pattern)


def is_using_fallback() -> bool:
    return _using_fallback
