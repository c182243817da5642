"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler, catching any
uncaught exceptions and converting them into :class:`fastapi.HTTPException`
responses.  HTTPExceptions raised by the handler are propagated untouched, thus
preserving status codes and detail messages defined locally.  Forecast engine
failures (:class:`engine.exceptions.ForecastError`) become a ``422`` whose
detail starts with ``"cannot forecast:"`` so clients can render a neutral
placeholder.  All other exceptions are turned into a ``500`` error with the
exception message as the response detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from engine.exceptions import ForecastError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)

UNPROCESSABLE = 422


def forecast_http_error(exc: ForecastError) -> HTTPException:
    return HTTPException(status_code=UNPROCESSABLE, detail=f"cannot forecast: {exc}")


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    * If the wrapped function raises :class:`HTTPException`, it is re-raised
      verbatim.
    * :class:`ForecastError` becomes ``HTTPException(status_code=422)``.
    * Any other exception is caught and transformed into an
      ``HTTPException(status_code=500, detail=str(exc))``.

    The decorator works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except ForecastError as exc:
                raise forecast_http_error(exc) from exc
            except Exception as exc:
                log.exception("unhandled error in %s", func.__name__)
                raise HTTPException(status_code=500, detail=str(exc)) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except ForecastError as exc:
            raise forecast_http_error(exc) from exc
        except Exception as exc:
            log.exception("unhandled error in %s", func.__name__)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return cast(F, sync_wrapper)
