import pytest
from fastapi import HTTPException

from api.routes.exception import handle_exceptions
from engine.exceptions import InsufficientData, InvalidParameter


@pytest.mark.asyncio
async def test_async_forecast_error_becomes_422():
    @handle_exceptions
    async def route():
        raise InsufficientData("need at least 3 observations, got 2")

    with pytest.raises(HTTPException) as exc:
        await route()
    assert exc.value.status_code == 422
    assert exc.value.detail == "cannot forecast: need at least 3 observations, got 2"


def test_sync_paths():
    @handle_exceptions
    def bad_param():
        raise InvalidParameter("window must be a positive integer, got 0")

    @handle_exceptions
    def boom():
        raise RuntimeError("boom")

    @handle_exceptions
    def teapot():
        raise HTTPException(status_code=418, detail="tea")

    with pytest.raises(HTTPException) as exc:
        bad_param()
    assert exc.value.status_code == 422

    with pytest.raises(HTTPException) as exc:
        boom()
    assert exc.value.status_code == 500
    assert exc.value.detail == "boom"

    with pytest.raises(HTTPException) as exc:
        teapot()
    assert exc.value.status_code == 418
