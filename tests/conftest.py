import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import store.client as client


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory redis fallback before and after each test and make
    every store helper operate on the in-memory store.
    """
    client.fallback_clear()

    async def no_redis():
        return None

    # stub out the connection so tests never attempt network
    monkeypatch.setattr(client, "_redis_client", None)
    monkeypatch.setattr(client, "_using_fallback", True)
    monkeypatch.setattr(client, "get_redis", no_redis)

    # also update any modules that imported the helper at import-time
    import api.routes.health as health_route
    monkeypatch.setattr(health_route, "get_redis", no_redis)

    yield

    client.fallback_clear()
