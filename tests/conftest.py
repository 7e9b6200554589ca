from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator, Callable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


@contextlib.asynccontextmanager
async def _serve(app: web.Application) -> AsyncIterator[str]:
    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("")).rstrip("/")
    finally:
        await server.close()


@pytest.fixture
def serve() -> Callable[[web.Application], contextlib.AbstractAsyncContextManager[str]]:
    """Start *app* on an ephemeral port; the context yields its base URL."""
    return _serve
