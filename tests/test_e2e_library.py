from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web

from payloads import USER_PAYLOAD, make_page, make_product
from pykutuku.client import KutukuClient
from pykutuku.config import KutukuConfig
from pykutuku.exceptions import KutukuError
from pykutuku.state import AsyncData, AsyncError, SessionStatus
from pykutuku.storage import EncryptedFileStore

pytestmark = pytest.mark.e2e


@dataclass
class FakeKutukuBackend:
    total: int = 25
    token: str = "tok-e2e"
    calls: dict[str, int] = field(default_factory=dict)
    auth_headers: list[str | None] = field(default_factory=list)

    def _record(self, request: web.Request) -> None:
        self.calls[request.path] = self.calls.get(request.path, 0) + 1
        self.auth_headers.append(request.headers.get("Authorization"))

    async def login(self, request: web.Request) -> web.Response:
        self._record(request)
        body = await request.json()
        if body.get("password") != "emilyspass":
            return web.json_response({"message": "Invalid credentials"}, status=400)
        return web.json_response({**USER_PAYLOAD, "accessToken": self.token, "refreshToken": "ref-e2e"})

    async def me(self, request: web.Request) -> web.Response:
        self._record(request)
        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return web.json_response({"message": "Invalid/Expired Token!"}, status=401)
        return web.json_response(USER_PAYLOAD)

    async def products(self, request: web.Request) -> web.Response:
        self._record(request)
        limit = int(request.query.get("limit", "30"))
        skip = int(request.query.get("skip", "0"))
        count = max(0, min(limit, self.total - skip))
        return web.json_response(make_page(skip, count, total=self.total, limit=limit))

    async def product(self, request: web.Request) -> web.Response:
        self._record(request)
        product_id = int(request.match_info["product_id"])
        if product_id > self.total:
            return web.json_response({"message": f"Product with id '{product_id}' not found"}, status=404)
        return web.json_response(make_product(product_id))

    async def categories(self, request: web.Request) -> web.Response:
        self._record(request)
        return web.json_response([{"slug": "beauty", "name": "Beauty"}, {"slug": "home-decoration", "name": "Home"}])

    async def category(self, request: web.Request) -> web.Response:
        self._record(request)
        return web.json_response(make_page(0, 2, total=2, limit=2))

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/auth/login", self.login)
        app.router.add_get("/auth/me", self.me)
        app.router.add_get("/products", self.products)
        app.router.add_get("/products/categories", self.categories)
        app.router.add_get("/products/category/{name}", self.category)
        app.router.add_get("/products/{product_id:\\d+}", self.product)
        return app


@pytest.mark.asyncio
async def test_login_then_browse_catalog(serve: Any) -> None:
    backend = FakeKutukuBackend()
    async with serve(backend.app()) as base_url:
        async with KutukuClient(KutukuConfig(base_url=base_url)) as client:
            await client.session.login("emilys", "emilyspass")
            assert client.session.status is SessionStatus.AUTHENTICATED

            await client.catalog.load_first_page()
            await client.catalog.load_more()
            await client.catalog.load_more()
            await client.catalog.load_more()

            assert client.catalog.current_count == 25
            assert client.catalog.has_more is False
            assert [p.id for p in client.catalog.products] == list(range(1, 26))

    assert backend.calls["/products"] == 3
    assert backend.auth_headers[0] is None
    assert backend.auth_headers[-1] == "Bearer tok-e2e"


@pytest.mark.asyncio
async def test_wrong_password_surfaces_server_message(serve: Any) -> None:
    backend = FakeKutukuBackend()
    async with serve(backend.app()) as base_url:
        async with KutukuClient(KutukuConfig(base_url=base_url)) as client:
            await client.session.login("emilys", "nope")
            state = client.session.state

    assert isinstance(state, AsyncError)
    assert state.message == "Invalid credentials"
    assert await client.storage.is_logged_in() is False


@pytest.mark.asyncio
async def test_session_survives_restart_with_encrypted_store(serve: Any, tmp_path: Path) -> None:
    backend = FakeKutukuBackend()
    config_kwargs = {
        "storage_path": str(tmp_path / "session.bin"),
        "storage_key": EncryptedFileStore.generate_key(),
    }
    async with serve(backend.app()) as base_url:
        config = KutukuConfig(base_url=base_url, **config_kwargs)
        async with KutukuClient(config) as client:
            await client.session.login("emilys", "emilyspass")

        async with KutukuClient(config) as restarted:
            await restarted.session.restore_session()
            assert restarted.session.user is not None
            assert restarted.session.user.username == "emilys"

    assert backend.calls["/auth/me"] == 1


@pytest.mark.asyncio
async def test_expired_token_is_cleared_on_restore(serve: Any) -> None:
    backend = FakeKutukuBackend()
    async with serve(backend.app()) as base_url:
        client = KutukuClient(KutukuConfig(base_url=base_url))
        await client.storage.save_token("stale")
        async with client:
            await client.session.restore_session()
            assert client.session.state == AsyncData(None)

    assert await client.storage.get_token() is None


@pytest.mark.asyncio
async def test_one_shot_lookups(serve: Any) -> None:
    backend = FakeKutukuBackend()
    async with serve(backend.app()) as base_url:
        async with KutukuClient(KutukuConfig(base_url=base_url)) as client:
            detail = await client.product_detail(3).load()
            missing = await client.product_detail(999).load()
            categories = await client.categories().load()
            in_category = await client.category_products("home-decoration").load()

    assert isinstance(detail, AsyncData) and detail.value.title == "Product 3"
    assert isinstance(missing, AsyncError) and missing.code == "http"
    assert categories == AsyncData(["beauty", "home-decoration"])
    assert isinstance(in_category, AsyncData) and len(in_category.value.products) == 2


def test_client_must_be_entered() -> None:
    client = KutukuClient()
    with pytest.raises(KutukuError, match="not initialized"):
        _ = client.session
