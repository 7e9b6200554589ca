from __future__ import annotations

from typing import Any

import pytest

from fakes import FakeTransport
from payloads import USER_PAYLOAD, login_payload, make_page, make_product
from pykutuku.exceptions import KutukuHttpError, KutukuNetworkError, KutukuProtocolError
from pykutuku.services import AuthService, ProductService
from pykutuku.storage import MemorySecureStore, TokenStorage


def _auth(transport: FakeTransport, store: MemorySecureStore | None = None) -> tuple[AuthService, TokenStorage]:
    storage = TokenStorage(store if store is not None else MemorySecureStore())
    return AuthService(transport, storage), storage


# ------------------------------------------------------------------
# AuthService
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_login_persists_token_user_id_and_refresh_token() -> None:
    transport = FakeTransport(
        routes={("POST", "/auth/login"): login_payload(accessToken="tok-abc", refreshToken="ref-xyz")}
    )
    auth, storage = _auth(transport)

    user = await auth.login("emilys", "emilyspass")

    assert user.username == "emilys"
    assert user.token == "tok-abc"
    assert await storage.get_token() == "tok-abc"
    assert await storage.get_user_id() == 1
    assert await storage.get_refresh_token() == "ref-xyz"
    call = transport.calls[0]
    assert call["include_auth"] is False
    assert call["body"] == {"username": "emilys", "password": "emilyspass"}


@pytest.mark.asyncio
async def test_login_accepts_legacy_token_field() -> None:
    transport = FakeTransport(routes={("POST", "/auth/login"): login_payload(token="legacy")})
    auth, storage = _auth(transport)

    await auth.login("emilys", "emilyspass")

    assert await storage.get_token() == "legacy"


@pytest.mark.asyncio
async def test_login_without_token_writes_nothing() -> None:
    store = MemorySecureStore()
    transport = FakeTransport(routes={("POST", "/auth/login"): login_payload()})
    auth, storage = _auth(transport, store)

    user = await auth.login("emilys", "emilyspass")

    assert user.token is None
    assert await storage.is_logged_in() is False
    assert store._values == {}  # noqa: SLF001


@pytest.mark.asyncio
async def test_login_propagates_http_error_unchanged() -> None:
    error = KutukuHttpError("Invalid credentials", status_code=400, endpoint="/auth/login")
    auth, storage = _auth(FakeTransport(routes={("POST", "/auth/login"): error}))

    with pytest.raises(KutukuHttpError) as exc_info:
        await auth.login("emilys", "wrong")

    assert exc_info.value is error
    assert await storage.is_logged_in() is False


@pytest.mark.asyncio
async def test_login_with_malformed_user_raises_protocol_error() -> None:
    auth, _ = _auth(FakeTransport(routes={("POST", "/auth/login"): {"accessToken": "tok"}}))

    with pytest.raises(KutukuProtocolError):
        await auth.login("emilys", "emilyspass")


@pytest.mark.asyncio
async def test_signup_posts_without_auth_and_persists_nothing() -> None:
    created = {"id": 209, "username": "newbie", "email": "newbie@x.com", "firstName": "New"}
    transport = FakeTransport(routes={("POST", "/users/add"): created})
    auth, storage = _auth(transport)

    user = await auth.signup("newbie", "newbie@x.com", "pw", first_name="New")

    assert user.id == 209
    assert await storage.is_logged_in() is False
    call = transport.calls[0]
    assert call["include_auth"] is False
    assert call["body"] == {"username": "newbie", "password": "pw", "email": "newbie@x.com", "firstName": "New"}


@pytest.mark.asyncio
async def test_logout_clears_session_without_network() -> None:
    store = MemorySecureStore({"auth_token": "tok", "refresh_token": "ref", "user_id": "1", "theme": "dark"})
    transport = FakeTransport()
    auth, storage = _auth(transport, store)

    await auth.logout()

    assert await auth.is_logged_in() is False
    assert await storage.get_user_id() is None
    assert await storage.get_refresh_token() is None
    assert await storage.get_value("theme") == "dark"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_get_current_user_uses_me_endpoint() -> None:
    transport = FakeTransport(routes={("GET", "/auth/me"): USER_PAYLOAD})
    auth, _ = _auth(transport)

    user = await auth.get_current_user()

    assert user.email == USER_PAYLOAD["email"]
    assert transport.calls[0]["path"] == "/auth/me"


# ------------------------------------------------------------------
# ProductService
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_products_sends_pagination_query() -> None:
    transport = FakeTransport(routes={("GET", "/products"): make_page(20, 10, total=194)})
    service = ProductService(transport)

    page = await service.list_products(limit=10, skip=20)

    assert page.skip == 20
    assert page.products[0].id == 21
    assert transport.calls[0]["query"] == {"limit": 10, "skip": 20}


@pytest.mark.asyncio
async def test_list_products_uses_default_limit() -> None:
    transport = FakeTransport(routes={("GET", "/products"): make_page(0, 5, total=5, limit=5)})
    service = ProductService(transport, default_limit=5)

    await service.list_products()

    assert transport.calls[0]["query"] == {"limit": 5, "skip": 0}


@pytest.mark.asyncio
async def test_get_product_appends_id() -> None:
    transport = FakeTransport(routes={("GET", "/products/7"): make_product(7)})
    product = await ProductService(transport).get_product(7)
    assert product.id == 7


@pytest.mark.asyncio
async def test_search_products_sends_q() -> None:
    transport = FakeTransport(routes={("GET", "/products/search"): make_page(0, 3, total=3)})
    page = await ProductService(transport).search_products(" phone ", limit=10, skip=0)

    assert len(page.products) == 3
    assert transport.calls[0]["query"] == {"q": "phone", "limit": 10, "skip": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   "])
async def test_search_with_blank_query_makes_no_call(query: str) -> None:
    transport = FakeTransport()
    page = await ProductService(transport).search_products(query)

    assert page.to_payload() == {"products": [], "total": 0, "skip": 0, "limit": 0}
    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        ["a", "b"],
        {"categories": ["a", "b"]},
        [{"slug": "a", "name": "A", "url": "https://dummyjson.com/products/category/a"}, {"slug": "b", "name": "B"}],
    ],
)
async def test_list_categories_accepts_both_shapes(payload: Any) -> None:
    transport = FakeTransport(routes={("GET", "/products/categories"): payload})
    assert await ProductService(transport).list_categories() == ["a", "b"]


@pytest.mark.asyncio
async def test_list_categories_unrecognized_shape_is_empty(caplog: pytest.LogCaptureFixture) -> None:
    transport = FakeTransport(routes={("GET", "/products/categories"): {"unexpected": True}})

    with caplog.at_level("WARNING"):
        categories = await ProductService(transport).list_categories()

    assert categories == []
    assert "Unexpected categories response shape" in caplog.text


@pytest.mark.asyncio
async def test_list_by_category_quotes_name() -> None:
    transport = FakeTransport(routes={("GET", "/products/category/home%20decoration"): make_page(0, 2, total=2)})

    page = await ProductService(transport).list_by_category("home decoration")

    assert len(page.products) == 2
    assert transport.calls[0]["query"] is None


@pytest.mark.asyncio
async def test_product_service_propagates_network_error() -> None:
    error = KutukuNetworkError("offline", endpoint="/products")
    transport = FakeTransport(routes={("GET", "/products"): error})

    with pytest.raises(KutukuNetworkError) as exc_info:
        await ProductService(transport).list_products()

    assert exc_info.value is error
