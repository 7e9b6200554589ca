"""Domain services over the HTTP transport.

Services translate transport calls into typed operations. Transport errors
propagate unchanged so callers can tell an expired session
(:class:`~pykutuku.exceptions.KutukuAuthenticationError`) from a retryable
network failure or API contract drift.
"""

from __future__ import annotations

import logging

from pykutuku._api.auth import parse_login_response, parse_user
from pykutuku._api.products import (
    category_path,
    parse_categories,
    parse_product,
    parse_product_page,
    product_path,
)
from pykutuku._constants import (
    CATEGORIES_PATH,
    DEFAULT_LIMIT,
    DEFAULT_SKIP,
    LOGIN_PATH,
    ME_PATH,
    PRODUCT_SEARCH_PATH,
    PRODUCTS_PATH,
    SIGNUP_PATH,
)
from pykutuku._transport import Transport
from pykutuku.models.product import Product, ProductPage
from pykutuku.models.requests import LoginRequest, PageRequest, SignupRequest
from pykutuku.models.user import User
from pykutuku.storage import TokenStorage

_logger = logging.getLogger(__name__)


class AuthService:
    """Login, signup and session bookkeeping."""

    def __init__(self, transport: Transport, storage: TokenStorage) -> None:
        self._transport = transport
        self._storage = storage

    async def login(self, username: str, password: str) -> User:
        """Authenticate and persist the issued token.

        When the response carries no token nothing is written and the
        caller must treat the session as anonymous.
        """
        request = LoginRequest(username=username, password=password)
        response = await self._transport.post(LOGIN_PATH, request.to_body(), include_auth=False)
        user, token = parse_login_response(response)

        if token is None:
            _logger.warning("Login response for %s did not include a token", user.username)
            return user

        await self._storage.save_token(token)
        await self._storage.save_user_id(user.id)
        if user.refresh_token:
            await self._storage.save_refresh_token(user.refresh_token)
        _logger.info("Logged in as %s", user.username)
        return user

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Create an account. The backend issues no token at signup."""
        request = SignupRequest(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        response = await self._transport.post(SIGNUP_PATH, request.to_body(), include_auth=False)
        user = parse_user(response, endpoint=SIGNUP_PATH)
        _logger.info("Created account %s (id=%s)", user.username, user.id)
        return user

    async def logout(self) -> None:
        """Forget the local session. The backend has nothing to invalidate."""
        await self._storage.delete_token()
        await self._storage.delete_refresh_token()
        await self._storage.delete_user_id()
        _logger.info("Logged out")

    async def get_current_user(self) -> User:
        """Fetch the user owning the stored token; validates the token."""
        response = await self._transport.get(ME_PATH)
        return parse_user(response, endpoint=ME_PATH)

    async def is_logged_in(self) -> bool:
        return await self._storage.is_logged_in()


class ProductService:
    """Catalog reads: listing, search, categories and single products."""

    def __init__(self, transport: Transport, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._transport = transport
        self._default_limit = default_limit

    def _page(self, limit: int | None, skip: int | None) -> PageRequest:
        return PageRequest(
            limit=self._default_limit if limit is None else limit,
            skip=DEFAULT_SKIP if skip is None else skip,
        )

    async def list_products(self, limit: int | None = None, skip: int | None = None) -> ProductPage:
        page = self._page(limit, skip)
        response = await self._transport.get(PRODUCTS_PATH, page.to_query())
        result = parse_product_page(response, endpoint=PRODUCTS_PATH)
        _logger.debug("Fetched %d of %d products (skip=%d)", len(result.products), result.total, result.skip)
        return result

    async def get_product(self, product_id: int) -> Product:
        endpoint = product_path(product_id)
        response = await self._transport.get(endpoint)
        return parse_product(response, endpoint=endpoint)

    async def search_products(
        self,
        query: str,
        limit: int | None = None,
        skip: int | None = None,
    ) -> ProductPage:
        """Full-text search.

        A blank *query* returns :meth:`ProductPage.empty` without calling
        the server.
        """
        term = query.strip()
        if not term:
            return ProductPage.empty()
        page = self._page(limit, skip)
        response = await self._transport.get(PRODUCT_SEARCH_PATH, {"q": term, **page.to_query()})
        result = parse_product_page(response, endpoint=PRODUCT_SEARCH_PATH)
        _logger.debug("Search %r matched %d products", term, result.total)
        return result

    async def list_categories(self) -> list[str]:
        response = await self._transport.get(CATEGORIES_PATH)
        categories = parse_categories(response)
        _logger.debug("Fetched %d categories", len(categories))
        return categories

    async def list_by_category(
        self,
        name: str,
        limit: int | None = None,
        skip: int | None = None,
    ) -> ProductPage:
        """List products in category *name*.

        Without *limit*/*skip* the server's own default window is used.
        """
        endpoint = category_path(name)
        query = None if limit is None and skip is None else self._page(limit, skip).to_query()
        response = await self._transport.get(endpoint, query)
        return parse_product_page(response, endpoint=endpoint)
