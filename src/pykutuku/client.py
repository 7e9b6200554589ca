"""High-level async client wiring storage, transport, services and state."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pykutuku._transport import HttpTransport
from pykutuku.config import KutukuConfig
from pykutuku.exceptions import KutukuError
from pykutuku.models.product import Product, ProductPage
from pykutuku.services import AuthService, ProductService
from pykutuku.state.catalog import CatalogNotifier
from pykutuku.state.future import FutureNotifier
from pykutuku.state.session import SessionNotifier
from pykutuku.storage import EncryptedFileStore, MemorySecureStore, SecureStore, TokenStorage

_logger = logging.getLogger(__name__)


def _default_store(config: KutukuConfig) -> SecureStore:
    if config.storage_path and config.storage_key:
        return EncryptedFileStore(config.storage_path, config.storage_key)
    return MemorySecureStore()


class KutukuClient:
    """Async client for the Kutuku catalog API.

    Usage::

        async with KutukuClient(KutukuConfig.from_env()) as client:
            await client.session.login("emilys", "emilyspass")
            await client.catalog.load_first_page()
            print(client.catalog.products)

    Every dependency is passed explicitly down the chain
    storage → transport → services → containers; nothing is global.
    """

    def __init__(
        self,
        config: KutukuConfig | None = None,
        *,
        store: SecureStore | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or KutukuConfig()
        self._external_session = session is not None
        self._http_session = session
        self._storage = TokenStorage(store if store is not None else _default_store(self._config))
        self._transport: HttpTransport | None = None
        self._auth: AuthService | None = None
        self._products: ProductService | None = None
        self._session_state: SessionNotifier | None = None
        self._catalog: CatalogNotifier | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> KutukuClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._storage, self._http_session)
        self._auth = AuthService(self._transport, self._storage)
        self._products = ProductService(self._transport, default_limit=self._config.page_size)
        self._session_state = SessionNotifier(self._auth)
        self._catalog = CatalogNotifier(self._products, limit=self._config.page_size)
        _logger.debug("Client ready for %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise KutukuError("Client not initialized. Use 'async with KutukuClient(...) as client:'")
        return self._transport

    @property
    def config(self) -> KutukuConfig:
        return self._config

    @property
    def storage(self) -> TokenStorage:
        return self._storage

    @property
    def transport(self) -> HttpTransport:
        return self._require_transport()

    @property
    def auth(self) -> AuthService:
        self._require_transport()
        assert self._auth is not None  # noqa: S101
        return self._auth

    @property
    def products(self) -> ProductService:
        self._require_transport()
        assert self._products is not None  # noqa: S101
        return self._products

    @property
    def session(self) -> SessionNotifier:
        self._require_transport()
        assert self._session_state is not None  # noqa: S101
        return self._session_state

    @property
    def catalog(self) -> CatalogNotifier:
        self._require_transport()
        assert self._catalog is not None  # noqa: S101
        return self._catalog

    # ------------------------------------------------------------------
    # One-shot containers
    # ------------------------------------------------------------------

    def product_detail(self, product_id: int) -> FutureNotifier[Product]:
        products = self.products
        return FutureNotifier(lambda: products.get_product(product_id), name=f"product {product_id}")

    def categories(self) -> FutureNotifier[list[str]]:
        return FutureNotifier(self.products.list_categories, name="categories")

    def category_products(self, name: str) -> FutureNotifier[ProductPage]:
        products = self.products
        return FutureNotifier(lambda: products.list_by_category(name), name=f"category {name}")
