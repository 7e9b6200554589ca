"""Catalog container: the paginated product list."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pykutuku._constants import DEFAULT_LIMIT
from pykutuku.models.product import Product
from pykutuku.services import ProductService
from pykutuku.state.async_value import LOADING, AsyncData, AsyncError, AsyncValue
from pykutuku.state.notifier import StateNotifier

_logger = logging.getLogger(__name__)

ErrorListener = Callable[[Exception], None]


class CatalogNotifier(StateNotifier[AsyncValue[list[Product]]]):
    """Product list plus its pagination cursor (``skip``, ``limit``, ``total``).

    A failed :meth:`load_first_page` replaces the list with
    :class:`AsyncError`. A failed :meth:`load_more` keeps the products
    already shown and reports the error to listeners registered with
    :meth:`add_error_listener` instead.
    """

    def __init__(self, product_service: ProductService, *, limit: int = DEFAULT_LIMIT) -> None:
        super().__init__(AsyncData([]))
        self._products = product_service
        self._limit = limit
        self._skip = 0
        self._total = 0
        self._loading_more = False
        self._error_listeners: list[ErrorListener] = []

    @property
    def skip(self) -> int:
        return self._skip

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def total(self) -> int:
        return self._total

    @property
    def is_loading_more(self) -> bool:
        return self._loading_more

    @property
    def products(self) -> list[Product]:
        state = self.state
        return list(state.value) if isinstance(state, AsyncData) else []

    @property
    def current_count(self) -> int:
        return len(self.products)

    @property
    def has_more(self) -> bool:
        return self.current_count < self._total

    def add_error_listener(self, listener: ErrorListener) -> Callable[[], None]:
        """Register a callback for incremental-load failures."""
        self._error_listeners.append(listener)

        def _remove() -> None:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

        return _remove

    def _notify_error(self, exc: Exception) -> None:
        for listener in list(self._error_listeners):
            try:
                listener(exc)
            except Exception:
                _logger.exception("Catalog error listener %r failed", listener)

    async def load_first_page(self) -> None:
        self._skip = 0
        self.state = LOADING
        try:
            page = await self._products.list_products(limit=self._limit, skip=0)
        except Exception as exc:
            _logger.info("Loading products failed: %s", exc)
            self.state = AsyncError(exc)
            return
        self._total = page.total
        self._skip = len(page.products)
        self.state = AsyncData(list(page.products))

    async def load_more(self) -> None:
        if self._loading_more or not isinstance(self.state, AsyncData) or not self.has_more:
            return

        self._loading_more = True
        try:
            page = await self._products.list_products(limit=self._limit, skip=self._skip)
        except Exception as exc:
            _logger.info("Loading more products failed: %s", exc)
            self._notify_error(exc)
            return
        finally:
            self._loading_more = False

        if not page.products:
            # An empty page ends pagination even if the server reports more.
            _logger.warning("Empty page at skip=%d with total=%d", self._skip, page.total)
            self._total = self.current_count
            return

        self._skip += len(page.products)
        self._total = page.total
        self.state = AsyncData([*self.products, *page.products])

    async def refresh(self) -> None:
        await self.load_first_page()
