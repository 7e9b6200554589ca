"""One-shot container for a single async lookup."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pykutuku.state.async_value import LOADING, AsyncData, AsyncError, AsyncValue
from pykutuku.state.notifier import StateNotifier

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class FutureNotifier(StateNotifier[AsyncValue[T]]):
    """Runs *loader* on :meth:`load` and publishes its outcome.

    Starts in the loading state, since nothing has been fetched yet.
    Calling :meth:`load` again re-runs the loader.
    """

    def __init__(self, loader: Callable[[], Awaitable[T]], *, name: str = "") -> None:
        super().__init__(LOADING)
        self._loader = loader
        self._name = name or getattr(loader, "__qualname__", "future")

    async def load(self) -> AsyncValue[T]:
        self.state = LOADING
        try:
            value = await self._loader()
        except Exception as exc:
            _logger.info("%s failed: %s", self._name, exc)
            self.state = AsyncError(exc)
        else:
            self.state = AsyncData(value)
        return self.state
