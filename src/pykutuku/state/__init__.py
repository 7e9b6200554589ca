"""Reactive state containers.

Containers sit between callers and services. They catch service errors at
the boundary and publish every transition as an :data:`AsyncValue`.
"""

from pykutuku.state.async_value import AsyncData, AsyncError, AsyncLoading, AsyncValue
from pykutuku.state.catalog import CatalogNotifier
from pykutuku.state.future import FutureNotifier
from pykutuku.state.notifier import StateNotifier
from pykutuku.state.session import SessionNotifier, SessionStatus

__all__ = [
    "AsyncData",
    "AsyncError",
    "AsyncLoading",
    "AsyncValue",
    "CatalogNotifier",
    "FutureNotifier",
    "SessionNotifier",
    "SessionStatus",
    "StateNotifier",
]
