"""Tri-state result of an asynchronous operation.

``AsyncValue[T]`` is exactly one of :class:`AsyncLoading`,
:class:`AsyncData` or :class:`AsyncError`. Variants are frozen, so a
state can only change by replacing the whole value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

from pykutuku.exceptions import GENERIC_ERROR_MESSAGE, KutukuError

T = TypeVar("T")


@dataclass(frozen=True)
class AsyncLoading:
    """Operation in flight; no value available."""


@dataclass(frozen=True)
class AsyncData(Generic[T]):
    """Operation succeeded. ``value`` may itself be ``None``."""

    value: T


@dataclass(frozen=True)
class AsyncError:
    """Operation failed with ``error``."""

    error: BaseException

    @property
    def code(self) -> str:
        """Error taxonomy code (``network``, ``http``, ...)."""
        if isinstance(self.error, KutukuError):
            return self.error.code
        if isinstance(self.error, ValueError):
            return "invalid"
        return "unknown"

    @property
    def message(self) -> str:
        if isinstance(self.error, KutukuError):
            return self.error.message
        return str(self.error).strip() or GENERIC_ERROR_MESSAGE


AsyncValue: TypeAlias = AsyncLoading | AsyncData[T] | AsyncError

LOADING = AsyncLoading()
