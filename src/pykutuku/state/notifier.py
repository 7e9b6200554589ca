"""Observable state holder shared by every container."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

S = TypeVar("S")

_logger = logging.getLogger(__name__)

Listener = Callable[[S], None]


class StateNotifier(Generic[S]):
    """Holds one state value and publishes every assignment.

    Listeners run synchronously, in registration order, on the task that
    assigned the state. A listener that raises is logged and skipped.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    @property
    def state(self) -> S:
        return self._state

    @state.setter
    def state(self, value: S) -> None:
        self._state = value
        for listener in list(self._listeners):
            self._call(listener, value)

    @staticmethod
    def _call(listener: Listener[S], value: S) -> None:
        try:
            listener(value)
        except Exception:
            _logger.exception("State listener %r failed", listener)

    def add_listener(self, listener: Listener[S], *, fire_immediately: bool = False) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)
        if fire_immediately:
            self._call(listener, self._state)

        def _remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _remove

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)
