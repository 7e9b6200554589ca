"""In-memory test doubles for the transport layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FakeTransport:
    """Scripted transport.

    ``routes`` maps ``(method, path)`` to a payload, an exception to raise,
    or a callable receiving the recorded call and returning either.
    """

    routes: dict[tuple[str, str], Any] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def _respond(self, method: str, path: str, **details: Any) -> Any:
        call = {"method": method, "path": path, **details}
        self.calls.append(call)
        if (method, path) not in self.routes:
            raise AssertionError(f"Unexpected call in fake transport: {method} {path}")
        result = self.routes[(method, path)]
        if callable(result):
            result = result(call)
        if isinstance(result, Exception):
            raise result
        return result

    async def get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return self._respond("GET", path, query=dict(query) if query else None)

    async def post(self, path: str, body: Mapping[str, Any], *, include_auth: bool = True) -> Any:
        return self._respond("POST", path, body=dict(body), include_auth=include_auth)

    async def put(self, path: str, body: Mapping[str, Any]) -> Any:
        return self._respond("PUT", path, body=dict(body))

    async def patch(self, path: str, body: Mapping[str, Any]) -> Any:
        return self._respond("PATCH", path, body=dict(body))

    async def delete(self, path: str) -> Any:
        return self._respond("DELETE", path)

    def count(self, method: str, path: str) -> int:
        return sum(1 for call in self.calls if call["method"] == method and call["path"] == path)
