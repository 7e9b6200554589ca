"""HTTP transport: URL building, token-aware headers and status classification."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlencode

import aiohttp

from pykutuku._constants import AUTH_FAILURE_STATUSES
from pykutuku._redact import redact_for_log, redact_headers
from pykutuku.config import KutukuConfig
from pykutuku.exceptions import (
    KutukuAuthenticationError,
    KutukuHttpError,
    KutukuNetworkError,
    KutukuProtocolError,
    KutukuTimeoutError,
)
from pykutuku.storage import TokenStorage

_logger = logging.getLogger(__name__)

#: Decoded JSON document: an object, or a top-level array.
JsonDocument = dict[str, Any] | list[Any]

QueryParams = Mapping[str, str | int | float | None]

_ERROR_MESSAGE_FIELDS = ("message", "error", "detail")


class Transport(Protocol):
    """Structural transport interface used by the services.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (:class:`HttpTransport`) concrete.
    """

    async def get(self, path: str, query: QueryParams | None = None) -> JsonDocument: ...

    async def post(self, path: str, body: Mapping[str, Any], *, include_auth: bool = True) -> JsonDocument: ...

    async def put(self, path: str, body: Mapping[str, Any]) -> JsonDocument: ...

    async def patch(self, path: str, body: Mapping[str, Any]) -> JsonDocument: ...

    async def delete(self, path: str) -> JsonDocument: ...


def build_url(base_url: str, path: str, query: QueryParams | None = None) -> str:
    """Join *base_url* and *path*, appending URL-encoded *query*.

    ``None`` query values are dropped; an empty query adds no ``?``.
    """
    url = f"{base_url}{path}"
    if not query:
        return url
    pairs = [(key, str(value)) for key, value in query.items() if value is not None]
    if not pairs:
        return url
    return f"{url}?{urlencode(pairs)}"


def _server_error_message(status: int, text: str) -> str:
    """Pick a displayable message out of an error response body."""
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        body = None

    if isinstance(body, dict):
        for key in _ERROR_MESSAGE_FIELDS:
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

    if text.strip():
        return text.strip()[:500]
    return f"Request failed with status {status}"


def decode_body(status: int, raw: bytes, *, method: str = "", endpoint: str = "") -> str:
    """Decode a response body as UTF-8.

    Error bodies are decoded leniently so the status code still reaches
    :func:`parse_response`. A 2xx body that is not UTF-8 raises
    :class:`KutukuProtocolError`.
    """
    if not 200 <= status < 300:
        return raw.decode("utf-8", errors="replace")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise KutukuProtocolError(
            f"Undecodable body from {method} {endpoint}: {exc.reason} at byte {exc.start}",
            endpoint=endpoint,
            method=method,
        ) from exc


def parse_response(status: int, text: str, *, method: str = "", endpoint: str = "") -> JsonDocument:
    """Classify a response by status and decode its JSON body.

    Raises
    ------
    KutukuHttpError
        Status outside 2xx (``KutukuAuthenticationError`` for 401/403).
    KutukuProtocolError
        2xx with a body that is not a JSON object or array.
    """
    if not 200 <= status < 300:
        message = _server_error_message(status, text)
        error_cls = KutukuAuthenticationError if status in AUTH_FAILURE_STATUSES else KutukuHttpError
        raise error_cls(message, status_code=status, endpoint=endpoint, method=method)

    if not text.strip():
        return {}

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise KutukuProtocolError(
            f"Invalid JSON from {method} {endpoint}: {text[:200]}",
            endpoint=endpoint,
            method=method,
        ) from exc

    if not isinstance(decoded, (dict, list)):
        raise KutukuProtocolError(
            f"Unexpected JSON document from {method} {endpoint}: {type(decoded).__name__}",
            endpoint=endpoint,
            method=method,
        )
    return decoded


class HttpTransport:
    """aiohttp-backed request pipeline.

    This is the only component that builds request headers. The bearer
    token is read from *storage* for every request and never kept on the
    instance, so a logout is observed by the very next call.
    """

    def __init__(
        self,
        config: KutukuConfig,
        storage: TokenStorage,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._storage = storage
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)

    async def _build_headers(self, *, include_auth: bool) -> dict[str, str]:
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
        }
        if include_auth:
            token = await self._storage.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        query: QueryParams | None = None,
        body: Mapping[str, Any] | None = None,
        include_auth: bool = True,
    ) -> JsonDocument:
        url = build_url(self._config.base_url, path, query)
        headers = await self._build_headers(include_auth=include_auth)
        data = json.dumps(body) if body is not None else None

        _logger.debug("%s %s headers=%s", method, url, redact_headers(headers))
        if body is not None:
            _logger.debug("%s %s body=%s", method, url, redact_for_log(body))

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                raw = await resp.read()
                status = resp.status
        except TimeoutError as exc:
            _logger.warning("%s %s timed out after %.1fs", method, path, self._config.timeout)
            raise KutukuTimeoutError(
                f"Request to {path} timed out after {self._config.timeout:g}s",
                endpoint=path,
                method=method,
            ) from exc
        except aiohttp.ClientError as exc:
            _logger.warning("%s %s network error: %s", method, path, exc)
            raise KutukuNetworkError(
                f"Request to {path} failed: {exc}",
                endpoint=path,
                method=method,
            ) from exc

        _logger.debug("%s %s -> %s", method, url, status)
        try:
            text = decode_body(status, raw, method=method, endpoint=path)
            return parse_response(status, text, method=method, endpoint=path)
        except (KutukuHttpError, KutukuProtocolError) as exc:
            _logger.warning("%s %s failed: %s", method, path, exc)
            raise

    async def get(self, path: str, query: QueryParams | None = None) -> JsonDocument:
        return await self._request("GET", path, query=query)

    async def post(self, path: str, body: Mapping[str, Any], *, include_auth: bool = True) -> JsonDocument:
        return await self._request("POST", path, body=body, include_auth=include_auth)

    async def put(self, path: str, body: Mapping[str, Any]) -> JsonDocument:
        return await self._request("PUT", path, body=body)

    async def patch(self, path: str, body: Mapping[str, Any]) -> JsonDocument:
        return await self._request("PATCH", path, body=body)

    async def delete(self, path: str) -> JsonDocument:
        return await self._request("DELETE", path)
