"""Helpers for safe debug logging.

Request bodies carry passwords and responses carry bearer tokens; both pass
through here before reaching a DEBUG log line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "cookie",
        "set-cookie",
    }
)

_MAX_DEPTH = 20


def _is_sensitive(key: Any) -> bool:
    return str(key).replace("_", "").lower() in _SENSITIVE_KEYS


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* with secret fields masked and long strings cut."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _truncate(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_sensitive(k) else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return repr(value)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Mask credential headers, keeping the auth scheme visible.

    ``Authorization: Bearer abc`` is logged as ``Bearer <redacted>`` so a
    reader can still tell whether the header was attached.
    """
    redacted: dict[str, str] = {}
    for name, value in headers.items():
        if not _is_sensitive(name):
            redacted[name] = value
            continue
        scheme, _, credential = value.partition(" ")
        redacted[name] = f"{scheme} {REDACTED}" if credential else REDACTED
    return redacted
