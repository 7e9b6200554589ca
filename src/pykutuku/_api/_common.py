"""Shared helpers for endpoint payload parsing.

It is internal to pykutuku and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pykutuku.exceptions import KutukuProtocolError

TModel = TypeVar("TModel", bound=BaseModel)


def require_object(decoded: Any, *, endpoint: str) -> dict[str, Any]:
    """Return *decoded* if it is a JSON object, raise otherwise."""
    if not isinstance(decoded, dict):
        raise KutukuProtocolError(
            f"{endpoint} returned {type(decoded).__name__}, expected an object",
            endpoint=endpoint,
        )
    return decoded


def validate_model(model: type[TModel], decoded: Any, *, endpoint: str) -> TModel:
    """Validate a decoded payload into *model*.

    A payload that does not fit the model is API contract drift, surfaced
    as :class:`KutukuProtocolError` rather than a raw pydantic error.
    """
    payload = require_object(decoded, endpoint=endpoint)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise KutukuProtocolError(
            f"{endpoint} returned an unexpected {model.__name__} payload: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
        ) from exc
