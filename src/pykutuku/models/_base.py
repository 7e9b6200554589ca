"""Base model for Kutuku API payloads.

Every response model inherits from :class:`KutukuBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map automatically
  to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used.
* A ``raw`` dict that captures the original payload. It is excluded from
  :meth:`KutukuBaseModel.to_payload`.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class KutukuBaseModel(BaseModel):
    """Frozen, camelCase-aliased model with a ``raw`` payload stash."""

    _KEY_ALIASES: ClassVar[dict[str, str]] = {}
    """Wire keys renamed before validation (``{"accessToken": "token"}``).

    An alias only applies when the target key is absent, so a payload
    carrying both keeps the canonical one.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        original = dict(values)

        working = dict(values)
        for old_key, new_key in cls._KEY_ALIASES.items():
            if old_key in working and new_key not in working:
                working[new_key] = working.pop(old_key)

        cleaned = {key: value for key, value in working.items() if value is not None}
        # Keep a caller-supplied raw (kwargs construction); stash the payload otherwise.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned

    def to_payload(self) -> dict[str, Any]:
        """Re-encode to the camelCase wire shape, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
