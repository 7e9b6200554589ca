"""Pydantic request models for service entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :mod:`pykutuku.services`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pykutuku._constants import DEFAULT_LIMIT, DEFAULT_SKIP


class _Request(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _non_empty(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must be non-empty")
    return value


class LoginRequest(_Request):
    username: str
    password: str = Field(repr=False)

    @field_validator("username")
    @classmethod
    def _username_non_empty(cls, value: str) -> str:
        return _non_empty(value, "username").strip()

    @field_validator("password")
    @classmethod
    def _password_non_empty(cls, value: str) -> str:
        return _non_empty(value, "password")


class SignupRequest(LoginRequest):
    email: str
    first_name: str | None = Field(default=None, serialization_alias="firstName")
    last_name: str | None = Field(default=None, serialization_alias="lastName")

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value


class PageRequest(_Request):
    """Pagination window sent as ``limit``/``skip`` query parameters."""

    limit: int = Field(default=DEFAULT_LIMIT, ge=0)
    skip: int = Field(default=DEFAULT_SKIP, ge=0)

    def to_query(self) -> dict[str, int]:
        return {"limit": self.limit, "skip": self.skip}
