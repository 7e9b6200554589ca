"""User model."""

from __future__ import annotations

from typing import ClassVar

from pykutuku.models._base import KutukuBaseModel


class User(KutukuBaseModel):
    """An account returned by login, signup or ``/auth/me``.

    ``token`` and ``refresh_token`` are only present on a login response.
    The backend names them ``accessToken``/``refreshToken``; older
    deployments send a bare ``token``. Both spellings land in ``token``.
    """

    _KEY_ALIASES: ClassVar[dict[str, str]] = {"accessToken": "token"}

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    image: str | None = None
    token: str | None = None
    refresh_token: str | None = None

    @property
    def full_name(self) -> str:
        """First and last name, falling back to the username."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.username
