"""Secure key-value storage for session credentials.

Two backends implement the :class:`SecureStore` protocol:

* :class:`MemorySecureStore` keeps values for the lifetime of the process.
* :class:`EncryptedFileStore` keeps a single Fernet-encrypted JSON document
  on disk so a session survives restarts.

:class:`TokenStorage` is the typed facade the rest of the library talks to.
It is the only owner of the auth token; the HTTP transport reads the token
through it on every request.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken

from pykutuku._constants import REFRESH_TOKEN_KEY, TOKEN_KEY, USER_ID_KEY
from pykutuku.exceptions import KutukuStorageError

_logger = logging.getLogger(__name__)


class SecureStore(Protocol):
    """Asynchronous key-value store for secrets.

    ``read`` returns ``None`` for a missing key instead of raising.
    Backend failures raise :class:`KutukuStorageError`.
    """

    async def save(self, key: str, value: str) -> None: ...

    async def read(self, key: str) -> str | None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_all(self) -> None: ...


class MemorySecureStore:
    """In-process store; nothing is written to disk."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def save(self, key: str, value: str) -> None:
        self._values[key] = value

    async def read(self, key: str) -> str | None:
        return self._values.get(key)

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)

    async def delete_all(self) -> None:
        self._values.clear()


class EncryptedFileStore:
    """Fernet-encrypted JSON document on disk.

    Every operation reloads the file so that several processes (or several
    store instances) sharing a path observe each other's writes. Blocking
    file I/O runs in a worker thread via :func:`asyncio.to_thread`.

    Parameters
    ----------
    path : str or Path
        File holding the encrypted document. Parent directories are created
        on first write. A missing file reads as an empty store.
    key : str or bytes
        URL-safe base64 Fernet key, as returned by :meth:`generate_key`.
    """

    def __init__(self, path: str | Path, key: str | bytes) -> None:
        self._path = Path(path)
        key_bytes = key.encode("utf-8") if isinstance(key, str) else key
        try:
            self._fernet = Fernet(key_bytes)
        except ValueError as exc:
            raise KutukuStorageError(f"Invalid storage key: {exc}") from exc
        self._lock = asyncio.Lock()

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            token = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise KutukuStorageError(f"Cannot read secure store {self._path}: {exc}") from exc

        try:
            plaintext = self._fernet.decrypt(token)
        except InvalidToken as exc:
            raise KutukuStorageError(f"Secure store {self._path} cannot be decrypted with the configured key") from exc

        try:
            document = json.loads(plaintext)
        except json.JSONDecodeError as exc:
            raise KutukuStorageError(f"Secure store {self._path} is corrupt") from exc
        if not isinstance(document, dict):
            raise KutukuStorageError(f"Secure store {self._path} is corrupt")
        return {str(k): str(v) for k, v in document.items()}

    def _dump(self, values: dict[str, str]) -> None:
        token = self._fernet.encrypt(json.dumps(values, separators=(",", ":"), sort_keys=True).encode("utf-8"))
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(token)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise KutukuStorageError(f"Cannot write secure store {self._path}: {exc}") from exc

    def _update(self, key: str, value: str | None) -> None:
        values = self._load()
        if value is None:
            if key not in values:
                return
            values.pop(key)
        else:
            values[key] = value
        self._dump(values)

    async def save(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._update, key, value)

    async def read(self, key: str) -> str | None:
        async with self._lock:
            values = await asyncio.to_thread(self._load)
        return values.get(key)

    async def delete(self, key: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._update, key, None)

    async def delete_all(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self._dump, {})


class TokenStorage:
    """Typed access to the persisted session entries.

    Keys: ``auth_token``, ``refresh_token`` and ``user_id``. Arbitrary
    values can be kept alongside via :meth:`save_value`.
    """

    def __init__(self, store: SecureStore) -> None:
        self._store = store

    @property
    def store(self) -> SecureStore:
        return self._store

    async def save_token(self, token: str) -> None:
        await self._store.save(TOKEN_KEY, token)

    async def get_token(self) -> str | None:
        return await self._store.read(TOKEN_KEY)

    async def delete_token(self) -> None:
        await self._store.delete(TOKEN_KEY)

    async def save_refresh_token(self, refresh_token: str) -> None:
        await self._store.save(REFRESH_TOKEN_KEY, refresh_token)

    async def get_refresh_token(self) -> str | None:
        return await self._store.read(REFRESH_TOKEN_KEY)

    async def delete_refresh_token(self) -> None:
        await self._store.delete(REFRESH_TOKEN_KEY)

    async def save_user_id(self, user_id: int) -> None:
        await self._store.save(USER_ID_KEY, str(user_id))

    async def get_user_id(self) -> int | None:
        raw = await self._store.read(USER_ID_KEY)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            _logger.warning("Ignoring non-numeric stored user id")
            return None

    async def delete_user_id(self) -> None:
        await self._store.delete(USER_ID_KEY)

    async def save_value(self, key: str, value: str) -> None:
        await self._store.save(key, value)

    async def get_value(self, key: str) -> str | None:
        return await self._store.read(key)

    async def delete_value(self, key: str) -> None:
        await self._store.delete(key)

    async def clear_all(self) -> None:
        await self._store.delete_all()

    async def is_logged_in(self) -> bool:
        """Whether a token is stored. Does not validate it with the server."""
        return await self.get_token() is not None
