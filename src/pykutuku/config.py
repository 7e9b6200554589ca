"""Client configuration for pykutuku."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pykutuku._constants import BASE_URL, DEFAULT_LIMIT, DEFAULT_TIMEOUT, USER_AGENT
from pykutuku.exceptions import KutukuConfigError


def _env_number(env: dict[str, str] | os._Environ[str], key: str, cast: type) -> Any:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise KutukuConfigError(f"{key} must be a {cast.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class KutukuConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL. Defaults to the public DummyJSON backend.
    timeout : float
        Total per-request deadline in seconds.
    page_size : int
        Number of products fetched per catalog page.
    storage_path : str or None
        Location of the encrypted token file. ``None`` keeps tokens in
        memory for the lifetime of the process only.
    storage_key : str or None
        Fernet key used to encrypt ``storage_path``. Required when
        ``storage_path`` is set.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_LIMIT
    storage_path: str | None = None
    storage_key: str | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise KutukuConfigError(f"timeout must be positive, got {self.timeout}")
        if self.page_size <= 0:
            raise KutukuConfigError(f"page_size must be positive, got {self.page_size}")
        if self.storage_path and not self.storage_key:
            raise KutukuConfigError("storage_key is required when storage_path is set")
        # Paths are appended verbatim, so drop a trailing slash once here.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> KutukuConfig:
        """Create configuration from ``KUTUKU_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "KUTUKU_BASE_URL": "base_url",
            "KUTUKU_STORAGE_PATH": "storage_path",
            "KUTUKU_STORAGE_KEY": "storage_key",
            "KUTUKU_USER_AGENT": "user_agent",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout = _env_number(env, "KUTUKU_TIMEOUT", float)
        if timeout is not None:
            config_kwargs["timeout"] = timeout

        page_size = _env_number(env, "KUTUKU_PAGE_SIZE", int)
        if page_size is not None:
            config_kwargs["page_size"] = page_size

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
