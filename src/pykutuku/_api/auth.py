"""Auth endpoints.

Endpoints:
  - /auth/login
  - /users/add
  - /auth/me
"""

from __future__ import annotations

import logging
from typing import Any

from pykutuku._api._common import validate_model
from pykutuku._constants import LOGIN_PATH
from pykutuku._redact import redact_for_log
from pykutuku.models.user import User

_logger = logging.getLogger(__name__)


def extract_token(response: dict[str, Any]) -> str | None:
    """Return the session token carried by a login response, if any."""
    for key in ("token", "accessToken"):
        value = response.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_user(decoded: Any, *, endpoint: str) -> User:
    user = validate_model(User, decoded, endpoint=endpoint)
    _logger.debug("%s user parsed=%s", endpoint, redact_for_log(user.raw))
    return user


def parse_login_response(decoded: Any) -> tuple[User, str | None]:
    """Parse a login response.

    Returns
    -------
    tuple[User, str | None]
        The user and the token to persist (``None`` when the server did
        not issue one).
    """
    user = parse_user(decoded, endpoint=LOGIN_PATH)
    return user, extract_token(user.raw)
