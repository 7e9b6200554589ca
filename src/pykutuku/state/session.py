"""Session container: who is logged in."""

from __future__ import annotations

import logging
from enum import StrEnum

from pykutuku.models.user import User
from pykutuku.services import AuthService
from pykutuku.state.async_value import LOADING, AsyncData, AsyncError, AsyncLoading, AsyncValue
from pykutuku.state.notifier import StateNotifier

_logger = logging.getLogger(__name__)

_ANONYMOUS: AsyncData[User | None] = AsyncData(None)


class SessionStatus(StrEnum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    FAILED = "failed"


class SessionNotifier(StateNotifier[AsyncValue[User | None]]):
    """Tracks the current user as ``AsyncValue[User | None]``.

    ``AsyncData(None)`` is the anonymous state and the initial one.
    Container methods never raise: failures become :class:`AsyncError`.

    Overlapping :meth:`login` calls are not coalesced; whichever request
    completes last determines the final state.
    """

    def __init__(self, auth_service: AuthService) -> None:
        super().__init__(_ANONYMOUS)
        self._auth = auth_service

    @property
    def status(self) -> SessionStatus:
        state = self.state
        if isinstance(state, AsyncLoading):
            return SessionStatus.LOADING
        if isinstance(state, AsyncError):
            return SessionStatus.FAILED
        return SessionStatus.ANONYMOUS if state.value is None else SessionStatus.AUTHENTICATED

    @property
    def user(self) -> User | None:
        state = self.state
        return state.value if isinstance(state, AsyncData) else None

    async def login(self, username: str, password: str) -> None:
        self.state = LOADING
        try:
            user = await self._auth.login(username, password)
        except Exception as exc:
            _logger.info("Login failed: %s", exc)
            self.state = AsyncError(exc)
            return
        self.state = AsyncData(user)

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User | None:
        """Create an account; the session stays anonymous.

        Returns the created user, or ``None`` when signup failed (the
        error is in :attr:`state`).
        """
        self.state = LOADING
        try:
            user = await self._auth.signup(
                username,
                email,
                password,
                first_name=first_name,
                last_name=last_name,
            )
        except Exception as exc:
            _logger.info("Signup failed: %s", exc)
            self.state = AsyncError(exc)
            return None
        self.state = _ANONYMOUS
        return user

    async def logout(self) -> None:
        try:
            await self._auth.logout()
        except Exception:
            # Local state still resets to anonymous.
            _logger.exception("Clearing stored session failed")
        self.state = _ANONYMOUS

    async def restore_session(self) -> None:
        """Validate a persisted token at startup.

        A token the server rejects is deleted so it does not linger.
        """
        self.state = LOADING
        try:
            if not await self._auth.is_logged_in():
                self.state = _ANONYMOUS
                return
            user = await self._auth.get_current_user()
        except Exception as exc:
            _logger.info("Stored session is no longer valid: %s", exc)
            await self.logout()
            return
        self.state = AsyncData(user)
