"""Custom exception hierarchy for pykutuku."""

from __future__ import annotations

GENERIC_ERROR_MESSAGE = "Request failed"


class KutukuError(Exception):
    """Base exception for all pykutuku errors."""

    code: str = "unknown"
    retryable: bool = False

    @property
    def message(self) -> str:
        """Displayable message, never blank."""
        text = str(self).strip()
        return text or GENERIC_ERROR_MESSAGE


class KutukuConfigError(KutukuError):
    """Invalid or missing configuration."""

    code = "config"


class KutukuStorageError(KutukuError):
    """Secure key-value store unavailable or unreadable."""

    code = "storage"


class KutukuTransportError(KutukuError):
    """Failure raised by the HTTP request pipeline."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        method: str = "",
    ) -> None:
        self.endpoint = endpoint
        self.method = method
        super().__init__(message)


class KutukuNetworkError(KutukuTransportError):
    """Server unreachable (offline, DNS failure, connection refused)."""

    code = "network"
    retryable = True


class KutukuTimeoutError(KutukuTransportError):
    """Request exceeded the configured deadline."""

    code = "timeout"
    retryable = True


class KutukuProtocolError(KutukuTransportError):
    """Server answered 2xx but the body could not be decoded.

    Usually means the API contract drifted; retrying will not help.
    """

    code = "protocol"


class KutukuHttpError(KutukuTransportError):
    """Server responded with a status code outside 2xx."""

    code = "http"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
        method: str = "",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint, method=method)


class KutukuAuthenticationError(KutukuHttpError):
    """Credentials rejected or session token no longer valid (401/403)."""
