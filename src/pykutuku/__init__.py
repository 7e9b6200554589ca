"""pykutuku - Async Python client for the Kutuku catalog and auth API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pykutuku")
except PackageNotFoundError:
    __version__ = "0+local"
from pykutuku.client import KutukuClient
from pykutuku.config import KutukuConfig
from pykutuku.exceptions import (
    KutukuAuthenticationError,
    KutukuConfigError,
    KutukuError,
    KutukuHttpError,
    KutukuNetworkError,
    KutukuProtocolError,
    KutukuStorageError,
    KutukuTimeoutError,
    KutukuTransportError,
)
from pykutuku.models import (
    LoginRequest,
    PageRequest,
    Product,
    ProductDimensions,
    ProductPage,
    ProductReview,
    SignupRequest,
    User,
)
from pykutuku.services import AuthService, ProductService
from pykutuku.state import (
    AsyncData,
    AsyncError,
    AsyncLoading,
    AsyncValue,
    CatalogNotifier,
    FutureNotifier,
    SessionNotifier,
    SessionStatus,
    StateNotifier,
)
from pykutuku.storage import EncryptedFileStore, MemorySecureStore, SecureStore, TokenStorage

__all__ = [
    "__version__",
    "AsyncData",
    "AsyncError",
    "AsyncLoading",
    "AsyncValue",
    "AuthService",
    "CatalogNotifier",
    "EncryptedFileStore",
    "FutureNotifier",
    "KutukuAuthenticationError",
    "KutukuClient",
    "KutukuConfig",
    "KutukuConfigError",
    "KutukuError",
    "KutukuHttpError",
    "KutukuNetworkError",
    "KutukuProtocolError",
    "KutukuStorageError",
    "KutukuTimeoutError",
    "KutukuTransportError",
    "LoginRequest",
    "MemorySecureStore",
    "PageRequest",
    "Product",
    "ProductDimensions",
    "ProductPage",
    "ProductReview",
    "ProductService",
    "SecureStore",
    "SessionNotifier",
    "SessionStatus",
    "SignupRequest",
    "StateNotifier",
    "TokenStorage",
    "User",
]
