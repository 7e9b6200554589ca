"""Internal constants shared across the library."""

BASE_URL = "https://dummyjson.com"
USER_AGENT = "pykutuku"
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_LIMIT = 10
DEFAULT_SKIP = 0

# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

LOGIN_PATH = "/auth/login"
SIGNUP_PATH = "/users/add"
ME_PATH = "/auth/me"
PRODUCTS_PATH = "/products"
PRODUCT_SEARCH_PATH = "/products/search"
CATEGORIES_PATH = "/products/categories"
CATEGORY_PRODUCTS_PATH = "/products/category"

# ------------------------------------------------------------------
# Secure storage keys
# ------------------------------------------------------------------

TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_ID_KEY = "user_id"

AUTH_FAILURE_STATUSES: frozenset[int] = frozenset({401, 403})
