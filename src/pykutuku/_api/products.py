"""Product catalog endpoints.

Endpoints:
  - /products
  - /products/{id}
  - /products/search
  - /products/categories
  - /products/category/{name}
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from pykutuku._api._common import validate_model
from pykutuku._constants import CATEGORY_PRODUCTS_PATH, PRODUCTS_PATH
from pykutuku.models.product import Product, ProductPage

_logger = logging.getLogger(__name__)


def product_path(product_id: int) -> str:
    return f"{PRODUCTS_PATH}/{int(product_id)}"


def category_path(name: str) -> str:
    return f"{CATEGORY_PRODUCTS_PATH}/{quote(name, safe='')}"


def parse_product(decoded: Any, *, endpoint: str) -> Product:
    return validate_model(Product, decoded, endpoint=endpoint)


def parse_product_page(decoded: Any, *, endpoint: str) -> ProductPage:
    return validate_model(ProductPage, decoded, endpoint=endpoint)


def _category_name(item: Any) -> str | None:
    # Newer backends return {"slug", "name", "url"} objects instead of strings.
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        slug = item.get("slug") or item.get("name")
        if isinstance(slug, str):
            return slug
    return None


def parse_categories(decoded: Any) -> list[str]:
    """Normalize the categories response.

    The endpoint answers with either a bare array or an object wrapping it
    under ``categories``; both are accepted. Any other shape yields an empty
    list and a warning instead of an error.
    """
    if isinstance(decoded, list):
        items: Any = decoded
    elif isinstance(decoded, dict) and isinstance(decoded.get("categories"), list):
        items = decoded["categories"]
    else:
        _logger.warning("Unexpected categories response shape: %s", type(decoded).__name__)
        return []

    categories: list[str] = []
    for item in items:
        name = _category_name(item)
        if name is None:
            _logger.warning("Skipping unrecognized category entry: %r", item)
            continue
        categories.append(name)
    return categories
