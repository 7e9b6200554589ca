"""Data models for Kutuku API payloads."""

from pykutuku.models._base import KutukuBaseModel
from pykutuku.models.product import Product, ProductDimensions, ProductPage, ProductReview
from pykutuku.models.requests import LoginRequest, PageRequest, SignupRequest
from pykutuku.models.user import User

__all__ = [
    "KutukuBaseModel",
    "LoginRequest",
    "PageRequest",
    "Product",
    "ProductDimensions",
    "ProductPage",
    "ProductReview",
    "SignupRequest",
    "User",
]
