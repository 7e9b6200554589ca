"""Product catalog models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from pykutuku.models._base import KutukuBaseModel


class ProductDimensions(KutukuBaseModel):
    """Package dimensions in centimetres."""

    width: float
    height: float
    depth: float


class ProductReview(KutukuBaseModel):
    """A customer review attached to a product."""

    rating: int
    comment: str = ""
    date: str = ""
    """ISO-8601 timestamp as sent by the server."""
    reviewer_name: str = ""
    reviewer_email: str = ""


class Product(KutukuBaseModel):
    """A catalog item.

    Only ``id``, ``title``, ``description``, ``category`` and ``price`` are
    guaranteed; search and category listings can return trimmed objects.
    """

    id: int
    title: str
    description: str = ""
    category: str = ""
    price: float
    discount_percentage: float | None = None
    rating: float | None = None
    review_count: int | None = None
    stock: int | None = None
    availability_status: str | None = None
    minimum_order_quantity: int | None = None
    brand: str | None = None
    sku: str | None = None
    weight: float | None = None
    dimensions: ProductDimensions | None = None
    tags: list[str] | None = None
    warranty_information: str | None = None
    shipping_information: str | None = None
    return_policy: str | None = None
    thumbnail: str | None = None
    images: list[str] = Field(default_factory=list)
    reviews: list[ProductReview] = Field(default_factory=list)
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _derive_review_count(self) -> Product:
        if self.review_count is None and self.reviews:
            object.__setattr__(self, "review_count", len(self.reviews))
        return self

    @property
    def discounted_price(self) -> float:
        """Price after ``discount_percentage``, rounded to cents."""
        if not self.discount_percentage:
            return self.price
        return round(self.price * (1 - self.discount_percentage / 100), 2)


class ProductPage(KutukuBaseModel):
    """One page of a paginated product listing.

    ``skip + len(products) <= total`` is expected but not enforced; the
    server is the source of truth.
    """

    products: list[Product] = Field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 0

    @field_validator("total", "skip", "limit", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value

    @classmethod
    def empty(cls) -> ProductPage:
        return cls(products=[], total=0, skip=0, limit=0, raw={})

    @property
    def has_more(self) -> bool:
        return self.skip + len(self.products) < self.total
