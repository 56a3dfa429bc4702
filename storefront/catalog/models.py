"""
Pydantic models for catalog products.

`ProductFields` is the creation input, `ProductUpdate` the partial update
input and `Product` the stored record. JSON uses camelCase for `joinLink` and
`createdAt`; Python code uses snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storefront.errors import CatalogValidationError

ProductType = Literal["community", "software", "course"]

DEFAULT_PRICE = "Free"
PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1557821552-17105176677c?w=800"

_M = TypeVar("_M", bound=BaseModel)


class _CatalogModel(BaseModel):
    # Unknown keys (including id/createdAt on input) are dropped.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class _InputModel(_CatalogModel):
    # Client input: no coercion ("3" is not an int, "yes" is not a bool).
    model_config = ConfigDict(populate_by_name=True, extra="ignore", strict=True)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class ProductFields(_InputModel):
    """Fields accepted when creating a product."""

    title: str
    description: str
    price: Optional[str] = None
    image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    rating: float = 5
    reviews: int = 0
    featured: bool = False
    type: ProductType = "software"
    category: str = "General"
    join_link: str = Field(default="#", alias="joinLink")

    @field_validator("title", "description")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_text(value)


class ProductUpdate(_InputModel):
    """Partial update: every field optional, but a present field cannot be null."""

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    featured: Optional[bool] = None
    type: Optional[ProductType] = None
    category: Optional[str] = None
    join_link: Optional[str] = Field(default=None, alias="joinLink")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("title", "description")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_text(value)

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class Product(_CatalogModel):
    id: str
    title: str
    description: str
    price: str
    image: str
    tags: List[str] = Field(default_factory=list)
    rating: float = 5
    reviews: int = 0
    featured: bool = False
    type: ProductType = "software"
    category: str = "General"
    join_link: str = Field(default="#", alias="joinLink")
    created_at: datetime = Field(alias="createdAt")

    def to_public(self) -> Dict[str, Any]:
        """JSON-ready dict with the camelCase field names clients expect."""
        return self.model_dump(mode="json", by_alias=True)


def parse_model(model: Type[_M], payload: Any) -> _M:
    """Validate a raw payload, converting pydantic errors to CatalogValidationError."""
    if not isinstance(payload, Mapping):
        raise CatalogValidationError({"body": "must be a JSON object"})
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        field_errors: Dict[str, str] = {}
        for err in e.errors():
            key = ".".join(str(part) for part in err.get("loc", ())) or "body"
            field_errors.setdefault(key, err.get("msg", "invalid value"))
        raise CatalogValidationError(field_errors) from e
