"""Domain errors raised by the catalog store, admin auth and API layer.

The API registers exception handlers for each of these so routes can simply
raise and let the handler build the JSON error body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class CatalogValidationError(Exception):
    """Malformed or missing input. Always client-fixable, mapped to HTTP 400.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: top-level message returned as ``error``.
    """

    field_errors: Dict[str, str] = field(default_factory=dict)
    message: str = "Invalid product data"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ProductNotFoundError(Exception):
    """Operation targeted a product id that is not in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class AuthFailure(Exception):
    """Wrong or missing admin credential."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
        self.message = message
