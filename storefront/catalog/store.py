"""
In-memory catalog store.

Single authority over the live product set. Every operation runs under one
lock, so a read never observes a half-applied write and concurrent updates
to the same product apply in arrival order (last write wins). Callers always
receive copies; the internal table is never handed out.
"""

from __future__ import annotations

import itertools
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import DEFAULT_PRICE, PLACEHOLDER_IMAGE, Product, ProductFields, ProductUpdate, parse_model

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(
        self,
        seed: Optional[Iterable[Product]] = None,
        default_price: str = DEFAULT_PRICE,
        placeholder_image: str = PLACEHOLDER_IMAGE,
    ) -> None:
        self.default_price = default_price
        self.placeholder_image = placeholder_image
        self._lock = threading.RLock()
        # product_id -> (insertion sequence, product)
        self._products: Dict[str, Tuple[int, Product]] = {}
        self._sequence = itertools.count()

        for product in seed or ():
            self._insert(product.model_copy(deep=True))
        if self._products:
            logger.info("Catalog seeded with %d products", len(self._products))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def list_all(self) -> List[Product]:
        """Every live product, newest first."""
        with self._lock:
            entries = list(self._products.values())
        # Same timestamp: later insert first.
        entries.sort(key=lambda e: (e[1].created_at, e[0]), reverse=True)
        return [product.model_copy(deep=True) for _, product in entries]

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            entry = self._products.get(product_id)
            return entry[1].model_copy(deep=True) if entry else None

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def create(self, fields: Mapping[str, Any]) -> Product:
        """
        Validate `fields` and add a new product.

        Raises:
            CatalogValidationError: title/description missing or empty, or a
                field has the wrong type.
        """
        data = parse_model(ProductFields, fields).model_dump()
        if data.get("price") is None:
            data["price"] = self.default_price
        if data.get("image") is None:
            data["image"] = self.placeholder_image

        with self._lock:
            product_id = self._new_id()
            product = Product(id=product_id, created_at=datetime.now(timezone.utc), **data)
            self._insert(product)
            logger.info("Product created: id=%s title=%r", product_id, product.title)
            return product.model_copy(deep=True)

    def update(self, product_id: str, partial: Mapping[str, Any]) -> Optional[Product]:
        """
        Shallow-merge the supplied fields onto an existing product.

        Returns None when `product_id` is unknown. `id` and `createdAt` in the
        partial are ignored.
        """
        changes = parse_model(ProductUpdate, partial).changes()

        with self._lock:
            entry = self._products.get(product_id)
            if entry is None:
                return None
            sequence, existing = entry
            updated = existing.model_copy(update=changes, deep=True)
            self._products[product_id] = (sequence, updated)
            if changes:
                logger.info("Product updated: id=%s fields=%s", product_id, sorted(changes))
            return updated.model_copy(deep=True)

    def delete(self, product_id: str) -> bool:
        with self._lock:
            removed = self._products.pop(product_id, None) is not None
        if removed:
            logger.info("Product deleted: id=%s", product_id)
        return removed

    # ------------------------------------------------------------------ #
    # Internals (lock held by caller)
    # ------------------------------------------------------------------ #
    def _insert(self, product: Product) -> None:
        if product.id in self._products:
            raise ValueError(f"Duplicate product id: {product.id}")
        self._products[product.id] = (next(self._sequence), product)

    def _new_id(self) -> str:
        product_id = str(uuid.uuid4())
        while product_id in self._products:
            product_id = str(uuid.uuid4())
        return product_id
