"""
Catalog CRUD endpoints.

Every successful mutation is broadcast to connected viewers right after the
store applies it; failures raise before any broadcast happens.
"""

from fastapi import APIRouter, Body, Depends, status

from storefront.api.dependencies import get_notifier, get_store
from storefront.catalog.store import CatalogStore
from storefront.errors import ProductNotFoundError
from storefront.notifier.broadcaster import ChangeNotifier

router = APIRouter()


@router.get("/products", tags=["Products"])
async def list_products(store: CatalogStore = Depends(get_store)):
    """All products, newest first."""
    return [p.to_public() for p in store.list_all()]


@router.get("/products/{product_id}", tags=["Products"])
async def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
    product = store.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product.to_public()


@router.post("/products", status_code=status.HTTP_201_CREATED, tags=["Products"])
async def create_product(
    payload: dict = Body(...),
    store: CatalogStore = Depends(get_store),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    product = store.create(payload).to_public()
    notifier.broadcast("product_added", product)
    return product


@router.put("/products/{product_id}", tags=["Products"])
@router.patch("/products/{product_id}", tags=["Products"])
async def update_product(
    product_id: str,
    payload: dict = Body(...),
    store: CatalogStore = Depends(get_store),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    updated = store.update(product_id, payload)
    if updated is None:
        raise ProductNotFoundError(product_id)
    product = updated.to_public()
    notifier.broadcast("product_updated", product)
    return product


@router.delete("/products/{product_id}", tags=["Products"])
async def delete_product(
    product_id: str,
    store: CatalogStore = Depends(get_store),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    if not store.delete(product_id):
        raise ProductNotFoundError(product_id)
    notifier.broadcast("product_deleted", {"id": product_id})
    return {"success": True}
