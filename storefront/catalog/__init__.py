"""
In-memory product catalog: models, store and default seed data.
"""
from .models import Product, ProductFields, ProductUpdate, ProductType
from .store import CatalogStore
from .seed import default_catalog

__all__ = [
    'Product',
    'ProductFields',
    'ProductUpdate',
    'ProductType',
    'CatalogStore',
    'default_catalog',
]
