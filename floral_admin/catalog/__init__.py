"""Catalog entities, collaborator callbacks and the admin panel controller."""

from floral_admin.catalog.callbacks import CatalogCallbacks, InMemoryCatalog
from floral_admin.catalog.models import CATEGORY_LABELS, Category, Offer, Product, ProductDraft
from floral_admin.catalog.panel import AdminPanel

__all__ = [
    "AdminPanel",
    "CATEGORY_LABELS",
    "CatalogCallbacks",
    "Category",
    "InMemoryCatalog",
    "Offer",
    "Product",
    "ProductDraft",
]
