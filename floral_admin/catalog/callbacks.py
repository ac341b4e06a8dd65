"""Catalog collaborator callbacks and an in-memory implementation.

The admin panel never stores catalog data itself; it hands fully-formed entities
to whatever implements CatalogCallbacks (the storefront's own state).
"""

import logging
from typing import Protocol

from floral_admin.catalog.models import Offer, Product

_log = logging.getLogger(__name__)


class CatalogCallbacks(Protocol):
    def add_product(self, product: Product) -> None: ...

    def update_product(self, product: Product) -> None: ...

    def delete_product(self, product_id: str) -> None: ...

    def reset_products(self) -> None: ...

    def add_offer(self, offer: Offer) -> None: ...

    def delete_offer(self, offer_id: str) -> None: ...

    def update_password(self, new_password: str) -> None: ...


class InMemoryCatalog:
    """
    CatalogCallbacks backed by dicts. Lives only as long as the process.

    reset_products() restores the defaults given at construction.
    """

    def __init__(
        self,
        default_products: list[Product] | None = None,
        *,
        admin_password: str = "admin",
    ) -> None:
        self._defaults = list(default_products or [])
        self.products: dict[str, Product] = {p.id: p for p in self._defaults}
        self.offers: dict[str, Offer] = {}
        self.admin_password = admin_password

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product
        _log.info("Added product %s (%s)", product.id, product.name)

    def update_product(self, product: Product) -> None:
        if product.id not in self.products:
            _log.warning("Update for unknown product %s ignored", product.id)
            return
        self.products[product.id] = product
        _log.info("Updated product %s", product.id)

    def delete_product(self, product_id: str) -> None:
        if self.products.pop(product_id, None) is not None:
            _log.info("Deleted product %s", product_id)

    def reset_products(self) -> None:
        self.products = {p.id: p for p in self._defaults}
        _log.info("Catalog reset to %s default product(s)", len(self.products))

    def add_offer(self, offer: Offer) -> None:
        self.offers[offer.id] = offer
        _log.info("Added offer %s", offer.id)

    def delete_offer(self, offer_id: str) -> None:
        if self.offers.pop(offer_id, None) is not None:
            _log.info("Deleted offer %s", offer_id)

    def update_password(self, new_password: str) -> None:
        self.admin_password = new_password
        _log.info("Admin password updated")
