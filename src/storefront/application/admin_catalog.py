"""Application service: catalog administration (create, edit, delete).

Only the admin identity may change the catalog. Placed orders hold their
own copies of product data, so none of these touch order history.
"""

from __future__ import annotations

from storefront.domain.exceptions import PermissionDeniedError
from storefront.domain.model.identity import Identity
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_repository import (
    CatalogRepository,
    ProductDraft,
)


class AdminCatalogHandler:

    def __init__(self, catalog: CatalogRepository, identity: Identity | None) -> None:
        if identity is None or not identity.is_admin:
            raise PermissionDeniedError("Only the admin can manage the catalog")
        self._catalog = catalog

    def add(self, draft: ProductDraft) -> Product:
        return self._catalog.create(draft)

    def update(self, product_id: str, patch: dict[str, object]) -> Product:
        """Apply an edit. Fields left out of ``patch`` keep their values."""
        return self._catalog.update(product_id, patch)

    def delete(self, product_id: str) -> None:
        self._catalog.delete(product_id)
