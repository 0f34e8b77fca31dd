"""Application service: Browse Catalog use case (query)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_repository import CatalogRepository

ALL_CATEGORIES = "All"


class BrowseCatalogHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def search(
        self,
        query: str = "",
        category: str = ALL_CATEGORIES,
        in_stock_only: bool = False,
    ) -> list[Product]:
        """Filter the catalog.

        ``query`` matches name or description, case-insensitively.
        """
        needle = query.strip().lower()
        results = []
        for product in self._catalog.list_all():
            if needle and needle not in product.name.lower() \
                    and needle not in product.description.lower():
                continue
            if category != ALL_CATEGORIES and product.category != category:
                continue
            if in_stock_only and not product.in_stock:
                continue
            results.append(product)
        return results

    def categories(self) -> list[str]:
        seen = dict.fromkeys(p.category for p in self._catalog.list_all())
        return [ALL_CATEGORIES, *seen]

    def get(self, product_id: str) -> Product:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def related(self, product_id: str, limit: int = 4) -> list[Product]:
        """Other products in the same category."""
        product = self.get(product_id)
        return [
            p for p in self._catalog.list_all()
            if p.category == product.category and p.id != product.id
        ][:limit]
