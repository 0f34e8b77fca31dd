"""Application service: Wishlist use cases."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.user_order_ledger import UserOrderLedger


class WishlistHandler:

    def __init__(self, ledger: UserOrderLedger, catalog: CatalogRepository) -> None:
        self._ledger = ledger
        self._catalog = catalog

    def toggle(self, username: str | None, product_id: str) -> bool:
        """Flip a product in or out of the wishlist. Returns True if added.

        Ids of deleted products can still be removed, but not added.
        """
        wishlist = self._ledger.load_wishlist(username)
        if product_id not in wishlist and self._catalog.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_id in self._ledger.toggle_wishlist(username, product_id)

    def products(self, username: str | None) -> list[Product]:
        """Wishlisted products still in the catalog, in catalog order."""
        wishlist = self._ledger.load_wishlist(username)
        return [p for p in self._catalog.list_all() if p.id in wishlist]
