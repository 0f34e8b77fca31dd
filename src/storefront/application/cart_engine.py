"""Application service: the active session's cart.

Reads product snapshots from the catalog to admit or reject cart
mutations. Never writes to the catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from storefront.domain.exceptions import CartLockedError, EntityNotFoundError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class CartEngine:

    def __init__(self, catalog: CatalogRepository, cart: Cart | None = None) -> None:
        self._catalog = catalog
        self._cart = cart if cart is not None else Cart()
        self._busy = False

    # --- Locking --------------------------------------------------------------

    @property
    def busy(self) -> bool:
        """True while a checkout commit holds the cart."""
        return self._busy

    @contextmanager
    def lock(self) -> Iterator[Cart]:
        """Hold the cart exclusively; mutations from elsewhere are refused."""
        self._ensure_unlocked()
        self._busy = True
        try:
            yield self._cart
        finally:
            self._busy = False

    # --- Reads ----------------------------------------------------------------

    @property
    def cart(self) -> Cart:
        self.prune()
        return self._cart

    @property
    def lines(self) -> list[CartLine]:
        return list(self.cart.lines)

    def total(self) -> Money:
        return self.cart.total()

    def prune(self) -> list[CartLine]:
        """Drop lines whose product has been deleted from the catalog."""
        if self._cart.is_empty or self._busy:
            return []
        dropped = self._cart.retain({p.id for p in self._catalog.list_all()})
        for line in dropped:
            logger.warning(
                "Removed %s from cart: product no longer in catalog", line.product_id
            )
        return dropped

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product_id: str, quantity: int = 1) -> Cart:
        """Add units of a product, checked against its current stock.

        Raises StockExceededError, leaving the cart as it was, if the line
        would end up above stock.
        """
        self._ensure_unlocked()
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._cart.add_item(product, quantity)
        return self.cart

    def set_quantity(self, product_id: str, delta: int) -> Cart:
        self._ensure_unlocked()
        self._cart.set_quantity(product_id, delta)
        return self.cart

    def remove_item(self, product_id: str) -> Cart:
        self._ensure_unlocked()
        self._cart.remove_item(product_id)
        return self.cart

    def clear(self) -> Cart:
        self._ensure_unlocked()
        self._cart.clear()
        return self._cart

    def _ensure_unlocked(self) -> None:
        if self._busy:
            raise CartLockedError("The cart is locked while checkout is in progress")
