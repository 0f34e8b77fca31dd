"""Abstract repository for per-user wishlists and order history."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.model.wishlist import Wishlist


class UserOrderLedger(ABC):

    @abstractmethod
    def load_wishlist(self, username: str | None) -> Wishlist:
        """Return the user's wishlist (empty if none stored)."""

    @abstractmethod
    def save_wishlist(self, username: str | None, product_ids: list[str]) -> None:
        """Replace the user's wishlist."""

    @abstractmethod
    def toggle_wishlist(self, username: str | None, product_id: str) -> Wishlist:
        """Add the id if absent, remove it if present, and persist."""

    @abstractmethod
    def load_orders(self, username: str | None) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def save_orders(self, username: str | None, orders: list[Order]) -> None:
        """Replace the user's order history."""

    @abstractmethod
    def prepend_order(self, username: str | None, order: Order) -> None:
        """Record a newly placed order at the head of the history."""
