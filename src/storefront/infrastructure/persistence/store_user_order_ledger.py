"""Store-backed implementation of UserOrderLedger.

Each user gets two keys, ``wishlist:<username>`` and
``orders:<username>``. Orders are kept newest first.
"""

from __future__ import annotations

import logging
from datetime import datetime

from storefront.domain.exceptions import (
    CorruptStateError,
    NoActiveUserError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.model.wishlist import Wishlist
from storefront.domain.repository.key_value_store import (
    KeyValueStore,
    StoreKey,
    orders_key,
    wishlist_key,
)
from storefront.domain.repository.user_order_ledger import UserOrderLedger

logger = logging.getLogger(__name__)


def _require_user(username: str | None) -> str:
    if username is None or not username.strip():
        raise NoActiveUserError("Sign in to use wishlists and order history")
    return username


class StoreUserOrderLedger(UserOrderLedger):

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # --- Wishlist -------------------------------------------------------------

    def load_wishlist(self, username: str | None) -> Wishlist:
        raw = self._load_list(wishlist_key(_require_user(username)))
        return Wishlist([str(pid) for pid in raw])

    def save_wishlist(self, username: str | None, product_ids: list[str]) -> None:
        key = wishlist_key(_require_user(username))
        self._store.save(key, Wishlist(list(product_ids)).product_ids)

    def toggle_wishlist(self, username: str | None, product_id: str) -> Wishlist:
        wishlist = self.load_wishlist(username)
        added = wishlist.toggle(product_id)
        self.save_wishlist(username, wishlist.product_ids)
        logger.debug(
            "%s %s %s wishlist", "Added" if added else "Removed", product_id, username
        )
        return wishlist

    # --- Orders ---------------------------------------------------------------

    def load_orders(self, username: str | None) -> list[Order]:
        key = orders_key(_require_user(username))
        orders: list[Order] = []
        for raw in self._load_list(key):
            try:
                orders.append(self._to_domain(raw))
            except (KeyError, TypeError, ValueError, ValidationError) as exc:
                logger.warning("Skipping unreadable order in %s: %s", key, exc)
        return orders

    def save_orders(self, username: str | None, orders: list[Order]) -> None:
        key = orders_key(_require_user(username))
        self._store.save(key, [self._to_raw(order) for order in orders])

    def prepend_order(self, username: str | None, order: Order) -> None:
        orders = self.load_orders(username)
        if any(existing.id == order.id for existing in orders):
            logger.warning("Order %s already recorded for %s", order.id, username)
            return
        self.save_orders(username, [order, *orders])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "date": order.placed_at.isoformat(),
            "status": order.status.value,
            "total": str(order.total.amount),
            "items": [
                {
                    "productId": line.product_id,
                    "name": line.product_name,
                    "price": str(line.unit_price.amount),
                    "quantity": line.quantity,
                    "category": line.category,
                    "imageRef": line.image_ref,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = tuple(
            OrderLine(
                product_id=str(item["productId"]),
                product_name=item["name"],
                unit_price=Money.of(item["price"]),
                quantity=int(item["quantity"]),
                category=item.get("category", "General"),
                image_ref=item.get("imageRef"),
            )
            for item in raw["items"]
        )
        return Order(
            id=raw["id"],
            lines=lines,
            total=Money.of(raw["total"]),
            status=OrderStatus(raw["status"]),
            placed_at=datetime.fromisoformat(raw["date"]),
        )

    # --- Helpers --------------------------------------------------------------

    def _load_list(self, key: StoreKey) -> list:
        try:
            raw = self._store.load(key)
        except CorruptStateError:
            logger.warning("Stored value for %s is corrupt; treating it as empty", key)
            return []
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored value for %s is not a list; treating it as empty", key)
            return []
        return raw
