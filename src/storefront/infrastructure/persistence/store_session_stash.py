"""Carries the signed-in identity and its cart between CLI invocations.

Each command runs in a fresh process, so the session is parked in the
store under ``session`` and ``cart:<username>``. Logging out deletes
both, which keeps the cart from outliving the session.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import CorruptStateError, ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.identity import Identity, Role
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.key_value_store import (
    SESSION,
    KeyValueStore,
    StoreKey,
    cart_key,
)
from storefront.infrastructure.persistence.store_catalog_repository import (
    StoreCatalogRepository,
)

logger = logging.getLogger(__name__)


class StoreSessionStash:

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load_identity(self) -> Identity | None:
        raw = self._load(SESSION)
        if not isinstance(raw, dict) or not isinstance(raw.get("username"), str):
            return None
        try:
            # The username must also work as a cart key owner.
            cart_key(raw["username"])
            return Identity(username=raw["username"], role=Role(raw.get("role", "user")))
        except (ValueError, ValidationError):
            logger.warning("Stored session is unreadable; signing out")
            return None

    def load_cart(self, username: str) -> Cart:
        raw = self._load(cart_key(username))
        if not isinstance(raw, list):
            return Cart()
        lines = []
        for item in raw:
            try:
                lines.append(
                    CartLine(
                        product=StoreCatalogRepository.to_domain(item["product"]),
                        quantity=Quantity(int(item["quantity"])).value,
                    )
                )
            except (KeyError, TypeError, ValueError, ValidationError) as exc:
                logger.warning("Dropping unreadable cart line for %s: %s", username, exc)
        return Cart(lines)

    def save(self, identity: Identity | None, cart: Cart) -> None:
        if identity is None:
            self._store.delete(SESSION)
            return
        self._store.save(
            SESSION, {"username": identity.username, "role": identity.role.value}
        )
        self._store.save(
            cart_key(identity.username),
            [
                {
                    "product": StoreCatalogRepository.to_raw(line.product),
                    "quantity": line.quantity,
                }
                for line in cart.lines
            ],
        )

    def discard(self, username: str) -> None:
        self._store.delete(SESSION)
        self._store.delete(cart_key(username))

    def _load(self, key: StoreKey) -> object | None:
        try:
            return self._store.load(key)
        except CorruptStateError:
            logger.warning("Stored value for %s is corrupt; ignoring it", key)
            return None
