"""The signed-in user and their cart.

One Session per process. The cart belongs to the session, not to the
user record: it is emptied on logout and when a different identity
signs in.
"""

from __future__ import annotations

import logging

from storefront.application.cart_engine import CartEngine
from storefront.application.checkout import DEFAULT_PAYMENT_TIMEOUT, CheckoutProcess
from storefront.domain.exceptions import NoActiveUserError
from storefront.domain.model.cart import Cart
from storefront.domain.model.identity import Identity
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.gateways import PaymentGateway
from storefront.domain.repository.user_order_ledger import UserOrderLedger

logger = logging.getLogger(__name__)


class Session:

    def __init__(
        self,
        catalog: CatalogRepository,
        ledger: UserOrderLedger,
        identity: Identity | None = None,
        cart: Cart | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._identity = identity
        self._cart_engine = CartEngine(catalog, cart)

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def username(self) -> str | None:
        return self._identity.username if self._identity else None

    @property
    def cart_engine(self) -> CartEngine:
        return self._cart_engine

    def require_identity(self) -> Identity:
        if self._identity is None:
            raise NoActiveUserError("Nobody is signed in")
        return self._identity

    def login(self, identity: Identity) -> None:
        if self._identity is not None and self._identity != identity:
            self._cart_engine.clear()
        self._identity = identity
        logger.info("Signed in as %s (%s)", identity.username, identity.role.value)

    def logout(self) -> None:
        # Raises CartLockedError if a checkout is still committing.
        self._cart_engine.clear()
        if self._identity is not None:
            logger.info("Signed out %s", self._identity.username)
        self._identity = None

    def begin_checkout(
        self,
        payment_gateway: PaymentGateway,
        payment_timeout: float = DEFAULT_PAYMENT_TIMEOUT,
    ) -> CheckoutProcess:
        return CheckoutProcess(
            cart_engine=self._cart_engine,
            catalog=self._catalog,
            ledger=self._ledger,
            identity=self.require_identity(),
            payment_gateway=payment_gateway,
            payment_timeout=payment_timeout,
        )
