"""Application service: Checkout.

A single-pass state machine that turns the active cart into a placed
order:

    ASSEMBLING -> AWAITING_PAYMENT -> COMMITTED
                                   -> ASSEMBLING (cart changed)
                                   -> REJECTED -> ASSEMBLING (retry)

Nothing is written until ``commit()`` has heard back from the payment
gateway and re-checked live stock. From there the writes happen in a
fixed order with no suspension point between them:

  1. stock is deducted in the catalog (one save)
  2. the order is prepended to the user's history
  3. the cart is cleared

A crash between 1 and 2 leaves sold stock with no order, never an order
without its stock.
"""

from __future__ import annotations

import asyncio
import logging

from storefront.application.cart_engine import CartEngine
from storefront.domain.exceptions import (
    CheckoutStateError,
    EmptyCartError,
    InsufficientStockError,
    NoActiveUserError,
    PaymentTimeoutError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import (
    TRANSITIONS,
    CheckoutDraft,
    CheckoutState,
    PaymentDetails,
    ShippingDetails,
)
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import Order
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.gateways import PaymentGateway
from storefront.domain.repository.user_order_ledger import UserOrderLedger

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_TIMEOUT = 10.0


class CheckoutProcess:

    def __init__(
        self,
        cart_engine: CartEngine,
        catalog: CatalogRepository,
        ledger: UserOrderLedger,
        identity: Identity | None,
        payment_gateway: PaymentGateway,
        payment_timeout: float = DEFAULT_PAYMENT_TIMEOUT,
    ) -> None:
        if identity is None:
            raise NoActiveUserError("Sign in to check out")
        self._cart_engine = cart_engine
        self._catalog = catalog
        self._ledger = ledger
        self._identity = identity
        self._payment_gateway = payment_gateway
        self._payment_timeout = payment_timeout

        self._state = CheckoutState.ASSEMBLING
        self._draft = self._freeze()
        self._shipping: ShippingDetails | None = None
        self._payment: PaymentDetails | None = None
        self._order: Order | None = None
        self._rejection: InsufficientStockError | None = None
        self._abandoned = False

    # --- Queries --------------------------------------------------------------

    @property
    def state(self) -> CheckoutState:
        return self._state

    @property
    def draft(self) -> CheckoutDraft:
        return self._draft

    @property
    def order(self) -> Order | None:
        return self._order

    @property
    def rejection(self) -> InsufficientStockError | None:
        return self._rejection

    @property
    def shipping(self) -> ShippingDetails | None:
        return self._shipping

    # --- Steps ----------------------------------------------------------------

    def submit_details(self, shipping: ShippingDetails, payment: PaymentDetails) -> None:
        """Attach shipping and card details and wait for payment."""
        self._require(CheckoutState.ASSEMBLING)
        self._shipping = shipping
        self._payment = payment
        self._transition(CheckoutState.AWAITING_PAYMENT)

    async def commit(self) -> Order:
        """Pay, re-validate stock and place the order.

        Calling this again after success returns the same order and
        writes nothing.
        """
        if self._state is CheckoutState.COMMITTED and self._order is not None:
            logger.info("Checkout already committed as %s; ignoring", self._order.id)
            return self._order
        self._require(CheckoutState.AWAITING_PAYMENT)

        with self._cart_engine.lock() as cart:
            current = CheckoutDraft.freeze(cart)
            if current.quantities != self._draft.quantities:
                self._transition(CheckoutState.ASSEMBLING)
                if not cart.is_empty:
                    self._draft = current
                raise CheckoutStateError(
                    "Cart changed since checkout began; review it and submit details again"
                )

            try:
                reference = await asyncio.wait_for(
                    self._payment_gateway.authorize(self._draft, self._payment),
                    timeout=self._payment_timeout,
                )
            except asyncio.TimeoutError as exc:
                logger.warning("Payment timed out after %.1fs", self._payment_timeout)
                raise PaymentTimeoutError(
                    "Payment did not complete in time; nothing was charged"
                ) from exc

            # No awaits from here on: the commit cannot be interrupted.
            shortages = self._shortages()
            if shortages:
                self._rejection = InsufficientStockError(shortages)
                self._transition(CheckoutState.REJECTED)
                logger.warning(
                    "Checkout rejected for %s: %s", self._identity.username, self._rejection
                )
                raise self._rejection

            self._order = self._apply(cart)

        self._transition(CheckoutState.COMMITTED)
        logger.info(
            "Order %s placed by %s for %s (payment %s)",
            self._order.id, self._identity.username, self._order.total, reference,
        )
        return self._order

    def retry(self) -> None:
        """Start over from the current cart after a stock rejection."""
        self._require(CheckoutState.REJECTED)
        self._draft = self._freeze()
        self._rejection = None
        self._transition(CheckoutState.ASSEMBLING)

    def abandon(self) -> None:
        """Walk away before commit. Nothing has been written."""
        if self._state is CheckoutState.COMMITTED:
            raise CheckoutStateError("Order already placed; cannot abandon")
        if self._cart_engine.busy:
            raise CheckoutStateError("Payment in progress; cannot abandon")
        self._abandoned = True

    # --- Internal helpers -----------------------------------------------------

    def _freeze(self) -> CheckoutDraft:
        cart = self._cart_engine.cart
        if cart.is_empty:
            raise EmptyCartError("Your cart is empty")
        return CheckoutDraft.freeze(cart)

    def _shortages(self) -> dict[str, tuple[int, int]]:
        live = {p.id: p.stock for p in self._catalog.list_all()}
        shortages: dict[str, tuple[int, int]] = {}
        for product_id, qty in self._draft.quantities.items():
            available = live.get(product_id, 0)
            if qty > available:
                shortages[product_id] = (qty, available)
        return shortages

    def _apply(self, cart: Cart) -> Order:
        self._catalog.deduct_stock(self._draft.quantities)
        order = Order.place(self._draft.lines, self._draft.total)
        self._ledger.prepend_order(self._identity.username, order)
        cart.clear()
        return order

    def _require(self, expected: CheckoutState) -> None:
        if self._abandoned:
            raise CheckoutStateError("Checkout was abandoned")
        if self._state is not expected:
            raise CheckoutStateError(
                f"Cannot do that while checkout is {self._state.value}, "
                f"expected {expected.value}"
            )

    def _transition(self, target: CheckoutState) -> None:
        if target not in TRANSITIONS[self._state]:
            raise CheckoutStateError(
                f"Illegal checkout transition {self._state.value} -> {target.value}"
            )
        logger.debug("Checkout %s -> %s", self._state.value, target.value)
        self._state = target
