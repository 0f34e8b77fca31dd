"""Checkout states and the frozen draft a checkout works from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import OrderLine
from storefront.domain.model.value_objects import Money


class CheckoutState(Enum):
    ASSEMBLING = "Assembling"
    AWAITING_PAYMENT = "AwaitingPayment"
    COMMITTED = "Committed"
    REJECTED = "Rejected"


# Every legal move. COMMITTED is terminal; REJECTED only leads back to a
# fresh ASSEMBLING once the customer has adjusted the cart.
TRANSITIONS: dict[CheckoutState, frozenset[CheckoutState]] = {
    CheckoutState.ASSEMBLING: frozenset({CheckoutState.AWAITING_PAYMENT}),
    CheckoutState.AWAITING_PAYMENT: frozenset(
        {CheckoutState.COMMITTED, CheckoutState.REJECTED, CheckoutState.ASSEMBLING}
    ),
    CheckoutState.COMMITTED: frozenset(),
    CheckoutState.REJECTED: frozenset({CheckoutState.ASSEMBLING}),
}


def _require_text(label: str, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")


@dataclass(frozen=True)
class ShippingDetails:
    full_name: str
    address: str

    def __post_init__(self) -> None:
        _require_text("Full name", self.full_name)
        _require_text("Shipping address", self.address)


@dataclass(frozen=True)
class PaymentDetails:
    """Card fields. Only checked for presence; nothing is charged."""

    card_number: str
    expiry: str
    cvc: str

    def __post_init__(self) -> None:
        _require_text("Card number", self.card_number)
        _require_text("Expiry", self.expiry)
        _require_text("CVC", self.cvc)

    def __repr__(self) -> str:
        return f"PaymentDetails(card_number='****{self.card_number.strip()[-4:]}')"


@dataclass(frozen=True)
class CheckoutDraft:
    lines: tuple[OrderLine, ...]
    total: Money

    @property
    def quantities(self) -> dict[str, int]:
        return {line.product_id: line.quantity for line in self.lines}

    @staticmethod
    def freeze(cart: Cart) -> CheckoutDraft:
        lines = tuple(OrderLine.from_cart_line(line) for line in cart.lines)
        return CheckoutDraft(lines=lines, total=cart.total())
