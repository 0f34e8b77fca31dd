"""Domain-level exceptions.

Every recoverable failure in the engine is a subclass of DomainException
so the CLI layer can catch them uniformly and display a short message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A field or business rule was violated before anything was written."""


class EmptyCartError(ValidationError):
    """Checkout was started with nothing in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StockExceededError(DomainException):
    """A cart mutation would take a line past the known stock."""

    def __init__(self, product_name: str, requested: int, stock: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.stock = stock
        super().__init__(
            f"Cannot add more {product_name} - stock limit reached "
            f"(requested {requested}, {stock} in stock)"
        )


class InsufficientStockError(DomainException):
    """Checkout-time re-validation found lines the live stock cannot cover.

    ``shortages`` maps product id to ``(requested, available)``.
    """

    def __init__(self, shortages: dict[str, tuple[int, int]]) -> None:
        self.shortages = dict(shortages)
        details = ", ".join(
            f"{pid} (need {need}, have {have})"
            for pid, (need, have) in self.shortages.items()
        )
        super().__init__(f"Insufficient stock for: {details}")


class CorruptStateError(DomainException):
    """Stored content could not be decoded."""


class NoActiveUserError(DomainException):
    """A per-user operation was attempted without a signed-in identity."""


class PermissionDeniedError(DomainException):
    """The active identity may not perform this operation."""


class CartLockedError(DomainException):
    """The cart is locked by a checkout that is still in flight."""


class CheckoutStateError(DomainException):
    """A checkout operation was invoked from the wrong state."""


class PaymentTimeoutError(DomainException):
    """The payment gateway did not answer in time. Nothing was committed."""


class InvalidCredentialsError(DomainException):
    """Username or password did not match."""


class UsernameTakenError(DomainException):
    """A registration used a username that already exists."""
