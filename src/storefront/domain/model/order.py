"""Order aggregate.

An Order is written once, at checkout commit, from a frozen copy of the
cart. Its lines and total never change afterwards; only ``status`` may be
advanced by something outside this engine.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


@dataclass(frozen=True)
class OrderLine:
    """Denormalized copy of a cart line at commit time."""

    product_id: str
    product_name: str
    unit_price: Money
    quantity: int
    category: str = "General"
    image_ref: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLine:
        product = line.product
        return OrderLine(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=line.quantity,
            category=product.category,
            image_ref=product.image_ref,
        )


def new_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:8].upper()}"


@dataclass
class Order:
    """A placed order.

    Use ``Order.place()`` for new orders. The plain constructor exists so
    the ledger can rebuild persisted orders without re-validating them.
    """

    id: str
    lines: tuple[OrderLine, ...]
    total: Money
    status: OrderStatus = OrderStatus.PROCESSING
    placed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __setattr__(self, name: str, value: object) -> None:
        if name in ("id", "lines", "total", "placed_at") and name in self.__dict__:
            raise ValidationError(f"Order {self.id} is immutable: cannot change '{name}'")
        super().__setattr__(name, value)

    @staticmethod
    def place(lines: tuple[OrderLine, ...], total: Money) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item")
        return Order(id=new_order_id(), lines=tuple(lines), total=total)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)
