"""Cart aggregate.

A cart is an ordered list of lines, at most one per product. Each line
carries a snapshot of the product taken when it was last admitted, and
all stock comparisons use that snapshot. The catalog may move on after
that; checkout re-validates against live stock before committing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError, StockExceededError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """Admit ``quantity`` more units of ``product``.

        Rejected in full when the resulting quantity would exceed
        ``product.stock``; the cart is unchanged in that case.
        """
        requested = Quantity(quantity).value
        line = self.find_line(product.id)
        current = line.quantity if line is not None else 0
        if current + requested > product.stock:
            raise StockExceededError(product.name, current + requested, product.stock)

        if line is None:
            self.lines.append(CartLine(product.snapshot(), requested))
        else:
            line.product = product.snapshot()
            line.quantity = current + requested

    def set_quantity(self, product_id: str, delta: int) -> None:
        """Shift a line's quantity by ``delta``, clamped to [1, stock].

        A change that would go below one unit does nothing; removal is
        always explicit.
        """
        line = self._require_line(product_id)
        wanted = line.quantity + delta
        if wanted < 1:
            return
        line.quantity = max(1, min(wanted, line.product.stock))

    def remove_item(self, product_id: str) -> None:
        line = self._require_line(product_id)
        self.lines.remove(line)

    def clear(self) -> None:
        self.lines.clear()

    def retain(self, product_ids: set[str]) -> list[CartLine]:
        """Drop lines whose product is not in ``product_ids``; return them."""
        dropped = [line for line in self.lines if line.product_id not in product_ids]
        if dropped:
            self.lines = [line for line in self.lines if line.product_id in product_ids]
        return dropped

    # --- Queries --------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def total(self) -> Money:
        # Never cached: prices in the snapshots may be refreshed by add_item.
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def _require_line(self, product_id: str) -> CartLine:
        line = self.find_line(product_id)
        if line is None:
            raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")
        return line
