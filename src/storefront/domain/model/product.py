"""Product aggregate.

Products are owned by the catalog. Everything else (cart lines, order
lines) works from copies taken at a point in time, so edits and deletes
here never reach back into a placed order.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

MAX_RATING = 5.0

# Fields an admin edit may touch. Stock deduction goes through
# ``deduct_stock`` instead.
EDITABLE_FIELDS = frozenset(
    {"name", "description", "price", "stock", "category", "image_ref"}
)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is never negative (enforced by Money)
    - ``rating`` lies within 0..5
    """

    id: str
    name: str
    price: Money
    stock: int
    description: str = ""
    category: str = "General"
    rating: float = 0.0
    review_count: int = 0
    image_ref: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(self.price, Money):
            raise ValidationError("Product price must be Money")
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError("Stock must be an integer")
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")
        if not 0 <= self.rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between 0 and 5, got {self.rating}")
        if self.review_count < 0:
            raise ValidationError("Review count cannot be negative")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def snapshot(self) -> Product:
        """Copy the product by value."""
        return dataclasses.replace(self)

    def apply_patch(self, patch: dict[str, object]) -> Product:
        """Return a new Product with ``patch`` merged over this one.

        The original is left untouched if the merged record is invalid.
        """
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
        changes = dict(patch)
        if "price" in changes and not isinstance(changes["price"], Money):
            changes["price"] = Money.of(changes["price"])  # type: ignore[arg-type]
        if isinstance(changes.get("name"), str):
            changes["name"] = changes["name"].strip()  # type: ignore[union-attr]
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    def deduct_stock(self, quantity: int) -> None:
        """Remove sold units, floored at zero."""
        if quantity <= 0:
            raise ValidationError("Deduction quantity must be positive")
        self.stock = max(0, self.stock - quantity)
