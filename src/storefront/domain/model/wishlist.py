"""Per-user wishlist: an insertion-ordered set of product ids."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Wishlist:
    product_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Stored lists written by older versions may repeat ids.
        self.product_ids = list(dict.fromkeys(self.product_ids))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self.product_ids

    def __len__(self) -> int:
        return len(self.product_ids)

    def toggle(self, product_id: str) -> bool:
        """Add the id if absent, remove it if present. Returns True if added."""
        if product_id in self.product_ids:
            self.product_ids.remove(product_id)
            return False
        self.product_ids.append(product_id)
        return True
