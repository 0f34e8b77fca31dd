"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. The store-backed implementation lives in
``storefront.infrastructure.persistence``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductDraft:
    """Admin input for a new product. Validated by the repository."""

    name: str
    price: str
    stock: int
    description: str = ""
    category: str = "General"
    image_ref: str | None = None


class CatalogRepository(ABC):

    @abstractmethod
    def load_or_seed(self) -> list[Product]:
        """Load the catalog, seeding or migrating it as needed."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in catalog order."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def create(self, draft: ProductDraft) -> Product:
        """Add a product under a fresh id."""

    @abstractmethod
    def update(self, product_id: str, patch: dict[str, object]) -> Product:
        """Merge ``patch`` over an existing product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog."""

    @abstractmethod
    def deduct_stock(self, quantities: dict[str, int]) -> None:
        """Decrement stock per product id, floored at zero, in one write."""
