"""Store-backed implementation of CatalogRepository.

The whole catalog is one list under the ``catalog`` key. Records written
by older versions lack ``category``, ``rating`` and ``reviewCount``; they
are backfilled on load and written back once, after which loading is a
no-op.
"""

from __future__ import annotations

import logging
import random
import uuid

from storefront.domain.exceptions import (
    CorruptStateError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import (
    CatalogRepository,
    ProductDraft,
)
from storefront.domain.repository.key_value_store import CATALOG, KeyValueStore

logger = logging.getLogger(__name__)

MIGRATION_CATEGORIES = ("Electronics", "Wearables", "Accessories", "Home")


def _placeholder_image(name: str) -> str:
    return "https://placehold.co/600x400/1e293b/94a3b8?text=" + name.replace(" ", "+")


SEED_PRODUCTS: tuple[dict, ...] = (
    {"id": "1", "name": "Quantum Laptop",
     "description": "A laptop from the future with holographic display.",
     "price": "2499.99", "stock": 10, "category": "Electronics",
     "rating": 4.8, "reviewCount": 124, "imageRef": _placeholder_image("Quantum Laptop")},
    {"id": "2", "name": "Singularity Mouse",
     "description": "Control your cursor with the power of your mind.",
     "price": "149.50", "stock": 5, "category": "Accessories",
     "rating": 4.2, "reviewCount": 45, "imageRef": _placeholder_image("Singularity Mouse")},
    {"id": "3", "name": "Galactic Keyboard",
     "description": "Keys are made of stardust. Types in any language.",
     "price": "499.00", "stock": 0, "category": "Accessories",
     "rating": 4.9, "reviewCount": 89, "imageRef": _placeholder_image("Galactic Keyboard")},
    {"id": "4", "name": "Nebula Smartwatch",
     "description": "Tracks time across dimensions.",
     "price": "299.99", "stock": 15, "category": "Wearables",
     "rating": 4.5, "reviewCount": 62, "imageRef": _placeholder_image("Nebula Watch")},
    {"id": "5", "name": "Void Noise Cancelling",
     "description": "Silence absolute. Hear the cosmos.",
     "price": "349.00", "stock": 8, "category": "Electronics",
     "rating": 4.7, "reviewCount": 210, "imageRef": _placeholder_image("Void Headphones")},
    {"id": "6", "name": "Zero-G Chair",
     "description": "Floating ergonomic chair for deep focus.",
     "price": "899.99", "stock": 3, "category": "Home",
     "rating": 4.9, "reviewCount": 34, "imageRef": _placeholder_image("Zero-G Chair")},
)


def migrate_record(raw: dict, rng: random.Random) -> dict:
    """Backfill fields introduced after the record was written.

    A field counts as missing only when its key is absent, so a product
    legitimately rated 0 keeps its rating on every later pass.
    """
    record = dict(raw)
    if not isinstance(record.get("id"), str):
        record["id"] = str(record["id"])
    if not isinstance(record.get("price"), str):
        record["price"] = str(record["price"])
    if "description" not in record:
        record["description"] = ""
    if "imageRef" not in record:
        record["imageRef"] = record.pop("imageUrl", None)
    if "category" not in record:
        record["category"] = rng.choice(MIGRATION_CATEGORIES)
    if "rating" not in record:
        record["rating"] = round(rng.uniform(3.0, 5.0), 1)
    if "reviewCount" not in record:
        record["reviewCount"] = rng.randint(5, 54)
    return record


def migrate_records(records: list[dict], rng: random.Random) -> list[dict]:
    return [migrate_record(raw, rng) for raw in records]


class StoreCatalogRepository(CatalogRepository):

    def __init__(self, store: KeyValueStore, rng: random.Random | None = None) -> None:
        self._store = store
        self._rng = rng or random.Random()

    # --- CatalogRepository interface ------------------------------------------

    def load_or_seed(self) -> list[Product]:
        try:
            raw = self._store.load(CATALOG)
        except CorruptStateError:
            logger.warning("Stored catalog is corrupt; reseeding defaults")
            raw = None

        if raw is None or not isinstance(raw, list):
            return self._seed()

        try:
            migrated = migrate_records(raw, self._rng)
            products = [self.to_domain(record) for record in migrated]
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Stored catalog has unreadable records; reseeding defaults")
            return self._seed()

        if migrated != raw:
            logger.info("Migrated %d catalog record(s) to the current schema", len(raw))
            self._persist(products)
        return products

    def list_all(self) -> list[Product]:
        return self.load_or_seed()

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self.load_or_seed():
            if product.id == product_id:
                return product
        return None

    def create(self, draft: ProductDraft) -> Product:
        products = self.load_or_seed()
        if isinstance(draft.stock, bool) or not isinstance(draft.stock, int):
            raise ValidationError("Stock must be an integer")
        product = Product(
            id=self._fresh_id({p.id for p in products}),
            name=(draft.name or "").strip(),
            description=draft.description,
            price=Money.of(draft.price),
            stock=draft.stock,
            category=(draft.category or "").strip() or "General",
            image_ref=draft.image_ref,
        )
        products.append(product)
        self._persist(products)
        logger.info("Created product %s '%s'", product.id, product.name)
        return product

    def update(self, product_id: str, patch: dict[str, object]) -> Product:
        products = self.load_or_seed()
        index = self._index_of(products, product_id)
        updated = products[index].apply_patch(patch)
        products[index] = updated
        self._persist(products)
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(patch)))
        return updated

    def delete(self, product_id: str) -> None:
        products = self.load_or_seed()
        index = self._index_of(products, product_id)
        removed = products.pop(index)
        self._persist(products)
        logger.info("Deleted product %s '%s'", removed.id, removed.name)

    def deduct_stock(self, quantities: dict[str, int]) -> None:
        products = self.load_or_seed()
        by_id = {p.id: p for p in products}
        for product_id, qty in quantities.items():
            product = by_id.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.deduct_stock(qty)
        self._persist(products)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "stock": product.stock,
            "category": product.category,
            "rating": product.rating,
            "reviewCount": product.review_count,
            "imageRef": product.image_ref,
        }

    @staticmethod
    def to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            price=Money.of(raw["price"]),
            stock=int(raw["stock"]),
            category=raw["category"],
            rating=float(raw["rating"]),
            review_count=int(raw["reviewCount"]),
            image_ref=raw["imageRef"],
        )

    # --- Helpers --------------------------------------------------------------

    def _seed(self) -> list[Product]:
        products = [self.to_domain(dict(raw)) for raw in SEED_PRODUCTS]
        self._persist(products)
        logger.info("Seeded catalog with %d products", len(products))
        return products

    def _persist(self, products: list[Product]) -> None:
        self._store.save(CATALOG, [self.to_raw(p) for p in products])

    @staticmethod
    def _fresh_id(taken: set[str]) -> str:
        # Must not reuse the id of a deleted product either.
        while True:
            candidate = uuid.uuid4().hex[:12]
            if candidate not in taken:
                return candidate

    @staticmethod
    def _index_of(products: list[Product], product_id: str) -> int:
        for i, product in enumerate(products):
            if product.id == product_id:
                return i
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
