"""Tests for the store-backed catalog: seeding, migration and CRUD."""

import random

import pytest

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import ProductDraft
from storefront.domain.repository.key_value_store import CATALOG
from storefront.infrastructure.persistence.store_catalog_repository import (
    SEED_PRODUCTS,
    StoreCatalogRepository,
    migrate_records,
)
from tests.fakes import InMemoryKeyValueStore, make_product, seeded_catalog

LEGACY_CATALOG = [
    {"id": 1, "name": "Quantum Laptop", "description": "Old record",
     "price": 2499.99, "stock": 10, "imageUrl": "https://img/1"},
    {"id": "2", "name": "Singularity Mouse", "description": "",
     "price": "149.50", "stock": 5, "rating": 0},
]


class TestSeeding:

    def test_empty_store_is_seeded(self):
        store = InMemoryKeyValueStore()
        products = StoreCatalogRepository(store).load_or_seed()
        assert [p.id for p in products] == [raw["id"] for raw in SEED_PRODUCTS]
        assert store.load(CATALOG) is not None

    def test_seed_contents(self):
        products = StoreCatalogRepository(InMemoryKeyValueStore()).list_all()
        keyboard = products[2]
        assert keyboard.name == "Galactic Keyboard"
        assert keyboard.stock == 0
        assert products[0].price == Money.of("2499.99")

    def test_corrupt_catalog_is_reseeded(self):
        store = InMemoryKeyValueStore()
        store.put_raw(CATALOG, "[{broken")
        products = StoreCatalogRepository(store).load_or_seed()
        assert len(products) == len(SEED_PRODUCTS)

    def test_non_list_catalog_is_reseeded(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, {"oops": True})
        assert len(StoreCatalogRepository(store).load_or_seed()) == len(SEED_PRODUCTS)

    def test_empty_catalog_stays_empty(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, [])
        assert StoreCatalogRepository(store).load_or_seed() == []


class TestMigration:

    def test_backfills_missing_fields(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, LEGACY_CATALOG)
        products = StoreCatalogRepository(store, rng=random.Random(0)).load_or_seed()

        laptop = products[0]
        assert laptop.id == "1"
        assert laptop.price == Money.of("2499.99")
        assert laptop.image_ref == "https://img/1"
        assert laptop.category
        assert 3.0 <= laptop.rating <= 5.0
        assert laptop.review_count >= 5

    def test_present_zero_rating_is_kept(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, LEGACY_CATALOG)
        mouse = StoreCatalogRepository(store, rng=random.Random(0)).load_or_seed()[1]
        assert mouse.rating == 0.0

    def test_migrated_catalog_is_written_back_once(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, LEGACY_CATALOG)
        store.writes.clear()

        repo = StoreCatalogRepository(store, rng=random.Random(0))
        first = repo.load_or_seed()
        assert store.writes == ["catalog"]
        second = repo.load_or_seed()
        assert store.writes == ["catalog"]
        assert first == second

    def test_migration_is_idempotent(self):
        once = migrate_records(LEGACY_CATALOG, random.Random(0))
        twice = migrate_records(once, random.Random(1))
        assert once == twice

    def test_unreadable_records_cause_reseed(self):
        store = InMemoryKeyValueStore()
        store.save(CATALOG, [{"id": "1", "name": "", "price": "1", "stock": 1}])
        products = StoreCatalogRepository(store).load_or_seed()
        assert len(products) == len(SEED_PRODUCTS)


class TestCrud:

    def test_create_assigns_fresh_id(self):
        catalog, _ = seeded_catalog([make_product(id="1")])
        product = catalog.create(ProductDraft(name="Lamp", price="19.99", stock=3))
        assert product.id != "1"
        assert catalog.get_by_id(product.id).name == "Lamp"
        assert product.rating == 0.0
        assert product.review_count == 0

    def test_ids_never_repeat_after_delete(self):
        catalog, _ = seeded_catalog([])
        seen = set()
        for _ in range(10):
            product = catalog.create(ProductDraft(name="Lamp", price="1", stock=1))
            assert product.id not in seen
            seen.add(product.id)
            catalog.delete(product.id)

    def test_create_rejects_negative_price_without_writing(self):
        catalog, store = seeded_catalog([make_product()])
        with pytest.raises(ValidationError):
            catalog.create(ProductDraft(name="Lamp", price="-1", stock=1))
        assert store.writes == []

    def test_create_rejects_blank_name(self):
        catalog, _ = seeded_catalog([])
        with pytest.raises(ValidationError):
            catalog.create(ProductDraft(name="  ", price="1", stock=1))

    def test_create_rejects_negative_stock(self):
        catalog, _ = seeded_catalog([])
        with pytest.raises(ValidationError):
            catalog.create(ProductDraft(name="Lamp", price="1", stock=-1))

    def test_update_missing(self):
        catalog, _ = seeded_catalog([make_product()])
        with pytest.raises(EntityNotFoundError, match="not found"):
            catalog.update("99", {"stock": 1})

    def test_update_persists(self):
        catalog, store = seeded_catalog([make_product(price="10.00")])
        catalog.update("1", {"price": "12.00"})
        reloaded = StoreCatalogRepository(store).get_by_id("1")
        assert reloaded.price == Money.of("12.00")

    def test_delete_missing(self):
        catalog, _ = seeded_catalog([make_product()])
        with pytest.raises(EntityNotFoundError):
            catalog.delete("99")

    def test_deduct_stock_single_write_floored(self):
        catalog, store = seeded_catalog([
            make_product(id="1", stock=5),
            make_product(id="2", name="Gadget", stock=1),
        ])
        catalog.deduct_stock({"1": 2, "2": 3})
        assert store.writes == ["catalog"]
        assert catalog.get_by_id("1").stock == 3
        assert catalog.get_by_id("2").stock == 0

    def test_round_trip(self):
        products = [make_product(id="1"), make_product(id="2", name="Gadget", price="0.99")]
        catalog, _ = seeded_catalog(products)
        assert catalog.list_all() == products
