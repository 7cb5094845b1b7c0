"""Tests for the deterministic demo catalog and ensure_seeded."""

import json

from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_catalog.infrastructure.seed import (
    demo_catalog,
    ensure_seeded,
    generate_demo_products,
    static_products,
)
from src.mk_common.enums import CATEGORY_VALUES, CONDITION_VALUES
from src.mk_store.infrastructure.memory_store import InMemoryStore
from src.mk_store.keys import PRODUCTS_KEY

NOW = 1_750_000_000_000


class TestDemoCatalog:
    def test_static_products(self) -> None:
        products = static_products(NOW)
        assert [p.id for p in products] == ["1", "2", "3", "4"]
        assert [p.status for p in products] == ["active", "active", "active", "sold"]

    def test_same_seed_same_catalog(self) -> None:
        assert generate_demo_products(50, 42, NOW) == generate_demo_products(50, 42, NOW)

    def test_different_seed_differs(self) -> None:
        assert generate_demo_products(50, 1, NOW) != generate_demo_products(50, 2, NOW)

    def test_generated_records_are_valid(self) -> None:
        for p in generate_demo_products(200, 42, NOW):
            assert p.id.startswith("dummy_")
            assert p.category in CATEGORY_VALUES
            assert p.condition in CONDITION_VALUES
            assert p.status in ("active", "sold")
            assert p.price >= 500
            assert p.created_at <= NOW
            assert p.image == p.images[0]

    def test_some_generated_are_sold(self) -> None:
        statuses = {p.status for p in generate_demo_products(200, 42, NOW)}
        assert statuses == {"active", "sold"}

    def test_demo_catalog_static_first(self) -> None:
        catalog = demo_catalog(10, 42, NOW)
        assert len(catalog) == 14
        assert catalog[0].id == "1"


class TestEnsureSeeded:
    async def test_seeds_empty_store(self, store: InMemoryStore) -> None:
        assert await ensure_seeded(store, count=20, seed=42, now_ms=NOW) is True
        products = await CatalogRepository().list_products(store)
        assert len(products) == 24

    async def test_idempotent(self, store: InMemoryStore) -> None:
        await ensure_seeded(store, count=5, seed=42, now_ms=NOW)
        first = await store.get(PRODUCTS_KEY)
        assert await ensure_seeded(store, count=5, seed=42, now_ms=NOW + 1) is False
        assert await store.get(PRODUCTS_KEY) == first

    async def test_keeps_existing_empty_catalog(self, store: InMemoryStore) -> None:
        await store.set(PRODUCTS_KEY, "[]")
        assert await ensure_seeded(store, count=5, seed=42) is False
        assert await store.get(PRODUCTS_KEY) == "[]"

    async def test_reseeds_corrupt_namespace(self, store: InMemoryStore) -> None:
        await store.set(PRODUCTS_KEY, "{oops")
        assert await ensure_seeded(store, count=5, seed=42, now_ms=NOW) is True
        assert len(json.loads(await store.get(PRODUCTS_KEY))) == 9

    async def test_storage_full_is_not_fatal(self) -> None:
        tiny = InMemoryStore(capacity_bytes=100)
        assert await ensure_seeded(tiny, count=5, seed=42, now_ms=NOW) is False
        assert await tiny.get(PRODUCTS_KEY) is None
