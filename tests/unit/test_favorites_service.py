"""Tests for FavoritesService and FavoriteRepository."""

import pytest

from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_catalog.infrastructure.seed import static_products
from src.mk_common.errors import ProductNotFoundError, StorageFullError
from src.mk_favorites.application.service import FavoritesService
from src.mk_favorites.infrastructure.persistence import FavoriteRepository
from src.mk_store.documents import write_document
from src.mk_store.infrastructure.memory_store import InMemoryStore
from src.mk_store.keys import FAVORITES_KEY


@pytest.fixture
def service() -> FavoritesService:
    return FavoritesService()


@pytest.fixture
async def seeded(store: InMemoryStore) -> InMemoryStore:
    repo = CatalogRepository()
    for p in reversed(static_products(1_750_000_000_000)):
        await repo.create_product(store, p)
    return store


class TestToggle:
    async def test_add_then_remove(self, service: FavoritesService, seeded: InMemoryStore) -> None:
        assert await service.toggle(seeded, "2") is True
        assert await service.is_favorite(seeded, "2") is True
        assert await service.toggle(seeded, "2") is False
        assert await service.is_favorite(seeded, "2") is False

    async def test_double_toggle_restores_set(
        self, service: FavoritesService, seeded: InMemoryStore
    ) -> None:
        await service.toggle(seeded, "1")
        await service.toggle(seeded, "3")
        before = await FavoriteRepository().list_ids(seeded)
        await service.toggle(seeded, "2")
        await service.toggle(seeded, "2")
        assert await FavoriteRepository().list_ids(seeded) == before

    async def test_unknown_product_cannot_be_added(
        self, service: FavoritesService, seeded: InMemoryStore
    ) -> None:
        with pytest.raises(ProductNotFoundError):
            await service.toggle(seeded, "nope")

    async def test_dangling_id_can_be_removed(
        self, service: FavoritesService, seeded: InMemoryStore
    ) -> None:
        await write_document(seeded, FAVORITES_KEY, ["gone"])
        assert await service.toggle(seeded, "gone") is False

    async def test_storage_full_leaves_set_unchanged(self, service: FavoritesService) -> None:
        store = InMemoryStore(capacity_bytes=2000)
        await CatalogRepository().create_product(store, static_products(0)[2])
        # fill the quota so the favorites write cannot fit
        await store.set("filler", "x" * (2000 - store.used_bytes - len("filler")))
        with pytest.raises(StorageFullError):
            await service.toggle(store, "3")
        assert await service.is_favorite(store, "3") is False


class TestFavoriteProducts:
    async def test_catalog_order_and_dangling_skipped(
        self, service: FavoritesService, seeded: InMemoryStore
    ) -> None:
        await write_document(seeded, FAVORITES_KEY, ["3", "gone", "1"])
        assert [p.id for p in await service.favorite_products(seeded)] == ["1", "3"]

    async def test_empty(self, service: FavoritesService, seeded: InMemoryStore) -> None:
        assert await service.favorite_products(seeded) == []


class TestFavoriteRepository:
    async def test_dedupes_and_ignores_junk(self, store: InMemoryStore) -> None:
        await write_document(store, FAVORITES_KEY, ["a", "a", 5, None, {"x": 1}])
        assert await FavoriteRepository().list_ids(store) == ["a", "5"]
