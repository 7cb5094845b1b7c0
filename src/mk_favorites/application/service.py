"""FavoritesService — toggle and read the favorite set.

toggle() is an involution: two calls in a row restore the original state.
A rejected write (StorageFullError) propagates with the set unchanged.
"""

from src.mk_catalog.domain.models import Product
from src.mk_catalog.domain.repository import CatalogRepositoryProtocol
from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_common.errors import ProductNotFoundError
from src.mk_favorites.infrastructure.persistence import FavoriteRepository
from src.mk_store.domain.store import DurableStoreProtocol


class FavoritesService:
    def __init__(
        self,
        repo: FavoriteRepository | None = None,
        catalog: CatalogRepositoryProtocol | None = None,
    ) -> None:
        self._repo = repo or FavoriteRepository()
        self._catalog: CatalogRepositoryProtocol = catalog or CatalogRepository()

    async def toggle(self, store: DurableStoreProtocol, product_id: str) -> bool:
        """Flip membership of product_id; returns the new state."""
        ids = await self._repo.list_ids(store)
        if product_id in ids:
            await self._repo.save_ids(store, [i for i in ids if i != product_id])
            return False
        if await self._catalog.get_product(store, product_id) is None:
            raise ProductNotFoundError(product_id)
        await self._repo.save_ids(store, [*ids, product_id])
        return True

    async def is_favorite(self, store: DurableStoreProtocol, product_id: str) -> bool:
        return product_id in await self._repo.list_ids(store)

    async def favorite_products(self, store: DurableStoreProtocol) -> list[Product]:
        """Favorited listings in catalog order; dangling ids are skipped."""
        ids = set(await self._repo.list_ids(store))
        if not ids:
            return []
        return [p for p in await self._catalog.list_products(store) if p.id in ids]
