# src/mk_catalog/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from src.mk_catalog.domain.models import Product
from src.mk_store.domain.store import DurableStoreProtocol


class CatalogRepositoryProtocol(Protocol):
    async def list_products(self, store: DurableStoreProtocol) -> list[Product]: ...

    async def get_product(
        self,
        store: DurableStoreProtocol,
        product_id: str,
    ) -> Product | None: ...

    async def create_product(
        self,
        store: DurableStoreProtocol,
        product: Product,
    ) -> None: ...

    async def update_product(
        self,
        store: DurableStoreProtocol,
        product: Product,
    ) -> bool: ...
