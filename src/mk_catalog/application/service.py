"""CatalogApplicationService — listing lifecycle on top of CatalogRepository.

Create assigns id, timestamp and the seller snapshot; update is a full
replace of the seller-editable fields and keeps id, createdAt, seller and
status; mark_sold is the only active -> sold transition.
Every write either lands completely or raises StorageFullError with the
store unchanged.
"""

import logging
from dataclasses import replace

from src.mk_assist.application.description import DescriptionGenerator
from src.mk_catalog.application.schemas import ListingRequest
from src.mk_catalog.domain.models import Product
from src.mk_catalog.domain.repository import CatalogRepositoryProtocol
from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_common.datetime_utils import next_timestamp_ms
from src.mk_common.enums import ProductStatus
from src.mk_common.errors import (
    InvalidListingError,
    ListingAlreadySoldError,
    NotListingOwnerError,
    ProductNotFoundError,
)
from src.mk_common.id_generator import generate_id
from src.mk_gateway.user.models import User
from src.mk_store.domain.store import DurableStoreProtocol

logger = logging.getLogger(__name__)


def _description(req: ListingRequest, fallback: str = "") -> str:
    return req.description.strip() or req.features.strip() or fallback


class CatalogApplicationService:
    def __init__(
        self,
        repo: CatalogRepositoryProtocol | None = None,
        describer: DescriptionGenerator | None = None,
    ) -> None:
        self._repo: CatalogRepositoryProtocol = repo or CatalogRepository()
        self._describer = describer or DescriptionGenerator()

    async def list_listings(self, store: DurableStoreProtocol) -> list[Product]:
        return await self._repo.list_products(store)

    async def get_listing(self, store: DurableStoreProtocol, product_id: str) -> Product:
        product = await self._repo.get_product(store, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def my_listings(self, store: DurableStoreProtocol, seller_id: str) -> list[Product]:
        """All of a seller's listings, sold ones included, in catalog order."""
        return [p for p in await self._repo.list_products(store) if p.seller_id == seller_id]

    async def create_listing(
        self, store: DurableStoreProtocol, seller: User, req: ListingRequest
    ) -> Product:
        if not req.images:
            raise InvalidListingError("at least one image is required")
        product = Product(
            id=generate_id(),
            title=req.title.strip(),
            price=req.price,
            description=_description(req),
            category=req.category.value,
            condition=req.condition.value,
            image=req.images[0],
            images=list(req.images),
            seller_id=seller.id,
            seller_name=seller.name,
            created_at=next_timestamp_ms(),
            location=req.location.strip(),
            status=ProductStatus.ACTIVE.value,
        )
        await self._repo.create_product(store, product)
        return product

    async def update_listing(
        self,
        store: DurableStoreProtocol,
        actor: User,
        product_id: str,
        req: ListingRequest,
    ) -> Product:
        existing = await self._owned(store, actor, product_id)
        if not req.images:
            raise InvalidListingError("at least one image is required")
        updated = replace(
            existing,
            title=req.title.strip(),
            price=req.price,
            description=_description(req, fallback=existing.description),
            category=req.category.value,
            condition=req.condition.value,
            image=req.images[0],
            images=list(req.images),
            location=req.location.strip(),
        )
        if not await self._repo.update_product(store, updated):
            # removed between read and write
            raise ProductNotFoundError(product_id)
        return updated

    async def mark_sold(
        self, store: DurableStoreProtocol, actor: User, product_id: str
    ) -> Product:
        existing = await self._owned(store, actor, product_id)
        if existing.is_sold:
            raise ListingAlreadySoldError(product_id)
        sold = replace(existing, status=ProductStatus.SOLD.value)
        if not await self._repo.update_product(store, sold):
            raise ProductNotFoundError(product_id)
        logger.info("Listing marked sold: id=%s", product_id)
        return sold

    async def describe_listing(self, title: str, category: str, features: str) -> str:
        return await self._describer.generate(title, category, features)

    async def _owned(
        self, store: DurableStoreProtocol, actor: User, product_id: str
    ) -> Product:
        product = await self.get_listing(store, product_id)
        if product.seller_id != actor.id:
            raise NotListingOwnerError(product_id)
        return product
