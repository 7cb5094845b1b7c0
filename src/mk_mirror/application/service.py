"""MirrorService — list / get / create on the SQL mirror."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.mk_catalog.domain.models import Product
from src.mk_common.datetime_utils import next_timestamp_ms
from src.mk_common.enums import ProductStatus
from src.mk_common.id_generator import generate_id
from src.mk_mirror.application.schemas import MirrorProductIn
from src.mk_mirror.infrastructure.persistence import MirrorProductRepository

logger = logging.getLogger(__name__)


class MirrorService:
    def __init__(self, repo: MirrorProductRepository | None = None) -> None:
        self._repo = repo or MirrorProductRepository()

    async def list_products(self, db: AsyncSession) -> list[Product]:
        return await self._repo.list_products(db)

    async def get_product(self, db: AsyncSession, product_id: str) -> Product | None:
        return await self._repo.get_product(db, product_id)

    async def create_product(self, db: AsyncSession, payload: MirrorProductIn) -> str:
        product = Product(
            id=generate_id(),
            title=payload.title,
            price=payload.price,
            description=payload.description,
            category=payload.category,
            condition=payload.condition,
            image=payload.images[0],
            images=list(payload.images),
            seller_id=payload.seller_id,
            seller_name=payload.seller_name,
            created_at=next_timestamp_ms(),
            location=payload.location,
            status=ProductStatus.ACTIVE.value,
        )
        try:
            await self._repo.create_product(db, product)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Mirror product created: id=%s", product.id)
        return product.id
