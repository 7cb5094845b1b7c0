"""MirrorProductRepository — SQL copy of the catalog for the remote API.

All queries use raw text() SQL (no ORM). `images` is stored as a
JSON-encoded string and decoded on read; price and created_at are coerced
back to numbers since drivers may hand back Decimal or str.
"""

import json
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mk_catalog.domain.models import Product

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, title, price, description, category, condition,
    image, images, seller_id, seller_name, created_at, location, status
"""

_LIST_PRODUCTS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM products
    ORDER BY created_at DESC
""")

_GET_PRODUCT_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM products
    WHERE id = :id
""")

_INSERT_PRODUCT_SQL = text("""
    INSERT INTO products (id, title, price, description, category, condition,
                          image, images, seller_id, seller_name, created_at,
                          location, status)
    VALUES (:id, :title, :price, :description, :category, :condition,
            :image, :images, :seller_id, :seller_name, :created_at,
            :location, :status)
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _decode_images(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(i) for i in raw]
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Undecodable images column: %r", raw)
        return []
    return [str(i) for i in decoded] if isinstance(decoded, list) else []


def _row_to_product(row: object) -> Product:
    images = _decode_images(row.images)  # type: ignore[attr-defined]
    return Product(
        id=row.id,  # type: ignore[attr-defined]
        title=row.title or "",  # type: ignore[attr-defined]
        price=float(row.price or 0),  # type: ignore[attr-defined]
        description=row.description or "",  # type: ignore[attr-defined]
        category=row.category or "",  # type: ignore[attr-defined]
        condition=row.condition or "",  # type: ignore[attr-defined]
        image=row.image or (images[0] if images else ""),  # type: ignore[attr-defined]
        images=images,
        seller_id=row.seller_id or "",  # type: ignore[attr-defined]
        seller_name=row.seller_name or "",  # type: ignore[attr-defined]
        created_at=int(row.created_at or 0),  # type: ignore[attr-defined]
        location=row.location or "",  # type: ignore[attr-defined]
        status=row.status or "active",  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MirrorProductRepository:
    """Caller owns the transaction (commit / rollback)."""

    async def list_products(self, db: AsyncSession) -> list[Product]:
        result = await db.execute(_LIST_PRODUCTS_SQL)
        return [_row_to_product(row) for row in result.fetchall()]

    async def get_product(self, db: AsyncSession, product_id: str) -> Product | None:
        result = await db.execute(_GET_PRODUCT_SQL, {"id": product_id})
        row = result.fetchone()
        return _row_to_product(row) if row is not None else None

    async def create_product(self, db: AsyncSession, product: Product) -> None:
        await db.execute(
            _INSERT_PRODUCT_SQL,
            {
                "id": product.id,
                "title": product.title,
                "price": product.price,
                "description": product.description,
                "category": product.category,
                "condition": product.condition,
                "image": product.image,
                "images": json.dumps(product.images),
                "seller_id": product.seller_id,
                "seller_name": product.seller_name,
                "created_at": product.created_at,
                "location": product.location,
                "status": product.status,
            },
        )
