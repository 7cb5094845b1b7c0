"""CatalogRepository — concrete implementation of CatalogRepositoryProtocol.

The whole catalog is one JSON array under PRODUCTS_KEY, newest listing
first. Every mutation re-reads the array, builds a new one and writes it
back in a single store.set, so a rejected write (StorageFullError) leaves
both the store and the caller's view untouched.
"""

import logging
from typing import Any

from src.mk_catalog.domain.models import Product
from src.mk_store.documents import read_list, write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import PRODUCTS_KEY

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Document mappers (persisted layout is camelCase)
# ---------------------------------------------------------------------------


def product_to_document(p: Product) -> dict[str, Any]:
    return {
        "id": p.id,
        "title": p.title,
        "price": p.price,
        "description": p.description,
        "category": p.category,
        "condition": p.condition,
        "image": p.image,
        "images": list(p.images),
        "sellerId": p.seller_id,
        "sellerName": p.seller_name,
        "createdAt": p.created_at,
        "location": p.location,
        "status": p.status,
    }


def document_to_product(doc: dict[str, Any]) -> Product:
    images = doc.get("images") or []
    image = doc.get("image") or (images[0] if images else "")
    return Product(
        id=str(doc["id"]),
        title=doc["title"],
        price=float(doc["price"]),
        description=doc.get("description", ""),
        category=doc["category"],
        condition=doc["condition"],
        image=image,
        images=list(images) if images else [image],
        seller_id=str(doc["sellerId"]),
        seller_name=doc.get("sellerName", ""),
        created_at=int(doc["createdAt"]),
        location=doc.get("location", ""),
        status=doc.get("status", "active"),
    )


def _decode_products(docs: list[Any]) -> list[Product]:
    products: list[Product] = []
    for doc in docs:
        try:
            products.append(document_to_product(doc))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping malformed product record: %r", doc)
    return products


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class CatalogRepository:
    """Stateless — the store is passed per call, like a DB session."""

    async def list_products(self, store: DurableStoreProtocol) -> list[Product]:
        return _decode_products(await read_list(store, PRODUCTS_KEY))

    async def get_product(
        self, store: DurableStoreProtocol, product_id: str
    ) -> Product | None:
        for product in await self.list_products(store):
            if product.id == product_id:
                return product
        return None

    async def create_product(self, store: DurableStoreProtocol, product: Product) -> None:
        docs = await read_list(store, PRODUCTS_KEY)
        await write_document(store, PRODUCTS_KEY, [product_to_document(product), *docs])
        logger.info("Listing created: id=%s seller=%s", product.id, product.seller_id)

    async def update_product(self, store: DurableStoreProtocol, product: Product) -> bool:
        docs = await read_list(store, PRODUCTS_KEY)
        index = next(
            (i for i, d in enumerate(docs) if isinstance(d, dict) and str(d.get("id")) == product.id),
            None,
        )
        if index is None:
            logger.info("Update skipped, no listing with id=%s", product.id)
            return False
        updated = list(docs)
        updated[index] = product_to_document(product)
        await write_document(store, PRODUCTS_KEY, updated)
        return True
