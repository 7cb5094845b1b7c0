"""mk_mirror REST endpoints, mounted under /api.

These keep the remote mirror's plain contract rather than ApiResponse:

GET  /api/products       — array of products, newest first
GET  /api/products/{id}  — one product, 404 {"error": "Product not found"}
POST /api/products       — {"success": true, "id": ...}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.mk_catalog.infrastructure.persistence import product_to_document
from src.mk_common.database import get_db_session
from src.mk_mirror.application.schemas import MirrorProductIn
from src.mk_mirror.application.service import MirrorService

router = APIRouter(prefix="/products", tags=["mirror"])

_service = MirrorService()


@router.get("")
async def list_products(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return [product_to_document(p) for p in await _service.list_products(db)]


@router.get("/{product_id}", response_model=None)
async def get_product(
    product_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any] | JSONResponse:
    product = await _service.get_product(db, product_id)
    if product is None:
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    return product_to_document(product)


@router.post("")
async def create_product(
    body: MirrorProductIn,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    product_id = await _service.create_product(db, body)
    return {"success": True, "id": product_id}
