"""mk_favorites REST endpoints.

GET  /favorites                      — favorited listings (dangling ids dropped)
GET  /favorites/{product_id}         — membership of one listing
POST /favorites/{product_id}/toggle  — flip membership, returns the new state
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from src.mk_catalog.application.schemas import ProductListResponse
from src.mk_common.response import ApiResponse, success_response
from src.mk_favorites.application.service import FavoritesService
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/favorites", tags=["favorites"])

_service = FavoritesService()


class FavoriteState(BaseModel):
    product_id: str
    is_favorite: bool


@router.get("")
async def list_favorites(
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    products = await _service.favorite_products(store)
    return success_response(ProductListResponse.from_domain(products).model_dump(), request)


@router.get("/{product_id}")
async def get_favorite(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    state = FavoriteState(
        product_id=product_id,
        is_favorite=await _service.is_favorite(store, product_id),
    )
    return success_response(state.model_dump(), request)


@router.post("/{product_id}/toggle")
async def toggle_favorite(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    state = FavoriteState(
        product_id=product_id,
        is_favorite=await _service.toggle(store, product_id),
    )
    return success_response(state.model_dump(), request)
