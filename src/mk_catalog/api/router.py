"""mk_catalog REST endpoints.

GET  /products                — whole catalog, store order (newest created first)
GET  /products/mine           — the current user's listings, sold included
GET  /products/{product_id}   — one listing
POST /products                — create a listing (login required)
PUT  /products/{product_id}   — full replace of a listing (owner only)
POST /products/{product_id}/sold — mark a listing sold (owner only)
POST /products/describe       — AI sales description from feature notes
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from src.mk_catalog.application.schemas import (
    DescribeRequest,
    DescribeResponse,
    ListingRequest,
    ProductListResponse,
    ProductOut,
)
from src.mk_catalog.application.service import CatalogApplicationService
from src.mk_common.response import ApiResponse, success_response
from src.mk_gateway.auth.dependencies import get_current_user
from src.mk_gateway.user.models import User
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/products", tags=["products"])

_service = CatalogApplicationService()


@router.get("")
async def list_products(
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    products = await _service.list_listings(store)
    return success_response(ProductListResponse.from_domain(products).model_dump(), request)


@router.get("/mine")
async def my_products(
    request: Request,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    products = await _service.my_listings(store, user.id)
    return success_response(ProductListResponse.from_domain(products).model_dump(), request)


@router.post("/describe")
async def describe_product(
    request: Request,
    body: DescribeRequest,
) -> ApiResponse:
    text = await _service.describe_listing(body.title, body.category.value, body.features)
    return success_response(DescribeResponse(description=text).model_dump(), request)


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    product = await _service.get_listing(store, product_id)
    return success_response(ProductOut.from_domain(product).model_dump(), request)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    body: ListingRequest,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    product = await _service.create_listing(store, user, body)
    return success_response(
        ProductOut.from_domain(product).model_dump(), request, message="Listing created"
    )


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: Request,
    body: ListingRequest,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    product = await _service.update_listing(store, user, product_id, body)
    return success_response(ProductOut.from_domain(product).model_dump(), request)


@router.post("/{product_id}/sold")
async def mark_product_sold(
    product_id: str,
    request: Request,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    product = await _service.mark_sold(store, user, product_id)
    return success_response(ProductOut.from_domain(product).model_dump(), request)
