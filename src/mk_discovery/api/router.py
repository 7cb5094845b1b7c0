"""mk_discovery REST endpoints.

GET  /discovery/feed          — filtered, sorted, active-only listings
GET  /discovery/suggestions   — autocomplete for the search box (max 8)
POST /discovery/smart-search  — natural-language query merged into filters
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.mk_catalog.application.schemas import ProductListResponse
from src.mk_common.enums import ALL, SortOption
from src.mk_common.response import ApiResponse, success_response
from src.mk_discovery.application.schemas import (
    SmartSearchRequest,
    SmartSearchResponse,
    SuggestionsResponse,
)
from src.mk_discovery.application.service import DiscoveryApplicationService
from src.mk_discovery.domain.models import FilterSpec
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/discovery", tags=["discovery"])

_service = DiscoveryApplicationService()


@router.get("/feed")
async def feed(
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
    text: str = Query("", max_length=200),
    category: str = Query(ALL),
    min_price: str | None = Query(None, description="Non-numeric values are ignored"),
    max_price: str | None = Query(None, description="Non-numeric values are ignored"),
    condition: str = Query(ALL),
    location: str = Query(""),
    sort: SortOption = Query(SortOption.DATE_DESC),
) -> ApiResponse:
    spec = FilterSpec(
        text=text,
        category=category,
        min_price=min_price,
        max_price=max_price,
        condition=condition,
        location=location,
        sort=sort.value,
    )
    products = await _service.feed(store, spec)
    return success_response(ProductListResponse.from_domain(products).model_dump(), request)


@router.get("/suggestions")
async def suggestions(
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
    q: str = Query("", max_length=200),
) -> ApiResponse:
    items = await _service.suggestions(store, q)
    return success_response(SuggestionsResponse(query=q, suggestions=items).model_dump(), request)


@router.post("/smart-search")
async def smart_search(request: Request, body: SmartSearchRequest) -> ApiResponse:
    result, applied = await _service.smart_search(
        body.query, body.filters.to_domain(), body.location
    )
    data = SmartSearchResponse.from_domain(result, applied)
    return success_response(data.model_dump(), request)
