"""mk_reputation REST endpoints.

GET  /sellers/{seller_id}          — profile (404 if the seller never listed)
GET  /sellers/{seller_id}/stats    — listings, blended rating, review count
GET  /sellers/{seller_id}/reviews  — newest first
POST /sellers/{seller_id}/reviews  — add a review (login required)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.mk_common.errors import SellerNotFoundError
from src.mk_common.response import ApiResponse, success_response
from src.mk_gateway.auth.dependencies import get_current_user
from src.mk_gateway.user.models import User
from src.mk_reputation.application.service import ReputationService
from src.mk_reputation.domain.models import Review, SellerStats
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/sellers", tags=["sellers"])

_service = ReputationService()


class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=2000)


class ReviewOut(BaseModel):
    id: str
    seller_id: str
    buyer_id: str
    buyer_name: str
    rating: int
    comment: str
    created_at: int

    @classmethod
    def from_domain(cls, r: Review) -> "ReviewOut":
        return cls(
            id=r.id,
            seller_id=r.seller_id,
            buyer_id=r.buyer_id,
            buyer_name=r.buyer_name,
            rating=r.rating,
            comment=r.comment,
            created_at=r.created_at,
        )


class SellerStatsOut(BaseModel):
    seller_id: str
    total_listings: int
    average_rating: str
    review_count: int

    @classmethod
    def from_domain(cls, seller_id: str, s: SellerStats) -> "SellerStatsOut":
        return cls(
            seller_id=seller_id,
            total_listings=s.total_listings,
            average_rating=s.average_rating,
            review_count=s.review_count,
        )


@router.get("/{seller_id}")
async def get_seller(
    seller_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    profile = await _service.seller_profile(store, seller_id)
    if profile is None:
        raise SellerNotFoundError(seller_id)
    stats = await _service.seller_stats(store, seller_id)
    data = {
        "seller_id": profile.seller_id,
        "seller_name": profile.seller_name,
        "stats": SellerStatsOut.from_domain(seller_id, stats).model_dump(),
    }
    return success_response(data, request)


@router.get("/{seller_id}/stats")
async def get_seller_stats(
    seller_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    stats = await _service.seller_stats(store, seller_id)
    return success_response(SellerStatsOut.from_domain(seller_id, stats).model_dump(), request)


@router.get("/{seller_id}/reviews")
async def list_seller_reviews(
    seller_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    reviews = await _service.seller_reviews(store, seller_id)
    return success_response([ReviewOut.from_domain(r).model_dump() for r in reviews], request)


@router.post("/{seller_id}/reviews", status_code=status.HTTP_201_CREATED)
async def add_seller_review(
    seller_id: str,
    request: Request,
    body: ReviewRequest,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    review = await _service.add_review(store, user, seller_id, body.rating, body.comment)
    return success_response(ReviewOut.from_domain(review).model_dump(), request)
