"""Domain models for mk_reputation — pure dataclasses, no business logic."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Review:
    id: str
    seller_id: str
    buyer_id: str
    buyer_name: str      # snapshot at review time
    rating: int          # 1-5
    comment: str
    created_at: int      # epoch ms


@dataclass
class SellerStats:
    total_listings: int
    average_rating: str  # one decimal, display form: "4.5"
    review_count: int    # includes the prior weight, see compute_seller_stats


@dataclass
class SellerProfile:
    seller_id: str
    seller_name: str     # from the seller's most recent listing


def review_to_document(r: Review) -> dict[str, Any]:
    return {
        "id": r.id,
        "sellerId": r.seller_id,
        "buyerId": r.buyer_id,
        "buyerName": r.buyer_name,
        "rating": r.rating,
        "comment": r.comment,
        "createdAt": r.created_at,
    }


def document_to_review(doc: dict[str, Any]) -> Review:
    """Raises ValueError for a rating that is not a whole number in 1-5."""
    rating = doc["rating"]
    if isinstance(rating, bool) or not isinstance(rating, (int, float)) or rating != int(rating):
        raise ValueError(f"malformed rating: {rating!r}")
    if not 1 <= rating <= 5:
        raise ValueError(f"rating out of range: {rating!r}")
    return Review(
        id=str(doc["id"]),
        seller_id=str(doc["sellerId"]),
        buyer_id=str(doc["buyerId"]),
        buyer_name=doc.get("buyerName", ""),
        rating=int(rating),
        comment=doc.get("comment", ""),
        created_at=int(doc["createdAt"]),
    )
