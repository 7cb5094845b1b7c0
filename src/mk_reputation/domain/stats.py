"""Seller reputation with a Bayesian-style prior.

    average = (prior_rating * prior_weight + sum(ratings)) / (prior_weight + n)
    review_count = prior_weight + n

The prior weight is part of the displayed count: a new seller
shows "4.5 (10 reviews)" rather than "0 reviews". It is a display
convention, not a number of real reviews.

The average is rendered with one decimal, rounding half-up on the exact
binary value of the quotient: 51/12 = 4.25 -> "4.3".
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from src.mk_catalog.domain.models import Product
from src.mk_reputation.domain.models import Review, SellerStats

PRIOR_RATING = 4.5
PRIOR_WEIGHT = 10

_ONE_DECIMAL = Decimal("0.1")


def format_rating(value: float) -> str:
    return str(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_seller_stats(
    products: Iterable[Product],
    reviews: Iterable[Review],
    seller_id: str,
    prior_rating: float = PRIOR_RATING,
    prior_weight: int = PRIOR_WEIGHT,
) -> SellerStats:
    total_listings = sum(1 for p in products if p.seller_id == seller_id)
    ratings = [r.rating for r in reviews if r.seller_id == seller_id]

    count = prior_weight + len(ratings)
    total = prior_rating * prior_weight + sum(ratings)
    average = total / count if count else prior_rating

    return SellerStats(
        total_listings=total_listings,
        average_rating=format_rating(average),
        review_count=count,
    )
