"""ReputationService — seller profile, stats and reviews."""

import logging

from config.settings import settings
from src.mk_catalog.domain.repository import CatalogRepositoryProtocol
from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_common.datetime_utils import next_timestamp_ms
from src.mk_common.errors import InvalidRatingError, SelfReviewError
from src.mk_common.id_generator import generate_id
from src.mk_gateway.user.models import User
from src.mk_reputation.domain.models import Review, SellerProfile, SellerStats
from src.mk_reputation.domain.stats import compute_seller_stats
from src.mk_reputation.infrastructure.persistence import ReviewRepository
from src.mk_store.domain.store import DurableStoreProtocol

logger = logging.getLogger(__name__)


class ReputationService:
    def __init__(
        self,
        reviews: ReviewRepository | None = None,
        catalog: CatalogRepositoryProtocol | None = None,
        prior_rating: float | None = None,
        prior_weight: int | None = None,
    ) -> None:
        self._reviews = reviews or ReviewRepository()
        self._catalog: CatalogRepositoryProtocol = catalog or CatalogRepository()
        self._prior_rating = (
            settings.REPUTATION_PRIOR_RATING if prior_rating is None else prior_rating
        )
        self._prior_weight = (
            settings.REPUTATION_PRIOR_WEIGHT if prior_weight is None else prior_weight
        )

    async def seller_stats(self, store: DurableStoreProtocol, seller_id: str) -> SellerStats:
        products = await self._catalog.list_products(store)
        reviews = await self._reviews.list_for_seller(store, seller_id)
        return compute_seller_stats(
            products, reviews, seller_id, self._prior_rating, self._prior_weight
        )

    async def seller_reviews(self, store: DurableStoreProtocol, seller_id: str) -> list[Review]:
        return await self._reviews.list_for_seller(store, seller_id)

    async def seller_profile(
        self, store: DurableStoreProtocol, seller_id: str
    ) -> SellerProfile | None:
        """Name from the seller's newest listing; None if they never listed."""
        listings = [p for p in await self._catalog.list_products(store) if p.seller_id == seller_id]
        if not listings:
            return None
        newest = max(listings, key=lambda p: p.created_at)
        return SellerProfile(seller_id=seller_id, seller_name=newest.seller_name)

    async def add_review(
        self,
        store: DurableStoreProtocol,
        reviewer: User,
        seller_id: str,
        rating: int,
        comment: str,
    ) -> Review:
        if not (1 <= rating <= 5):
            raise InvalidRatingError(rating)
        if reviewer.id == seller_id:
            raise SelfReviewError()
        review = Review(
            id=generate_id(),
            seller_id=seller_id,
            buyer_id=reviewer.id,
            buyer_name=reviewer.name,
            rating=rating,
            comment=comment.strip(),
            created_at=next_timestamp_ms(),
        )
        await self._reviews.append(store, review)
        logger.info("Review added: seller=%s rating=%d", seller_id, rating)
        return review
