"""ReviewRepository — append-only review log under REVIEWS_KEY."""

import logging

from src.mk_reputation.domain.models import Review, document_to_review, review_to_document
from src.mk_store.documents import read_list, write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import REVIEWS_KEY

logger = logging.getLogger(__name__)


class ReviewRepository:
    async def list_all(self, store: DurableStoreProtocol) -> list[Review]:
        reviews: list[Review] = []
        for doc in await read_list(store, REVIEWS_KEY):
            try:
                reviews.append(document_to_review(doc))
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError):
                logger.warning("Skipping malformed review record: %r", doc)
        return reviews

    async def list_for_seller(self, store: DurableStoreProtocol, seller_id: str) -> list[Review]:
        """A seller's reviews, newest first (stable for equal timestamps)."""
        mine = [r for r in await self.list_all(store) if r.seller_id == seller_id]
        return sorted(mine, key=lambda r: r.created_at, reverse=True)

    async def append(self, store: DurableStoreProtocol, review: Review) -> None:
        docs = await read_list(store, REVIEWS_KEY)
        await write_document(store, REVIEWS_KEY, [*docs, review_to_document(review)])
