"""MessageRepository — append-only log of all chat messages under CHATS_KEY."""

import logging

from src.mk_chat.domain.models import ChatMessage, document_to_message, message_to_document
from src.mk_store.documents import read_list, write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import CHATS_KEY

logger = logging.getLogger(__name__)


class MessageRepository:
    async def list_for_product(
        self, store: DurableStoreProtocol, product_id: str
    ) -> list[ChatMessage]:
        """One thread, oldest first."""
        thread: list[ChatMessage] = []
        for doc in await read_list(store, CHATS_KEY):
            try:
                message = document_to_message(doc)
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed chat record: %r", doc)
                continue
            if message.product_id == product_id:
                thread.append(message)
        return sorted(thread, key=lambda m: m.created_at)

    async def append(self, store: DurableStoreProtocol, message: ChatMessage) -> None:
        docs = await read_list(store, CHATS_KEY)
        await write_document(store, CHATS_KEY, [*docs, message_to_document(message)])
