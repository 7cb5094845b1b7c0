"""ChatApplicationService — binds chat threads to listings and users."""

from src.mk_catalog.domain.models import Product
from src.mk_catalog.domain.repository import CatalogRepositoryProtocol
from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_chat.application.manager import ConversationManager
from src.mk_chat.domain.models import ChatMessage, GeoPoint, ThreadState
from src.mk_common.errors import ProductNotFoundError
from src.mk_gateway.user.models import User
from src.mk_store.domain.store import DurableStoreProtocol

_manager: ConversationManager | None = None


def get_conversation_manager() -> ConversationManager:
    global _manager  # noqa: PLW0603
    if _manager is None:
        _manager = ConversationManager()
    return _manager


class ChatApplicationService:
    def __init__(
        self,
        manager: ConversationManager | None = None,
        catalog: CatalogRepositoryProtocol | None = None,
    ) -> None:
        self._manager = manager
        self._catalog: CatalogRepositoryProtocol = catalog or CatalogRepository()

    @property
    def manager(self) -> ConversationManager:
        return self._manager or get_conversation_manager()

    async def history(self, store: DurableStoreProtocol, product_id: str) -> list[ChatMessage]:
        await self._listing(store, product_id)
        return await self.manager.history(store, product_id)

    async def send(
        self,
        store: DurableStoreProtocol,
        sender: User,
        product_id: str,
        text: str | None = None,
        attachment: str | None = None,
        location: GeoPoint | None = None,
    ) -> ChatMessage:
        product = await self._listing(store, product_id)
        return await self.manager.send_message(
            store,
            product_id,
            sender.id,
            text=text,
            attachment=attachment,
            location=location,
            counterpart_id=product.seller_id,
        )

    async def open(self, store: DurableStoreProtocol, product_id: str) -> ThreadState:
        await self._listing(store, product_id)
        return self.manager.open_thread(product_id)

    async def close(self, store: DurableStoreProtocol, product_id: str) -> ThreadState:
        await self._listing(store, product_id)
        return self.manager.close_thread(product_id)

    async def state(self, store: DurableStoreProtocol, product_id: str) -> ThreadState:
        await self._listing(store, product_id)
        return self.manager.thread_state(product_id)

    def detach(self, product_id: str) -> None:
        self.manager.detach(product_id)

    async def _listing(self, store: DurableStoreProtocol, product_id: str) -> Product:
        product = await self._catalog.get_product(store, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
