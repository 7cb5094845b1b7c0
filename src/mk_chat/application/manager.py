"""ConversationManager — per-listing threads with a simulated counterpart.

Thread UI state (per product):

    closed, unread=0 --reply arrives--> closed, unread>0 (banner shown)
    closed, any      --open_thread-->   open (unread=0, banner hidden)
    open             --reply arrives--> open (no banner, unread stays 0)
    open             --close_thread-->  closed, unread=0

send_message() persists the message and returns at once; when the
listing has a counterpart (the seller) a reply is scheduled as an asyncio
task after `reply_delay` seconds. The task is tied to the thread's
CancellationToken: detach() cancels the token when the thread goes away,
after which a pending reply is still persisted but leaves thread state,
banner and subscribers untouched.

All of this runs on one event loop; there is no locking. Every append
re-reads the message log from the store, so the store stays the source of
truth.
"""

import asyncio
import logging
from dataclasses import replace

from config.settings import settings
from src.mk_chat.domain.models import ChatMessage, GeoPoint, ReplyNotification, ThreadState
from src.mk_chat.infrastructure.persistence import MessageRepository
from src.mk_common.datetime_utils import next_timestamp_ms
from src.mk_common.errors import AppError, EmptyMessageError, StorageFullError
from src.mk_common.id_generator import generate_id
from src.mk_store.domain.store import DurableStoreProtocol

logger = logging.getLogger(__name__)

SELLER_REPLY_TEXT = (
    "Thanks for your interest! Yes, the item is still available. "
    "Would you like to come see it?"
)
ATTACHMENT_TEXT = "Sent an attachment"
LOCATION_TEXT = "Shared a location"


class CancellationToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ConversationManager:
    def __init__(
        self,
        repo: MessageRepository | None = None,
        reply_delay: float | None = None,
        notification_seconds: float | None = None,
        reply_text: str = SELLER_REPLY_TEXT,
    ) -> None:
        self._repo = repo or MessageRepository()
        self._reply_delay = (
            settings.CHAT_REPLY_DELAY_SECONDS if reply_delay is None else reply_delay
        )
        self._notification_seconds = (
            settings.CHAT_NOTIFICATION_SECONDS
            if notification_seconds is None
            else notification_seconds
        )
        self._reply_text = reply_text
        self._threads: dict[str, ThreadState] = {}
        self._tokens: dict[str, CancellationToken] = {}
        self._banner_timers: dict[str, asyncio.TimerHandle] = {}
        self._pending: set[asyncio.Task[None]] = set()
        self._subscribers: list[asyncio.Queue[ReplyNotification]] = []

    # ------------------------------------------------------------------
    # Thread UI state
    # ------------------------------------------------------------------

    def thread_state(self, product_id: str) -> ThreadState:
        """Snapshot; mutating it does not affect the manager."""
        return replace(self._state(product_id))

    def open_thread(self, product_id: str) -> ThreadState:
        state = self._state(product_id)
        state.is_open = True
        state.unread = 0
        self._hide_banner(product_id)
        return replace(state)

    def close_thread(self, product_id: str) -> ThreadState:
        self._state(product_id).is_open = False
        return self.thread_state(product_id)

    def detach(self, product_id: str) -> None:
        """End the thread's lifetime (user navigated away).

        Pending replies still persist, but no longer touch UI state.
        """
        token = self._tokens.pop(product_id, None)
        if token is not None:
            token.cancel()
        self._cancel_banner_timer(product_id)
        self._threads.pop(product_id, None)

    def subscribe(self) -> asyncio.Queue[ReplyNotification]:
        queue: asyncio.Queue[ReplyNotification] = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[ReplyNotification]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def history(self, store: DurableStoreProtocol, product_id: str) -> list[ChatMessage]:
        return await self._repo.list_for_product(store, product_id)

    async def send_message(
        self,
        store: DurableStoreProtocol,
        product_id: str,
        sender_id: str,
        *,
        text: str | None = None,
        attachment: str | None = None,
        location: GeoPoint | None = None,
        counterpart_id: str | None = None,
    ) -> ChatMessage:
        """Persist a message and schedule the counterpart's reply.

        Raises EmptyMessageError when there is nothing to send and
        StorageFullError when the store rejects the write; in both cases
        nothing is appended and no reply is scheduled.
        """
        attachment = attachment or None
        body = (text or "").strip()
        if not body and attachment is None and location is None:
            raise EmptyMessageError()
        if not body:
            body = ATTACHMENT_TEXT if attachment is not None else LOCATION_TEXT

        message = await self._append(store, product_id, sender_id, body, attachment, location)

        if counterpart_id is not None and counterpart_id != sender_id:
            self._schedule_reply(store, product_id, counterpart_id)
        return message

    async def drain(self) -> None:
        """Wait for every scheduled reply to finish (shutdown, tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _state(self, product_id: str) -> ThreadState:
        return self._threads.setdefault(product_id, ThreadState(product_id=product_id))

    def _token(self, product_id: str) -> CancellationToken:
        return self._tokens.setdefault(product_id, CancellationToken())

    async def _append(
        self,
        store: DurableStoreProtocol,
        product_id: str,
        sender_id: str,
        text: str,
        attachment: str | None,
        location: GeoPoint | None,
    ) -> ChatMessage:
        message = ChatMessage(
            id=generate_id(),
            product_id=product_id,
            sender_id=sender_id,
            text=text,
            created_at=next_timestamp_ms(),
            attachment=attachment,
            location=location,
        )
        await self._repo.append(store, message)
        return message

    def _schedule_reply(
        self, store: DurableStoreProtocol, product_id: str, counterpart_id: str
    ) -> None:
        token = self._token(product_id)
        task = asyncio.create_task(self._reply_later(store, product_id, counterpart_id, token))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _reply_later(
        self,
        store: DurableStoreProtocol,
        product_id: str,
        counterpart_id: str,
        token: CancellationToken,
    ) -> None:
        await asyncio.sleep(self._reply_delay)
        try:
            reply = await self._append(store, product_id, counterpart_id, self._reply_text, None, None)
        except StorageFullError:
            logger.warning("Simulated reply for %s dropped: storage full", product_id)
            return
        except AppError as exc:
            logger.warning("Simulated reply for %s dropped: %s", product_id, exc.message)
            return

        if token.cancelled:
            return

        state = self._state(product_id)
        if state.is_open:
            return
        state.unread += 1
        self._show_banner(product_id)
        notification = ReplyNotification(product_id=product_id, message=reply, unread=state.unread)
        for queue in self._subscribers:
            queue.put_nowait(notification)

    def _show_banner(self, product_id: str) -> None:
        self._state(product_id).notification_visible = True
        self._cancel_banner_timer(product_id)
        loop = asyncio.get_running_loop()
        self._banner_timers[product_id] = loop.call_later(
            self._notification_seconds, self._expire_banner, product_id
        )

    def _hide_banner(self, product_id: str) -> None:
        self._cancel_banner_timer(product_id)
        self._state(product_id).notification_visible = False

    def _expire_banner(self, product_id: str) -> None:
        self._banner_timers.pop(product_id, None)
        state = self._threads.get(product_id)
        if state is not None:
            state.notification_visible = False

    def _cancel_banner_timer(self, product_id: str) -> None:
        handle = self._banner_timers.pop(product_id, None)
        if handle is not None:
            handle.cancel()
