"""Tests for ConversationManager: messages, simulated replies and thread state.

Delays are shrunk to milliseconds; drain() waits for pending replies.
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.mk_chat.application.manager import (
    ATTACHMENT_TEXT,
    LOCATION_TEXT,
    SELLER_REPLY_TEXT,
    ConversationManager,
)
from src.mk_chat.domain.models import GeoPoint
from src.mk_chat.infrastructure.persistence import MessageRepository
from src.mk_common.errors import EmptyMessageError, StorageFullError, StoreUnavailableError
from src.mk_store.infrastructure.memory_store import InMemoryStore

PID = "p1"
BUYER = "buyer"
SELLER = "seller"


@pytest.fixture
def manager() -> ConversationManager:
    return ConversationManager(reply_delay=0.01, notification_seconds=0.05)


class TestSendMessage:
    async def test_persists_and_returns(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        msg = await manager.send_message(store, PID, BUYER, text="  Is it available?  ")
        assert msg.text == "Is it available?"
        assert msg.sender_id == BUYER
        assert [m.id for m in await manager.history(store, PID)] == [msg.id]

    async def test_empty_rejected(self, manager: ConversationManager, store: InMemoryStore) -> None:
        with pytest.raises(EmptyMessageError):
            await manager.send_message(store, PID, BUYER, text="   ", counterpart_id=SELLER)
        await manager.drain()
        assert await manager.history(store, PID) == []

    async def test_attachment_only(self, manager: ConversationManager, store: InMemoryStore) -> None:
        msg = await manager.send_message(store, PID, BUYER, attachment="data:image/png;base64,AA")
        assert msg.text == ATTACHMENT_TEXT
        assert (await manager.history(store, PID))[0].attachment == "data:image/png;base64,AA"

    async def test_empty_attachment_is_no_attachment(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        with pytest.raises(EmptyMessageError):
            await manager.send_message(store, PID, BUYER, attachment="")
        msg = await manager.send_message(store, PID, BUYER, text="hi", attachment="")
        assert msg.attachment is None

    async def test_location_only(self, manager: ConversationManager, store: InMemoryStore) -> None:
        msg = await manager.send_message(store, PID, BUYER, location=GeoPoint(40.7, -74.0))
        assert msg.text == LOCATION_TEXT
        assert (await manager.history(store, PID))[0].location == GeoPoint(40.7, -74.0)

    async def test_storage_full_appends_nothing(self, manager: ConversationManager) -> None:
        tiny = InMemoryStore(capacity_bytes=20)
        with pytest.raises(StorageFullError):
            await manager.send_message(tiny, PID, BUYER, text="hello", counterpart_id=SELLER)
        await manager.drain()
        assert await manager.history(tiny, PID) == []
        assert manager.thread_state(PID).unread == 0

    async def test_threads_are_separate(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, "a", BUYER, text="one")
        await manager.send_message(store, "b", BUYER, text="two")
        assert [m.text for m in await manager.history(store, "a")] == ["one"]

    async def test_history_ascending(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        for text in ("1", "2", "3"):
            await manager.send_message(store, PID, BUYER, text=text)
        history = await manager.history(store, PID)
        assert [m.text for m in history] == ["1", "2", "3"]
        assert history[0].created_at < history[1].created_at < history[2].created_at


class TestSimulatedReply:
    async def test_reply_while_closed_counts_unread(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        history = await manager.history(store, PID)
        assert [m.sender_id for m in history] == [BUYER, SELLER]
        assert history[1].text == SELLER_REPLY_TEXT
        state = manager.thread_state(PID)
        assert state.unread == 1
        assert state.notification_visible is True

    async def test_banner_hides_after_timeout(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        await asyncio.sleep(0.1)
        state = manager.thread_state(PID)
        assert state.notification_visible is False
        assert state.unread == 1

    async def test_reply_while_open_leaves_unread_zero(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        manager.open_thread(PID)
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        state = manager.thread_state(PID)
        assert state.unread == 0
        assert state.notification_visible is False
        assert len(await manager.history(store, PID)) == 2

    async def test_open_clears_unread_and_banner(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.send_message(store, PID, BUYER, text="hello?", counterpart_id=SELLER)
        await manager.drain()
        assert manager.thread_state(PID).unread == 2
        state = manager.open_thread(PID)
        assert (state.is_open, state.unread, state.notification_visible) == (True, 0, False)

    async def test_close_then_reply_counts_again(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        manager.open_thread(PID)
        manager.close_thread(PID)
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        assert manager.thread_state(PID).unread == 1

    async def test_no_reply_to_self(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, PID, SELLER, text="bump", counterpart_id=SELLER)
        await manager.drain()
        assert len(await manager.history(store, PID)) == 1

    async def test_detach_persists_reply_but_not_state(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        queue = manager.subscribe()
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        manager.detach(PID)
        await manager.drain()
        assert len(await manager.history(store, PID)) == 2
        assert manager.thread_state(PID).unread == 0
        assert queue.empty()

    async def test_subscribers_notified(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        queue = manager.subscribe()
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        note = queue.get_nowait()
        assert note.product_id == PID
        assert note.unread == 1
        assert note.message.sender_id == SELLER
        manager.unsubscribe(queue)

    async def test_reply_storage_full_is_dropped(self, store: InMemoryStore) -> None:
        repo = MagicMock(spec=MessageRepository)
        repo.append = AsyncMock(side_effect=[None, StorageFullError("chats", 10, 5)])
        manager = ConversationManager(repo=repo, reply_delay=0.01, notification_seconds=0.05)
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        await manager.drain()
        assert repo.append.await_count == 2
        assert manager.thread_state(PID).unread == 0

    async def test_reply_store_unavailable_is_logged(
        self, store: InMemoryStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        repo = MagicMock(spec=MessageRepository)
        repo.append = AsyncMock(side_effect=[None, StoreUnavailableError("down")])
        manager = ConversationManager(repo=repo, reply_delay=0.01, notification_seconds=0.05)
        with caplog.at_level(logging.WARNING, logger="src.mk_chat.application.manager"):
            await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
            await asyncio.sleep(0.05)
        assert "Store unavailable: down" in caplog.text
        assert manager.thread_state(PID).unread == 0

    async def test_open_before_reply_arrives(
        self, manager: ConversationManager, store: InMemoryStore
    ) -> None:
        await manager.send_message(store, PID, BUYER, text="hi", counterpart_id=SELLER)
        manager.open_thread(PID)
        await manager.drain()
        state = manager.thread_state(PID)
        assert state.unread == 0
        assert state.notification_visible is False
        assert [m.sender_id for m in await manager.history(store, PID)] == [BUYER, SELLER]


class TestThreadState:
    def test_snapshot_is_a_copy(self, manager: ConversationManager) -> None:
        state = manager.thread_state(PID)
        state.unread = 99
        assert manager.thread_state(PID).unread == 0

    def test_default_closed(self, manager: ConversationManager) -> None:
        state = manager.thread_state(PID)
        assert (state.is_open, state.unread, state.notification_visible) == (False, 0, False)
