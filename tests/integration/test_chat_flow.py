"""API flow for listing chats with the simulated seller reply."""

import pytest
from httpx import AsyncClient

from src.mk_chat.application.manager import SELLER_REPLY_TEXT, ConversationManager


class TestChatFlow:
    async def test_send_requires_login(self, seeded_client: AsyncClient) -> None:
        resp = await seeded_client.post("/api/v1/chats/2/messages", json={"text": "hi"})
        assert resp.status_code == 401

    async def test_reply_to_closed_thread(
        self, auth_client: AsyncClient, fast_chat: ConversationManager
    ) -> None:
        resp = await auth_client.post("/api/v1/chats/2/messages", json={"text": "Available?"})
        assert resp.status_code == 201
        await fast_chat.drain()

        history = (await auth_client.get("/api/v1/chats/2/messages")).json()["data"]
        assert [m["text"] for m in history] == ["Available?", SELLER_REPLY_TEXT]
        assert history[1]["sender_id"] == "jane_smith"

        state = (await auth_client.get("/api/v1/chats/2/state")).json()["data"]
        assert state["unread"] == 1
        assert state["notification_visible"] is True

        state = (await auth_client.post("/api/v1/chats/2/open")).json()["data"]
        assert (state["is_open"], state["unread"]) == (True, 0)

    async def test_reply_to_open_thread(
        self, auth_client: AsyncClient, fast_chat: ConversationManager
    ) -> None:
        await auth_client.post("/api/v1/chats/3/open")
        await auth_client.post("/api/v1/chats/3/messages", json={"text": "Hi"})
        await fast_chat.drain()
        state = (await auth_client.get("/api/v1/chats/3/state")).json()["data"]
        assert state["unread"] == 0
        await auth_client.post("/api/v1/chats/3/close")

    async def test_open_while_reply_pending(
        self, auth_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        manager = ConversationManager(reply_delay=0.2, notification_seconds=0.05)
        monkeypatch.setattr("src.mk_chat.application.service._manager", manager)
        resp = await auth_client.post("/api/v1/chats/4/messages", json={"text": "Still here?"})
        assert resp.status_code == 201
        await auth_client.post("/api/v1/chats/4/open")
        await manager.drain()

        state = (await auth_client.get("/api/v1/chats/4/state")).json()["data"]
        assert (state["unread"], state["notification_visible"]) == (0, False)
        history = (await auth_client.get("/api/v1/chats/4/messages")).json()["data"]
        assert history[-1]["text"] == SELLER_REPLY_TEXT

    async def test_location_message(
        self, auth_client: AsyncClient, fast_chat: ConversationManager
    ) -> None:
        resp = await auth_client.post(
            "/api/v1/chats/1/messages", json={"location": {"lat": 40.7, "lng": -74.0}}
        )
        data = resp.json()["data"]
        assert data["text"] == "Shared a location"
        assert data["location"] == {"lat": 40.7, "lng": -74.0}
        await fast_chat.drain()

    async def test_empty_message(
        self, auth_client: AsyncClient, fast_chat: ConversationManager
    ) -> None:
        resp = await auth_client.post("/api/v1/chats/2/messages", json={"text": " "})
        assert resp.status_code == 422
        assert resp.json()["code"] == 5001

    async def test_unknown_listing(self, auth_client: AsyncClient) -> None:
        resp = await auth_client.get("/api/v1/chats/ghost/messages")
        assert resp.status_code == 404

    async def test_detach(
        self, auth_client: AsyncClient, fast_chat: ConversationManager
    ) -> None:
        await auth_client.post("/api/v1/chats/2/messages", json={"text": "hi"})
        await auth_client.post("/api/v1/chats/2/detach")
        await fast_chat.drain()
        state = (await auth_client.get("/api/v1/chats/2/state")).json()["data"]
        assert state["unread"] == 0
        history = (await auth_client.get("/api/v1/chats/2/messages")).json()["data"]
        assert len(history) == 2
