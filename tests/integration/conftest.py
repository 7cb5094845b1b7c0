"""Integration-test fixtures.

The app runs in-process over ASGITransport with get_store overridden by a
fresh InMemoryStore per test, so no Redis or PostgreSQL is needed. The
lifespan does not run under ASGITransport; seeding is done explicitly.
"""

import pytest
from httpx import AsyncClient

from src.mk_catalog.infrastructure.seed import ensure_seeded
from src.mk_chat.application.manager import ConversationManager
from src.mk_store.infrastructure.memory_store import InMemoryStore

SEED_COUNT = 30


@pytest.fixture
async def seeded_store(store: InMemoryStore) -> InMemoryStore:
    await ensure_seeded(store, count=SEED_COUNT, seed=42)
    return store


@pytest.fixture
async def seeded_client(seeded_store: InMemoryStore, client: AsyncClient) -> AsyncClient:
    return client


@pytest.fixture
async def auth_client(seeded_client: AsyncClient) -> AsyncClient:
    """Client with a logged-in current user ("Test Buyer")."""
    resp = await seeded_client.post("/api/v1/auth/login", json={"name": "Test Buyer"})
    assert resp.status_code == 200
    return seeded_client


@pytest.fixture
def fast_chat(monkeypatch: pytest.MonkeyPatch) -> ConversationManager:
    """Swap the process-wide conversation manager for one with short delays."""
    manager = ConversationManager(reply_delay=0.01, notification_seconds=0.05)
    monkeypatch.setattr("src.mk_chat.application.service._manager", manager)
    return manager
