"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.mk_store.infrastructure.memory_store import InMemoryStore
from src.mk_store.provider import get_store


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh, empty store with the default 5 MB quota."""
    return InMemoryStore(capacity_bytes=5_242_880)


@pytest.fixture
async def client(store: InMemoryStore) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against `store`."""

    async def _override_store() -> InMemoryStore:
        return store

    app.dependency_overrides[get_store] = _override_store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_store, None)
