"""Unit tests for RedisStore (mocked redis client)."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from src.mk_common.errors import StorageFullError, StoreUnavailableError
from src.mk_store.infrastructure.redis_store import RedisStore


@pytest.fixture
def mock_redis() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def store(mock_redis: AsyncMock) -> RedisStore:
    return RedisStore(mock_redis, prefix="fasterr_", capacity_bytes=100)


class TestRedisStore:
    async def test_get_uses_prefix(self, store: RedisStore, mock_redis: AsyncMock) -> None:
        mock_redis.get.return_value = "[]"
        assert await store.get("products") == "[]"
        mock_redis.get.assert_awaited_once_with("fasterr_products")

    async def test_set_uses_prefix(self, store: RedisStore, mock_redis: AsyncMock) -> None:
        await store.set("user", "{}")
        mock_redis.set.assert_awaited_once_with("fasterr_user", "{}")

    async def test_remove(self, store: RedisStore, mock_redis: AsyncMock) -> None:
        await store.remove("user")
        mock_redis.delete.assert_awaited_once_with("fasterr_user")

    async def test_value_over_cap_never_reaches_redis(
        self, store: RedisStore, mock_redis: AsyncMock
    ) -> None:
        with pytest.raises(StorageFullError):
            await store.set("products", "x" * 200)
        mock_redis.set.assert_not_awaited()

    async def test_oom_becomes_storage_full(
        self, store: RedisStore, mock_redis: AsyncMock
    ) -> None:
        mock_redis.set.side_effect = ResponseError(
            "OOM command not allowed when used memory > 'maxmemory'."
        )
        with pytest.raises(StorageFullError):
            await store.set("products", "[]")

    async def test_other_response_error_propagates(
        self, store: RedisStore, mock_redis: AsyncMock
    ) -> None:
        mock_redis.set.side_effect = ResponseError("WRONGTYPE")
        with pytest.raises(ResponseError):
            await store.set("products", "[]")

    async def test_connection_error_becomes_unavailable(
        self, store: RedisStore, mock_redis: AsyncMock
    ) -> None:
        mock_redis.get.side_effect = RedisConnectionError("refused")
        with pytest.raises(StoreUnavailableError):
            await store.get("products")
