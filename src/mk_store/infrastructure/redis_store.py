"""Redis-backed durable store.

Every key lives under STORE_KEY_PREFIX. Values are written with a single
SET, which Redis applies atomically, so a rejected write leaves the old
value in place. Redis reports memory exhaustion as an OOM error reply;
that becomes StorageFullError like a local quota overflow.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError, TimeoutError as RedisTimeoutError

from src.mk_common.errors import StorageFullError, StoreUnavailableError
from src.mk_store.infrastructure.memory_store import storage_size

logger = logging.getLogger(__name__)


class RedisStore:
    def __init__(self, redis: aioredis.Redis, prefix: str, capacity_bytes: int) -> None:
        self._redis = redis
        self._prefix = prefix
        self._capacity = capacity_bytes

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(self._key(key))
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise StoreUnavailableError(str(exc)) from exc

    async def set(self, key: str, value: str) -> None:
        # Per-namespace cap; the server-side maxmemory is the global one.
        required = storage_size(key) + storage_size(value)
        if required > self._capacity:
            raise StorageFullError(key, required, self._capacity)
        try:
            await self._redis.set(self._key(key), value)
        except ResponseError as exc:
            if str(exc).startswith("OOM"):
                logger.warning("Redis rejected write for %s: %s", key, exc)
                raise StorageFullError(key, required, self._capacity) from exc
            raise
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise StoreUnavailableError(str(exc)) from exc

    async def remove(self, key: str) -> None:
        try:
            await self._redis.delete(self._key(key))
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise StoreUnavailableError(str(exc)) from exc
