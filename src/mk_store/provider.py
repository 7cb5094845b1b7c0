"""Process-wide durable store, chosen by STORE_BACKEND.

`get_store` doubles as the FastAPI dependency; tests replace it through
app.dependency_overrides. The Redis pool is only opened for the redis
backend and is owned here, closed by close_store().
"""

import redis.asyncio as aioredis

from config.settings import settings
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.infrastructure.memory_store import InMemoryStore
from src.mk_store.infrastructure.redis_store import RedisStore

_store: DurableStoreProtocol | None = None
_redis_pool: aioredis.Redis | None = None


def _redis() -> aioredis.Redis:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_pool


async def get_store() -> DurableStoreProtocol:
    global _store  # noqa: PLW0603
    if _store is None:
        if settings.STORE_BACKEND == "redis":
            _store = RedisStore(
                _redis(),
                prefix=settings.STORE_KEY_PREFIX,
                capacity_bytes=settings.STORE_CAPACITY_BYTES,
            )
        elif settings.STORE_BACKEND == "memory":
            _store = InMemoryStore(capacity_bytes=settings.STORE_CAPACITY_BYTES)
        else:
            raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
    return _store


async def close_store() -> None:
    global _store, _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None
    _store = None
