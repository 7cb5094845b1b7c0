"""JSON document helpers on top of the text store.

Corrupted documents never crash a reader: they are logged and treated as
absent, so the caller falls back to its default (and seeding can rewrite
the products namespace).
"""

import json
import logging
from typing import Any

from src.mk_store.domain.store import DurableStoreProtocol

logger = logging.getLogger(__name__)

_MISSING = object()


def decode_document(key: str, raw: str | None, default: Any = None) -> Any:
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Malformed JSON under key %s (%d chars), ignoring", key, len(raw))
        return default


async def read_document(store: DurableStoreProtocol, key: str, default: Any = None) -> Any:
    return decode_document(key, await store.get(key), default)


async def read_list(store: DurableStoreProtocol, key: str) -> list[Any]:
    """Read a JSON array; anything else (absent, corrupt, wrong shape) is []."""
    value = await read_document(store, key, _MISSING)
    if value is _MISSING:
        return []
    if not isinstance(value, list):
        logger.warning("Expected a JSON array under key %s, got %s", key, type(value).__name__)
        return []
    return value


async def write_document(store: DurableStoreProtocol, key: str, value: Any) -> None:
    await store.set(key, json.dumps(value, separators=(",", ":"), ensure_ascii=False))
