# src/mk_store/domain/store.py
"""Durable store Protocol — the only path to persisted bytes.

Values are opaque text; callers own (de)serialization. Implementations must
make `set` all-or-nothing: either the new value is stored, or the old value
is left untouched and StorageFullError is raised.
"""

from typing import Protocol


class DurableStoreProtocol(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...
