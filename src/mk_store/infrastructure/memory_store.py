"""In-process store with a byte quota, modelled on browser local storage."""

from src.mk_common.errors import StorageFullError


def storage_size(text: str) -> int:
    """Size in UTF-16 code units, the unit browser storage quotas count in."""
    return len(text.encode("utf-16-le")) // 2


class InMemoryStore:
    """Dict-backed store. Quota covers keys and values together."""

    def __init__(self, capacity_bytes: int) -> None:
        self._capacity = capacity_bytes
        self._data: dict[str, str] = {}
        self._used = 0

    @property
    def used_bytes(self) -> int:
        return self._used

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        old = self._data.get(key)
        released = storage_size(key) + storage_size(old) if old is not None else 0
        required = self._used - released + storage_size(key) + storage_size(value)
        if required > self._capacity:
            raise StorageFullError(key, required, self._capacity)
        self._data[key] = value
        self._used = required

    async def remove(self, key: str) -> None:
        old = self._data.pop(key, None)
        if old is not None:
            self._used -= storage_size(key) + storage_size(old)
