"""FavoriteRepository — the local user's favorite product ids.

Stored as a JSON array under FAVORITES_KEY. Ids are weak references: a
favorite may outlive its listing and is existence-checked on read by the
application service.
"""

from src.mk_store.documents import read_list, write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import FAVORITES_KEY


class FavoriteRepository:
    async def list_ids(self, store: DurableStoreProtocol) -> list[str]:
        ids: list[str] = []
        for value in await read_list(store, FAVORITES_KEY):
            if isinstance(value, (str, int)) and str(value) not in ids:
                ids.append(str(value))
        return ids

    async def save_ids(self, store: DurableStoreProtocol, ids: list[str]) -> None:
        await write_document(store, FAVORITES_KEY, ids)
