"""DiscoveryApplicationService — read paths over the catalog.

All methods are read-only; the engine functions are pure and the service
only loads the catalog and hands it over.
"""

from src.mk_assist.application.query_parser import QueryParser
from src.mk_catalog.domain.models import Product
from src.mk_catalog.domain.repository import CatalogRepositoryProtocol
from src.mk_catalog.infrastructure.persistence import CatalogRepository
from src.mk_discovery.application.merger import merge_smart_filters
from src.mk_discovery.domain.models import FilterSpec, FilterState, MergeResult
from src.mk_discovery.engine.query import query_products
from src.mk_discovery.engine.suggestions import rank_suggestions
from src.mk_store.domain.store import DurableStoreProtocol


class DiscoveryApplicationService:
    def __init__(
        self,
        repo: CatalogRepositoryProtocol | None = None,
        parser: QueryParser | None = None,
    ) -> None:
        self._repo: CatalogRepositoryProtocol = repo or CatalogRepository()
        self._parser = parser or QueryParser()

    async def feed(self, store: DurableStoreProtocol, spec: FilterSpec) -> list[Product]:
        return query_products(await self._repo.list_products(store), spec)

    async def suggestions(self, store: DurableStoreProtocol, prefix: str) -> list[str]:
        if not prefix.strip():
            return []
        return rank_suggestions(await self._repo.list_products(store), prefix)

    async def smart_search(
        self, query: str, current: FilterState, location: str
    ) -> tuple[MergeResult, bool]:
        """Parse `query` and merge it into `current`.

        Returns (result, applied); applied is False when the parser was
        unavailable or found nothing, in which case nothing changed.
        """
        smart = await self._parser.parse(query)
        applied = smart is not None and not smart.is_empty
        return merge_smart_filters(current, smart, location), applied
