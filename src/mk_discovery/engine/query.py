"""Discovery query: filter then stable sort.

Filters are ANDed. Sorting uses Python's stable sort (reverse=True keeps
the input order of equal keys too), so ties keep their catalog order and
no secondary key is needed.
"""

from collections.abc import Callable, Iterable

from src.mk_catalog.domain.models import Product
from src.mk_common.enums import SortOption
from src.mk_discovery.domain.models import FilterSpec
from src.mk_discovery.engine.predicates import (
    matches_category,
    matches_condition,
    matches_location,
    matches_price,
    matches_text,
    parse_price_bound,
)

# sort option -> (key, descending); unknown options fall back to date_desc
_SORTS: dict[str, tuple[Callable[[Product], float], bool]] = {
    SortOption.DATE_DESC.value: (lambda p: p.created_at, True),
    SortOption.DATE_ASC.value: (lambda p: p.created_at, False),
    SortOption.PRICE_ASC.value: (lambda p: p.price, False),
    SortOption.PRICE_DESC.value: (lambda p: p.price, True),
}


def query_products(products: Iterable[Product], spec: FilterSpec) -> list[Product]:
    min_price = parse_price_bound(spec.min_price, 0.0)
    max_price = parse_price_bound(spec.max_price, float("inf"))

    matched = [
        p
        for p in products
        if not (spec.active_only and p.is_sold)
        and matches_text(p, spec.text)
        and matches_category(p, spec.category)
        and matches_price(p, min_price, max_price)
        and matches_condition(p, spec.condition)
        and matches_location(p, spec.location)
    ]

    key, descending = _SORTS.get(spec.sort, _SORTS[SortOption.DATE_DESC.value])
    return sorted(matched, key=key, reverse=descending)
