"""Search-box autocomplete."""

from collections.abc import Iterable

from src.mk_catalog.domain.models import Product

MAX_SUGGESTIONS = 8


def rank_suggestions(
    products: Iterable[Product], prefix: str, limit: int = MAX_SUGGESTIONS
) -> list[str]:
    """Distinct matching category names, then titles.

    Entries that start with the prefix come before entries that merely
    contain it; otherwise first-seen order is kept.
    """
    needle = prefix.lower()
    if not needle.strip():
        return []

    products = list(products)
    seen: dict[str, None] = {}
    for p in products:
        if needle in p.category.lower():
            seen.setdefault(p.category)
    for p in products:
        if needle in p.title.lower():
            seen.setdefault(p.title)

    ranked = sorted(seen, key=lambda s: not s.lower().startswith(needle))
    return ranked[:limit]
