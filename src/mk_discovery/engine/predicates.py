"""Filter predicates of the discovery query. All pure, all case-insensitive
where text is involved."""

import math

from src.mk_catalog.domain.models import Product
from src.mk_common.enums import ALL


def parse_price_bound(raw: str | float | int | None, default: float) -> float:
    """User-entered bound -> float; blank, non-numeric or NaN -> default."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return default
    else:
        text = raw.strip()
        if not text:
            return default
        try:
            value = float(text)
        except ValueError:
            return default
    return default if math.isnan(value) else value


def matches_text(p: Product, text: str) -> bool:
    if not text:
        return True
    needle = text.lower()
    return (
        needle in p.title.lower()
        or needle in p.description.lower()
        or needle in p.category.lower()
    )


def matches_category(p: Product, category: str) -> bool:
    return category == ALL or p.category == category


def matches_condition(p: Product, condition: str) -> bool:
    return condition == ALL or p.condition == condition


def matches_price(p: Product, min_price: float, max_price: float) -> bool:
    return min_price <= p.price <= max_price


def matches_location(p: Product, location: str) -> bool:
    if not location:
        return True
    return location.lower() in p.location.lower()
