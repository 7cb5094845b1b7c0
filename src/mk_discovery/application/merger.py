"""Merge parser-extracted smart filters into the user's filter state.

Policy: a field the parser returned (not None) replaces the current value,
anything else is left alone. The location goes to the app-wide location
selector, not into FilterState. Applying the same SmartFilter twice gives
the same result as applying it once.
"""

import logging
import math
from dataclasses import replace

from src.mk_common.enums import ALL, CATEGORY_VALUES, SORT_VALUES
from src.mk_discovery.domain.models import FilterState, MergeResult, SmartFilter

logger = logging.getLogger(__name__)


def format_price(value: float) -> str:
    """Number -> the text a user would have typed: 1500.0 -> '1500'."""
    return str(int(value)) if float(value).is_integer() else str(value)


def merge_smart_filters(
    current: FilterState,
    smart: SmartFilter | None,
    location: str,
) -> MergeResult:
    if smart is None:
        return MergeResult(filters=current, location=location)

    changes: dict[str, str] = {}

    if smart.category is not None:
        if smart.category in CATEGORY_VALUES or smart.category == ALL:
            changes["category"] = smart.category
        else:
            logger.debug("Ignoring unknown smart-filter category %r", smart.category)

    if smart.min_price is not None and math.isfinite(smart.min_price):
        changes["min_price"] = format_price(smart.min_price)

    if smart.max_price is not None and math.isfinite(smart.max_price):
        changes["max_price"] = format_price(smart.max_price)

    if smart.sort_by is not None:
        if smart.sort_by in SORT_VALUES:
            changes["sort"] = smart.sort_by
        else:
            logger.debug("Ignoring unknown smart-filter sort %r", smart.sort_by)

    merged_location = smart.location if smart.location is not None else location
    return MergeResult(filters=replace(current, **changes), location=merged_location)
