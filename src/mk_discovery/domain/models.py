"""Domain models for mk_discovery — pure dataclasses."""

from dataclasses import dataclass

from src.mk_common.enums import ALL, SortOption


@dataclass(frozen=True)
class FilterSpec:
    """One discovery query. Price bounds stay as user-entered text."""

    text: str = ""
    category: str = ALL
    min_price: str | float | None = None
    max_price: str | float | None = None
    condition: str = ALL
    location: str = ""
    sort: str = SortOption.DATE_DESC.value
    active_only: bool = True    # discovery feed hides sold listings


@dataclass(frozen=True)
class FilterState:
    """The user's catalog filter panel (search text and location live elsewhere)."""

    category: str = ALL
    min_price: str = ""
    max_price: str = ""
    condition: str = ALL
    sort: str = SortOption.DATE_DESC.value


@dataclass(frozen=True)
class SmartFilter:
    """Structured filters extracted from free text by the query parser.

    None means "not mentioned"; the merger leaves those fields alone.
    """

    category: str | None = None
    location: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.category, self.location, self.min_price, self.max_price, self.sort_by)
        )


@dataclass(frozen=True)
class MergeResult:
    filters: FilterState
    location: str   # the separate, app-wide location selector
