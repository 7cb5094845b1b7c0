"""Pydantic schemas for mk_discovery.

Price bounds are accepted as text: whatever the user typed is
passed through, and a non-numeric bound is treated as absent by the engine
instead of being rejected with a 422.
"""

from pydantic import BaseModel, Field

from src.mk_common.enums import ALL, SortOption
from src.mk_discovery.domain.models import FilterState, MergeResult


class FilterStateIn(BaseModel):
    category: str = ALL
    min_price: str = ""
    max_price: str = ""
    condition: str = ALL
    sort: str = SortOption.DATE_DESC.value

    def to_domain(self) -> FilterState:
        return FilterState(
            category=self.category,
            min_price=self.min_price,
            max_price=self.max_price,
            condition=self.condition,
            sort=self.sort,
        )


class FilterStateOut(FilterStateIn):
    @classmethod
    def from_domain(cls, f: FilterState) -> "FilterStateOut":
        return cls(
            category=f.category,
            min_price=f.min_price,
            max_price=f.max_price,
            condition=f.condition,
            sort=f.sort,
        )


class SmartSearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500)
    filters: FilterStateIn = Field(default_factory=FilterStateIn)
    location: str = ""


class SmartSearchResponse(BaseModel):
    filters: FilterStateOut
    location: str
    applied: bool   # False when the parser gave nothing back

    @classmethod
    def from_domain(cls, result: MergeResult, applied: bool) -> "SmartSearchResponse":
        return cls(
            filters=FilterStateOut.from_domain(result.filters),
            location=result.location,
            applied=applied,
        )


class SuggestionsResponse(BaseModel):
    query: str
    suggestions: list[str]
