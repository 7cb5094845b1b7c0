"""Global enums — values are the persisted strings, keep them stable."""

from enum import Enum


class Category(str, Enum):
    MOBILES = "Mobiles"
    CARS = "Cars"
    BIKES = "Bikes"
    PROPERTIES_SALE = "Properties for Sale"
    PROPERTIES_RENT = "Properties for Rent"
    ELECTRONICS = "Electronics & Appliances"
    FURNITURE = "Furniture"
    FASHION = "Fashion"
    BOOKS_SPORTS = "Books, Sports & Hobbies"
    PETS = "Pets"
    SERVICES = "Services"
    OTHER = "Other"


class Condition(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class ProductStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"


class SortOption(str, Enum):
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


# Sentinel for "no category / condition filter"
ALL = "All"

CATEGORY_VALUES: frozenset[str] = frozenset(c.value for c in Category)
CONDITION_VALUES: frozenset[str] = frozenset(c.value for c in Condition)
SORT_VALUES: frozenset[str] = frozenset(s.value for s in SortOption)
