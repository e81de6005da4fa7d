import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.real_estate_catalog.schemas.property_schema import PropertySchema

# Sentinel value of the type and status selectors meaning "don't filter"
ALL = "all"


@dataclass(frozen=True)
class PropertyFilters:
    search_term: str = ""
    property_type: str = ALL
    status: str = ALL
    min_price: Optional[float] = None
    max_price: Optional[float] = None


def matches_search(prop: PropertySchema, term: str) -> bool:
    term = term.lower()
    return (
        term in prop.title.lower()
        or term in prop.location.lower()
        or term in prop.description.lower()
    )


def filter_properties(properties: Sequence[PropertySchema], filters: PropertyFilters) -> List[PropertySchema]:
    """
    Derives the visible list from the fetched one. The search term matches title,
    location or description (case-insensitive); every other filter is combined with AND.
    The input sequence is never modified.
    """
    filtered = list(properties)

    if filters.search_term:
        filtered = [p for p in filtered if matches_search(p, filters.search_term)]

    if filters.property_type != ALL:
        filtered = [p for p in filtered if p.type == filters.property_type]

    if filters.status != ALL:
        filtered = [p for p in filtered if p.status == filters.status]

    if filters.min_price is not None:
        filtered = [p for p in filtered if p.price >= filters.min_price]

    if filters.max_price is not None:
        filtered = [p for p in filtered if p.price <= filters.max_price]

    return filtered


def parse_price(raw: Optional[str]) -> Optional[float]:
    """
    Reads a price typed in the filter bar; blank or non-numeric input means "not set".
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
