"""Pagination and sort resolution."""

import math
from dataclasses import dataclass
from typing import Any, Optional

from carverse.domain.query.predicates import CarField, SortDirection, SortSpec

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
MAX_LIMIT = 50
DEFAULT_SORT = "newest"

DEFAULT_FEATURED_LIMIT = 6
MAX_FEATURED_LIMIT = 12

SORT_OPTIONS: dict[str, SortSpec] = {
    "newest": SortSpec(CarField.CREATED_AT, SortDirection.DESC),
    "oldest": SortSpec(CarField.CREATED_AT, SortDirection.ASC),
    "priceAsc": SortSpec(CarField.PRICE_MIN, SortDirection.ASC),
    "priceDesc": SortSpec(CarField.PRICE_MAX, SortDirection.DESC),
    "powerAsc": SortSpec(CarField.POWER_BHP, SortDirection.ASC),
    "powerDesc": SortSpec(CarField.POWER_BHP, SortDirection.DESC),
    "yearAsc": SortSpec(CarField.LAUNCH_YEAR, SortDirection.ASC),
    "yearDesc": SortSpec(CarField.LAUNCH_YEAR, SortDirection.DESC),
    "mileageAsc": SortSpec(CarField.MILEAGE, SortDirection.ASC),
    "mileageDesc": SortSpec(CarField.MILEAGE, SortDirection.DESC),
}


@dataclass(frozen=True)
class PageRequest:
    """Normalized page request."""

    page: int
    limit: int
    sort: SortSpec

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _to_int(raw: Any) -> Optional[int]:
    """Lenient numeric coercion; None for absent or non-numeric input."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def _clamp(value: int, lower: int, upper: int) -> int:
    return min(max(value, lower), upper)


def resolve_sort(sort: Optional[str]) -> SortSpec:
    """Look up a sort token, falling back to newest first."""
    return SORT_OPTIONS.get(sort or DEFAULT_SORT, SORT_OPTIONS[DEFAULT_SORT])


def resolve_page_request(
    page: Any = None, limit: Any = None, sort: Optional[str] = None
) -> PageRequest:
    """
    Normalize raw page, limit and sort parameters.

    Args:
        page: Requested page (1-based); non-numeric or < 1 becomes 1
        limit: Requested page size; non-numeric becomes 12, then clamped to [1, 50]
        sort: Sort token; unknown tokens become "newest"

    Returns:
        PageRequest with bounded values
    """
    page_number = _to_int(page)
    page_number = DEFAULT_PAGE if page_number is None else max(page_number, 1)

    page_size = _to_int(limit)
    if page_size is None:
        page_size = DEFAULT_LIMIT

    return PageRequest(
        page=page_number,
        limit=_clamp(page_size, 1, MAX_LIMIT),
        sort=resolve_sort(sort),
    )


def clamp_featured_limit(limit: Any = None) -> int:
    """Featured listing size: default 6, clamped to [1, 12]."""
    size = _to_int(limit)
    if not size:
        size = DEFAULT_FEATURED_LIMIT
    return _clamp(size, 1, MAX_FEATURED_LIMIT)
