"""Unit tests for pagination and sort resolution."""

import pytest

from carverse.application.query.pagination import (
    SORT_OPTIONS,
    clamp_featured_limit,
    resolve_page_request,
    resolve_sort,
)
from carverse.domain.query.predicates import CarField, SortDirection, SortSpec


def test_defaults():
    """Test absent params resolve to page 1, limit 12, newest first."""
    request = resolve_page_request()

    assert request.page == 1
    assert request.limit == 12
    assert request.sort == SortSpec(CarField.CREATED_AT, SortDirection.DESC)
    assert request.offset == 0


@pytest.mark.parametrize(
    "limit,expected",
    [("1000", 50), ("50", 50), ("-5", 1), ("0", 1), ("abc", 12), ("7.9", 7), (None, 12)],
)
def test_limit_is_clamped(limit, expected):
    """Test limit is truncated and bounded to [1, 50]."""
    assert resolve_page_request(limit=limit).limit == expected


@pytest.mark.parametrize("page,expected", [("3", 3), ("0", 1), ("-2", 1), ("x", 1)])
def test_page_is_at_least_one(page, expected):
    """Test non-numeric or non-positive pages become 1."""
    assert resolve_page_request(page=page).page == expected


def test_offset_and_total_pages():
    """Test offset and ceil page count."""
    request = resolve_page_request(page="3", limit="10")

    assert request.offset == 20
    assert request.total_pages(0) == 0
    assert request.total_pages(21) == 3
    assert request.total_pages(30) == 3


def test_price_sorts_use_opposite_ends():
    """Test priceAsc sorts by price.min and priceDesc by price.max."""
    assert resolve_sort("priceAsc") == SortSpec(CarField.PRICE_MIN, SortDirection.ASC)
    assert resolve_sort("priceDesc") == SortSpec(CarField.PRICE_MAX, SortDirection.DESC)


def test_unknown_sort_falls_back_to_newest():
    """Test unknown tokens fall back silently."""
    assert resolve_sort("cheapest") == SORT_OPTIONS["newest"]
    assert resolve_sort(None) == SORT_OPTIONS["newest"]


def test_sort_table_is_complete():
    """Test all sort tokens are present."""
    assert set(SORT_OPTIONS) == {
        "newest",
        "oldest",
        "priceAsc",
        "priceDesc",
        "powerAsc",
        "powerDesc",
        "yearAsc",
        "yearDesc",
        "mileageAsc",
        "mileageDesc",
    }


@pytest.mark.parametrize(
    "limit,expected", [(None, 6), ("3", 3), ("100", 12), ("0", 6), ("-4", 1), ("abc", 6)]
)
def test_featured_limit(limit, expected):
    """Test featured limit defaults to 6 and is clamped to [1, 12]."""
    assert clamp_featured_limit(limit) == expected
