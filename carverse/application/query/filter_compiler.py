"""Query filter compiler.

Translates flat request query parameters into a predicate tree for the car
catalog repository. Only keys in ``FilterKey`` are read; every other
parameter is ignored. Parsing is done for all keys before any predicate is
built, so a malformed parameter never yields a partial predicate.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Optional

from carverse.application.errors import InvalidFilter
from carverse.domain.query.predicates import (
    And,
    CarField,
    Eq,
    In,
    Or,
    Predicate,
    Range,
    Regex,
    TextSearch,
    conjunction,
)


class FilterKey(str, Enum):
    """Recognized filter query parameters."""

    Q = "q"
    BRAND = "brand"
    BODY_TYPE = "bodyType"
    FUEL_TYPE = "fuelType"
    TRANSMISSION = "transmission"
    MIN_PRICE = "minPrice"
    MAX_PRICE = "maxPrice"
    MIN_POWER = "minPower"
    LAUNCH_YEAR = "launchYear"
    DISCONTINUED = "discontinued"
    TAGS = "tags"


ALL_FILTER_KEYS: tuple[FilterKey, ...] = tuple(FilterKey)

# Keys honoured by the advanced search endpoint
SEARCH_FILTER_KEYS: tuple[FilterKey, ...] = (
    FilterKey.Q,
    FilterKey.BRAND,
    FilterKey.BODY_TYPE,
    FilterKey.FUEL_TYPE,
    FilterKey.TRANSMISSION,
    FilterKey.MIN_PRICE,
    FilterKey.MAX_PRICE,
    FilterKey.MIN_POWER,
)


@dataclass(frozen=True)
class CatalogFilters:
    """Parsed and validated catalog filters; None means absent."""

    q: Optional[str] = None
    brand: Optional[str] = None
    body_type: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_power: Optional[float] = None
    launch_year: Optional[int] = None
    discontinued: Optional[bool] = None
    tags: tuple[str, ...] = ()

    def as_log_fields(self) -> dict[str, Any]:
        """Present filters only, for structured logging."""
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) not in (None, ())
        }


def _parse_text(key: str, raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _parse_number(key: str, raw: Optional[str]) -> Optional[float]:
    text = _parse_text(key, raw)
    if text is None:
        return None
    try:
        value = float(text)
    except ValueError:
        raise InvalidFilter(key, f"Invalid {key} value") from None
    if not math.isfinite(value):
        raise InvalidFilter(key, f"Invalid {key} value")
    return value


def _parse_integer(key: str, raw: Optional[str]) -> Optional[int]:
    value = _parse_number(key, raw)
    if value is None:
        return None
    if not value.is_integer():
        raise InvalidFilter(key, f"Invalid {key} value")
    return int(value)


def _parse_flag(key: str, raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    return str(raw).strip() == "true"


def _parse_tags(key: str, raw: Optional[str]) -> tuple[str, ...]:
    if raw is None:
        return ()
    return tuple(tag.strip().lower() for tag in str(raw).split(",") if tag.strip())


# (CatalogFilters attribute, parser) per recognized key
_PARSERS: dict[FilterKey, tuple[str, Callable[[str, Optional[str]], Any]]] = {
    FilterKey.Q: ("q", _parse_text),
    FilterKey.BRAND: ("brand", _parse_text),
    FilterKey.BODY_TYPE: ("body_type", _parse_text),
    FilterKey.FUEL_TYPE: ("fuel_type", _parse_text),
    FilterKey.TRANSMISSION: ("transmission", _parse_text),
    FilterKey.MIN_PRICE: ("min_price", _parse_number),
    FilterKey.MAX_PRICE: ("max_price", _parse_number),
    FilterKey.MIN_POWER: ("min_power", _parse_number),
    FilterKey.LAUNCH_YEAR: ("launch_year", _parse_integer),
    FilterKey.DISCONTINUED: ("discontinued", _parse_flag),
    FilterKey.TAGS: ("tags", _parse_tags),
}


def parse_filters(
    params: Mapping[str, Any], keys: tuple[FilterKey, ...] = ALL_FILTER_KEYS
) -> CatalogFilters:
    """
    Parse recognized query parameters into typed filters.

    Args:
        params: Raw query parameters
        keys: Recognized keys for the calling endpoint

    Returns:
        Validated catalog filters

    Raises:
        InvalidFilter: If a present parameter is malformed, or minPrice > maxPrice
    """
    values: dict[str, Any] = {}
    for key in keys:
        attribute, parser = _PARSERS[key]
        values[attribute] = parser(key.value, params.get(key.value))

    filters = CatalogFilters(**values)
    if (
        filters.min_price is not None
        and filters.max_price is not None
        and filters.min_price > filters.max_price
    ):
        raise InvalidFilter(
            FilterKey.MIN_PRICE.value, "minPrice cannot be greater than maxPrice"
        )
    return filters


def brand_predicate(brand: str) -> Predicate:
    """Case-insensitive, unanchored match of the uppercased brand text."""
    return Regex(CarField.BRAND, re.escape(brand.strip().upper()), case_insensitive=True)


def price_range_predicate(
    min_price: Optional[float], max_price: Optional[float]
) -> Optional[Predicate]:
    """
    Build the price overlap predicate.

    A car's price occupies [price.min, price.max]. With both bounds requested
    a car matches when either end lies inside the requested range or the car's
    range spans all of it. With one bound the test is one-sided.

    Args:
        min_price: Requested lower bound
        max_price: Requested upper bound

    Returns:
        Predicate, or None when neither bound is given
    """
    if min_price is not None and max_price is not None:
        return Or(
            (
                Range(CarField.PRICE_MIN, gte=min_price, lte=max_price),
                Range(CarField.PRICE_MAX, gte=min_price, lte=max_price),
                And(
                    (
                        Range(CarField.PRICE_MIN, lte=min_price),
                        Range(CarField.PRICE_MAX, gte=max_price),
                    )
                ),
            )
        )
    if min_price is not None:
        return Or(
            (
                Range(CarField.PRICE_MAX, gte=min_price),
                Range(CarField.PRICE_MIN, gte=min_price),
            )
        )
    if max_price is not None:
        return Or(
            (
                Range(CarField.PRICE_MIN, lte=max_price),
                Range(CarField.PRICE_MAX, lte=max_price),
            )
        )
    return None


def build_predicate(filters: CatalogFilters) -> Predicate:
    """
    Build the conjunction of all present filters.

    Args:
        filters: Parsed catalog filters

    Returns:
        Predicate (matches everything when no filter is present)
    """
    clauses: list[Predicate] = []

    if filters.q:
        clauses.append(TextSearch(filters.q))
    if filters.brand:
        clauses.append(brand_predicate(filters.brand))
    if filters.body_type:
        clauses.append(Eq(CarField.BODY_TYPE, filters.body_type))
    if filters.fuel_type:
        clauses.append(Eq(CarField.FUEL_TYPE, filters.fuel_type))
    if filters.transmission:
        clauses.append(Eq(CarField.TRANSMISSION, filters.transmission))

    price = price_range_predicate(filters.min_price, filters.max_price)
    if price is not None:
        clauses.append(price)

    if filters.min_power is not None:
        clauses.append(Range(CarField.POWER_BHP, gte=filters.min_power))
    if filters.launch_year is not None:
        clauses.append(Eq(CarField.LAUNCH_YEAR, filters.launch_year))
    if filters.discontinued is not None:
        clauses.append(Eq(CarField.DISCONTINUED, filters.discontinued))
    if filters.tags:
        clauses.append(In(CarField.TAGS, filters.tags))

    return conjunction(clauses)


def compile_filters(
    params: Mapping[str, Any], keys: tuple[FilterKey, ...] = ALL_FILTER_KEYS
) -> Predicate:
    """
    Compile query parameters into a predicate.

    Args:
        params: Raw query parameters
        keys: Recognized keys for the calling endpoint

    Returns:
        Predicate for the car catalog repository

    Raises:
        InvalidFilter: If a present parameter is malformed
    """
    return build_predicate(parse_filters(params, keys))
