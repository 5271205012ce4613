"""Predicate tree consumed by car catalog repositories.

Predicates are immutable and composable. Field references are restricted to
the closed ``CarField`` set so nothing supplied by a client ever names a
store field directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class CarField(str, Enum):
    """Record fields that predicates and sort specs may reference."""

    ID = "id"
    TITLE = "title"
    BRAND = "brand"
    MODEL = "model"
    BODY_TYPE = "bodyType"
    FUEL_TYPE = "fuelType"
    TRANSMISSION = "transmission"
    PRICE_MIN = "price.min"
    PRICE_MAX = "price.max"
    POWER_BHP = "powerBHP"
    MILEAGE = "mileage"
    LAUNCH_YEAR = "launchYear"
    DISCONTINUED = "discontinued"
    IS_FEATURED = "isFeatured"
    TAGS = "tags"
    CREATED_AT = "createdAt"


class SortDirection(int, Enum):
    ASC = 1
    DESC = -1


@dataclass(frozen=True)
class SortSpec:
    """Single-key sort order."""

    field: CarField
    direction: SortDirection


@dataclass(frozen=True)
class Eq:
    field: CarField
    value: Any


@dataclass(frozen=True)
class Range:
    """Inclusive range; a missing record value never matches."""

    field: CarField
    gte: Optional[float] = None
    lte: Optional[float] = None


@dataclass(frozen=True)
class In:
    """Matches when the field value (or any element of an array field) is in ``values``."""

    field: CarField
    values: tuple


@dataclass(frozen=True)
class Regex:
    field: CarField
    pattern: str
    case_insensitive: bool = True


@dataclass(frozen=True)
class TextSearch:
    """Full-text search over title, brand, model and tags."""

    query: str


@dataclass(frozen=True)
class And:
    children: tuple = ()


@dataclass(frozen=True)
class Or:
    children: tuple = ()


Predicate = Union[Eq, Range, In, Regex, TextSearch, And, Or]

MATCH_ALL: Predicate = And(())

TEXT_SEARCH_FIELDS = (CarField.TITLE, CarField.BRAND, CarField.MODEL, CarField.TAGS)


def conjunction(predicates: list) -> Predicate:
    """Combine predicates with AND, collapsing the trivial cases."""
    if not predicates:
        return MATCH_ALL
    if len(predicates) == 1:
        return predicates[0]
    return And(tuple(predicates))
