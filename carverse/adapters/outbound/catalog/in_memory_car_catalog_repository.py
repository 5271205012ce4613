"""In-memory document store car catalog repository adapter."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from carverse.application.dtos.car import Car, CarDraft
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.domain.query.predicates import (
    TEXT_SEARCH_FIELDS,
    And,
    CarField,
    Eq,
    In,
    Or,
    Predicate,
    Range,
    Regex,
    SortDirection,
    SortSpec,
    TextSearch,
)
from carverse.domain.value_objects.car_id import new_car_id

_WORD = re.compile(r"\w+")


def _to_document(car: Car) -> dict[str, Any]:
    return car.model_dump(by_alias=True)


def _resolve(document: dict[str, Any], field: CarField) -> Any:
    """Walk a dotted field path; None when any segment is missing."""
    value: Any = document
    for part in field.value.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _words(text: str) -> set[str]:
    return {word.lower() for word in _WORD.findall(text)}


class InMemoryCarCatalogRepository(CarCatalogRepository):
    """
    In-memory implementation of car catalog repository.

    - Stores cars as camelCase documents in insertion order
    - A missing field never satisfies Eq, Range, In or Regex
    - Array fields match Eq/In when any element matches
    - Sorting is stable; missing values sort first ascending and last descending
    """

    def __init__(self, cars: Optional[list[Car]] = None, ready: bool = True) -> None:
        """
        Initialize in-memory repository.

        Args:
            cars: Initial cars (kept in the given order)
            ready: Value reported by is_ready()
        """
        self._documents: list[dict[str, Any]] = [_to_document(car) for car in cars or []]
        self._ready = ready

    def _matches(self, document: dict[str, Any], predicate: Predicate) -> bool:
        if isinstance(predicate, And):
            return all(self._matches(document, child) for child in predicate.children)
        if isinstance(predicate, Or):
            return any(self._matches(document, child) for child in predicate.children)
        if isinstance(predicate, TextSearch):
            return self._matches_text(document, predicate.query)

        value = _resolve(document, predicate.field)
        if value is None:
            return False

        if isinstance(predicate, Eq):
            if isinstance(value, list):
                return predicate.value in value
            return value == predicate.value
        if isinstance(predicate, Range):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
            if predicate.gte is not None and value < predicate.gte:
                return False
            if predicate.lte is not None and value > predicate.lte:
                return False
            return True
        if isinstance(predicate, In):
            candidates = value if isinstance(value, list) else [value]
            return any(candidate in predicate.values for candidate in candidates)
        if isinstance(predicate, Regex):
            flags = re.IGNORECASE if predicate.case_insensitive else 0
            return isinstance(value, str) and re.search(predicate.pattern, value, flags) is not None

        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _matches_text(self, document: dict[str, Any], query: str) -> bool:
        """Any query term equals any word of the text-indexed fields."""
        terms = _words(query)
        if not terms:
            return False
        indexed: set[str] = set()
        for field in TEXT_SEARCH_FIELDS:
            value = _resolve(document, field)
            for text in value if isinstance(value, list) else [value]:
                if isinstance(text, str):
                    indexed |= _words(text)
        return bool(terms & indexed)

    def _sorted(
        self, documents: list[dict[str, Any]], sort: Optional[SortSpec]
    ) -> list[dict[str, Any]]:
        if sort is None:
            return documents
        present = [doc for doc in documents if _resolve(doc, sort.field) is not None]
        missing = [doc for doc in documents if _resolve(doc, sort.field) is None]
        descending = sort.direction is SortDirection.DESC
        present.sort(key=lambda doc: _resolve(doc, sort.field), reverse=descending)
        return present + missing if descending else missing + present

    async def find(
        self,
        predicate: Predicate,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[Car], int]:
        """
        Find cars matching a predicate.

        Args:
            predicate: Filter predicate
            sort: Single-key sort order (insertion order when None)
            skip: Number of matching cars to skip
            limit: Maximum number of cars to return

        Returns:
            Tuple of (page of cars, total matching count before paging)
        """
        matches = [doc for doc in self._documents if self._matches(doc, predicate)]
        total = len(matches)  # Count BEFORE paging

        ordered = self._sorted(matches, sort)
        end = skip + limit if limit is not None else None
        return [Car.model_validate(doc) for doc in ordered[skip:end]], total

    async def count(self, predicate: Predicate) -> int:
        """Count cars matching a predicate."""
        return sum(1 for doc in self._documents if self._matches(doc, predicate))

    async def distinct(self, field: CarField) -> list[Any]:
        """Distinct non-null values of a field; array fields are flattened."""
        seen: list[Any] = []
        for doc in self._documents:
            value = _resolve(doc, field)
            for item in value if isinstance(value, list) else [value]:
                if item is not None and item not in seen:
                    seen.append(item)
        return seen

    async def find_by_id(self, car_id: str) -> Optional[Car]:
        """Get a car by identifier."""
        for doc in self._documents:
            if doc["id"] == car_id:
                return Car.model_validate(doc)
        return None

    async def find_by_ids(self, car_ids: list[str]) -> list[Car]:
        """Get cars by identifiers (insertion order, not request order)."""
        wanted = set(car_ids)
        return [Car.model_validate(doc) for doc in self._documents if doc["id"] in wanted]

    async def insert_many(self, drafts: list[CarDraft]) -> list[Car]:
        """
        Bulk insert cars.

        Args:
            drafts: Cars to insert

        Returns:
            Inserted cars with identity and timestamps
        """
        now = datetime.now(timezone.utc)
        inserted = [
            Car(**draft.model_dump(), id=new_car_id(), created_at=now, updated_at=now)
            for draft in drafts
        ]
        self._documents.extend(_to_document(car) for car in inserted)
        return inserted

    async def is_ready(self) -> bool:
        """In-memory store is ready unless configured otherwise."""
        return self._ready
