"""Car catalog repository port."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from carverse.application.dtos.car import Car, CarDraft
from carverse.domain.query.predicates import CarField, Predicate, SortSpec


class CarCatalogRepository(ABC):
    """
    Port interface for the car record store.

    Contract:
        - Predicates and sort specs are built by the application layer and
          are trusted; implementations do not re-validate them.
        - Each call is consistent on its own; no cross-call transactions.
    """

    @abstractmethod
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
            sort: Single-key sort order (store order when None)
            skip: Number of matching cars to skip
            limit: Maximum number of cars to return (all when None)

        Returns:
            Tuple of (page of cars, total matching count before paging)
        """
        pass

    @abstractmethod
    async def count(self, predicate: Predicate) -> int:
        """
        Count cars matching a predicate.

        Args:
            predicate: Filter predicate

        Returns:
            Number of matching cars
        """
        pass

    @abstractmethod
    async def distinct(self, field: CarField) -> list[Any]:
        """
        Get distinct values of a field.

        Args:
            field: Field to collect

        Returns:
            Distinct non-null values (unordered)
        """
        pass

    @abstractmethod
    async def find_by_id(self, car_id: str) -> Optional[Car]:
        """
        Get a car by identifier.

        Args:
            car_id: Car identifier

        Returns:
            Car, or None if not found
        """
        pass

    @abstractmethod
    async def find_by_ids(self, car_ids: list[str]) -> list[Car]:
        """
        Get cars by identifiers in one batch.

        Args:
            car_ids: Car identifiers

        Returns:
            Cars found, in no particular order
        """
        pass

    @abstractmethod
    async def insert_many(self, drafts: list[CarDraft]) -> list[Car]:
        """
        Bulk insert cars, assigning identity and timestamps.

        Args:
            drafts: Cars to insert

        Returns:
            Inserted cars
        """
        pass

    @abstractmethod
    async def is_ready(self) -> bool:
        """
        Check whether the store connection can serve queries.

        Returns:
            True if the store is reachable
        """
        pass
