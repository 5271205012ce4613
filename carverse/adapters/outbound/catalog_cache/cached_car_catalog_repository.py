"""Cached car catalog repository with cache-aside pattern."""

from typing import Any, Optional

from carverse.application.dtos.car import Car, CarDraft
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.domain.query.predicates import CarField, Predicate, SortSpec
from carverse.infrastructure.logging.logger import log_event

from .redis_car_catalog_cache import RedisCarCatalogCache


class CachedCarCatalogRepository(CarCatalogRepository):
    """
    Car catalog repository with Redis cache (cache-aside pattern).

    Only brand lists and single-car lookups are cached. Filtered listings,
    counts and readiness always go to the primary store.
    """

    def __init__(
        self,
        primary_repository: CarCatalogRepository,
        cache: RedisCarCatalogCache,
    ) -> None:
        """
        Initialize cached repository.

        Args:
            primary_repository: Primary repository - source of truth
            cache: Redis cache for catalog reads
        """
        self._primary = primary_repository
        self._cache = cache

    async def find(
        self,
        predicate: Predicate,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[Car], int]:
        return await self._primary.find(predicate, sort=sort, skip=skip, limit=limit)

    async def count(self, predicate: Predicate) -> int:
        return await self._primary.count(predicate)

    async def distinct(self, field: CarField) -> list[Any]:
        """
        Distinct values of a field, cached for brands.

        Args:
            field: Field to collect

        Returns:
            Distinct values
        """
        if field is not CarField.BRAND:
            return await self._primary.distinct(field)

        cached_brands = await self._cache.get_brands()
        log_event(
            request_id="cache",
            component="catalog_cache",
            cache_key="brands",
            cache_hit=cached_brands is not None,
        )
        if cached_brands is not None:
            return cached_brands

        brands = await self._primary.distinct(field)
        await self._cache.set_brands(brands)
        return brands

    async def find_by_id(self, car_id: str) -> Optional[Car]:
        """
        Get a car (cache-aside pattern).

        Args:
            car_id: Car identifier

        Returns:
            Car, or None if not found
        """
        cached_car = await self._cache.get_car(car_id)
        log_event(
            request_id="cache",
            component="catalog_cache",
            cache_key="car",
            car_id=car_id,
            cache_hit=cached_car is not None,
        )
        if cached_car is not None:
            return cached_car

        car = await self._primary.find_by_id(car_id)
        if car is not None:
            await self._cache.set_car(car)
        return car

    async def find_by_ids(self, car_ids: list[str]) -> list[Car]:
        return await self._primary.find_by_ids(car_ids)

    async def insert_many(self, drafts: list[CarDraft]) -> list[Car]:
        """
        Insert cars, then drop the cached brand list.

        Args:
            drafts: Cars to insert

        Returns:
            Inserted cars
        """
        cars = await self._primary.insert_many(drafts)
        await self._cache.invalidate_brands()
        return cars

    async def is_ready(self) -> bool:
        return await self._primary.is_ready()
