"""Dependency injection factory functions and FastAPI providers."""

from functools import lru_cache

from fastapi import Depends

from carverse.adapters.outbound.catalog import (
    InMemoryCarCatalogRepository,
    JsonSeedDataset,
    PostgresCarCatalogRepository,
)
from carverse.adapters.outbound.catalog_cache import (
    CachedCarCatalogRepository,
    RedisCarCatalogCache,
)
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.ports.seed_dataset import SeedDataset
from carverse.application.seed_coordinator import SeedCoordinator
from carverse.application.use_cases.compare_cars import CompareCars
from carverse.application.use_cases.get_car import GetCar, GetFeaturedCars
from carverse.application.use_cases.list_cars import ListBrands, ListCars
from carverse.application.use_cases.seed_catalog import SeedCatalog
from carverse.infrastructure.config.settings import settings


def create_car_catalog_repository() -> CarCatalogRepository:
    """
    Factory function to create car catalog repository.

    Returns:
        CarCatalogRepository instance, wrapped with Redis cache when enabled
    """
    repository: CarCatalogRepository
    if settings.catalog_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when CATALOG_REPOSITORY=postgres")
        repository = PostgresCarCatalogRepository()
    else:
        repository = InMemoryCarCatalogRepository()

    if settings.catalog_cache_enabled and settings.redis_url:
        cache = RedisCarCatalogCache(settings.redis_url, settings.catalog_cache_ttl_seconds)
        repository = CachedCarCatalogRepository(repository, cache)
    return repository


def create_seed_dataset() -> SeedDataset:
    """
    Factory function to create seed dataset.

    Returns:
        SeedDataset reading the configured or bundled JSON file
    """
    return JsonSeedDataset(settings.seed_dataset_path or None)


# Process-wide singletons

@lru_cache
def get_car_catalog_repository() -> CarCatalogRepository:
    return create_car_catalog_repository()


@lru_cache
def get_seed_catalog() -> SeedCatalog:
    return SeedCatalog(
        get_car_catalog_repository(),
        create_seed_dataset(),
        max_retries=settings.seed_ready_max_retries,
        retry_interval_seconds=settings.seed_ready_interval_seconds,
    )


@lru_cache
def get_seed_coordinator() -> SeedCoordinator:
    return SeedCoordinator(get_seed_catalog(), settings.seeding_permitted)


# Per-request use cases

def get_list_cars(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> ListCars:
    return ListCars(repository)


def get_list_brands(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> ListBrands:
    return ListBrands(repository)


def get_get_car(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> GetCar:
    return GetCar(repository)


def get_featured_cars(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> GetFeaturedCars:
    return GetFeaturedCars(repository, settings.featured_id_list)


def get_compare_cars(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> CompareCars:
    return CompareCars(repository)
