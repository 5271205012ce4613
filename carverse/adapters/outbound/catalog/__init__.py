"""Car catalog outbound adapters."""

from carverse.adapters.outbound.catalog.in_memory_car_catalog_repository import (
    InMemoryCarCatalogRepository,
)
from carverse.adapters.outbound.catalog.json_seed_dataset import JsonSeedDataset
from carverse.adapters.outbound.catalog.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)

__all__ = [
    "InMemoryCarCatalogRepository",
    "JsonSeedDataset",
    "PostgresCarCatalogRepository",
]
