"""Redis cache-aside layer for the car catalog."""

from carverse.adapters.outbound.catalog_cache.cached_car_catalog_repository import (
    CachedCarCatalogRepository,
)
from carverse.adapters.outbound.catalog_cache.redis_car_catalog_cache import (
    RedisCarCatalogCache,
)

__all__ = [
    "CachedCarCatalogRepository",
    "RedisCarCatalogCache",
]
