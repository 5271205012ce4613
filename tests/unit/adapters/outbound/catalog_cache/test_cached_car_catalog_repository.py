"""Unit tests for cached car catalog repository."""

from unittest.mock import AsyncMock

import pytest

from carverse.adapters.outbound.catalog_cache.cached_car_catalog_repository import (
    CachedCarCatalogRepository,
)
from carverse.adapters.outbound.catalog_cache.redis_car_catalog_cache import (
    RedisCarCatalogCache,
)
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.domain.query.predicates import MATCH_ALL, CarField


@pytest.fixture
def mock_primary_repository():
    """Create a mock primary repository."""
    repo = AsyncMock(spec=CarCatalogRepository)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.distinct = AsyncMock(return_value=["TATA", "HONDA"])
    repo.insert_many = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_cache():
    """Create a mock cache."""
    cache = AsyncMock(spec=RedisCarCatalogCache)
    cache.get_car = AsyncMock(return_value=None)
    cache.get_brands = AsyncMock(return_value=None)
    return cache


@pytest.fixture
def cached_repository(mock_primary_repository, mock_cache):
    """Create cached repository with mocked dependencies."""
    return CachedCarCatalogRepository(mock_primary_repository, mock_cache)


@pytest.mark.asyncio
async def test_find_by_id_cache_hit_skips_primary(
    cached_repository, mock_primary_repository, mock_cache, make_car
):
    """Test a cached car is returned without querying primary."""
    car = make_car()
    mock_cache.get_car.return_value = car

    result = await cached_repository.find_by_id(car.id)

    assert result == car
    mock_primary_repository.find_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_find_by_id_cache_miss_populates_cache(
    cached_repository, mock_primary_repository, mock_cache, make_car
):
    """Test a miss loads from primary and stores the car."""
    car = make_car()
    mock_primary_repository.find_by_id.return_value = car

    result = await cached_repository.find_by_id(car.id)

    assert result == car
    mock_primary_repository.find_by_id.assert_called_once_with(car.id)
    mock_cache.set_car.assert_called_once_with(car)


@pytest.mark.asyncio
async def test_find_by_id_not_found_is_not_cached(cached_repository, mock_cache):
    """Test an unknown car is not written to the cache."""
    assert await cached_repository.find_by_id("65a1f0c2e4b0a1b2c3d4e5f6") is None
    mock_cache.set_car.assert_not_called()


@pytest.mark.asyncio
async def test_brands_cache_aside(cached_repository, mock_primary_repository, mock_cache):
    """Test brands are cached on miss and served from cache on hit."""
    assert await cached_repository.distinct(CarField.BRAND) == ["TATA", "HONDA"]
    mock_cache.set_brands.assert_called_once_with(["TATA", "HONDA"])

    mock_cache.get_brands.return_value = ["KIA"]
    assert await cached_repository.distinct(CarField.BRAND) == ["KIA"]
    mock_primary_repository.distinct.assert_called_once()


@pytest.mark.asyncio
async def test_other_distinct_fields_bypass_cache(
    cached_repository, mock_primary_repository, mock_cache
):
    """Test only brands are cached."""
    await cached_repository.distinct(CarField.TAGS)

    mock_primary_repository.distinct.assert_called_once_with(CarField.TAGS)
    mock_cache.get_brands.assert_not_called()


@pytest.mark.asyncio
async def test_insert_many_invalidates_brands(
    cached_repository, mock_primary_repository, mock_cache, make_draft
):
    """Test inserts drop the cached brand list."""
    drafts = [make_draft()]

    await cached_repository.insert_many(drafts)

    mock_primary_repository.insert_many.assert_called_once_with(drafts)
    mock_cache.invalidate_brands.assert_called_once()


@pytest.mark.asyncio
async def test_listing_and_readiness_go_to_primary(
    cached_repository, mock_primary_repository, mock_cache
):
    """Test find, count, find_by_ids and is_ready are never cached."""
    mock_primary_repository.find.return_value = ([], 0)
    mock_primary_repository.count.return_value = 0
    mock_primary_repository.find_by_ids.return_value = []
    mock_primary_repository.is_ready.return_value = True

    assert await cached_repository.find(MATCH_ALL, limit=5) == ([], 0)
    assert await cached_repository.count(MATCH_ALL) == 0
    assert await cached_repository.find_by_ids(["65a1f0c2e4b0a1b2c3d4e5f6"]) == []
    assert await cached_repository.is_ready() is True

    mock_primary_repository.find.assert_called_once_with(MATCH_ALL, sort=None, skip=0, limit=5)
    mock_cache.get_car.assert_not_called()
