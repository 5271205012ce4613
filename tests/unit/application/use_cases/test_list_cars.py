"""Unit tests for catalog listing, single car and featured use cases."""

from unittest.mock import AsyncMock

import pytest

from carverse.adapters.outbound.catalog.in_memory_car_catalog_repository import (
    InMemoryCarCatalogRepository,
)
from carverse.application.errors import InvalidRequest, NotFound
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.query.filter_compiler import compile_filters
from carverse.application.query.pagination import resolve_page_request
from carverse.application.use_cases.get_car import GetCar, GetFeaturedCars
from carverse.application.use_cases.list_cars import ListBrands, ListCars
from carverse.domain.query.predicates import MATCH_ALL


@pytest.fixture
def catalog(make_car):
    """Twenty-five SUVs and five sedans, newest first by index."""
    cars = [make_car(age=index, title=f"SUV {index}") for index in range(25)]
    cars += [
        make_car(age=100 + index, title=f"Sedan {index}", body_type="Sedan") for index in range(5)
    ]
    return cars


@pytest.mark.asyncio
async def test_list_cars_pages_and_counts_before_paging(catalog):
    """Test total counts all matches while data holds one page."""
    use_case = ListCars(InMemoryCarCatalogRepository(catalog))

    result = await use_case.execute(
        compile_filters({"bodyType": "SUV"}), resolve_page_request(page="3", limit="10")
    )

    assert result.total == 25
    assert result.total_pages == 3
    assert result.page == 3
    assert result.limit == 10
    assert [car.title for car in result.data] == [f"SUV {index}" for index in range(20, 25)]


@pytest.mark.asyncio
async def test_list_cars_page_beyond_end_is_empty(catalog):
    """Test a page past the last one returns no data but keeps the total."""
    use_case = ListCars(InMemoryCarCatalogRepository(catalog))

    result = await use_case.execute(MATCH_ALL, resolve_page_request(page="9", limit="10"))

    assert result.data == []
    assert result.total == 30


@pytest.mark.asyncio
async def test_list_cars_oldest_first(catalog):
    """Test the oldest sort reverses creation order."""
    use_case = ListCars(InMemoryCarCatalogRepository(catalog))

    result = await use_case.execute(MATCH_ALL, resolve_page_request(limit="1", sort="oldest"))

    assert result.data[0].title == "Sedan 4"


@pytest.mark.asyncio
async def test_list_brands_sorted(make_car):
    """Test brands are distinct and sorted."""
    repository = InMemoryCarCatalogRepository(
        [make_car(brand="Tata"), make_car(brand="Honda"), make_car(brand="tata")]
    )

    assert await ListBrands(repository).execute() == ["HONDA", "TATA"]


@pytest.mark.asyncio
async def test_get_car_found(make_car):
    """Test an existing car is returned."""
    car = make_car()
    result = await GetCar(InMemoryCarCatalogRepository([car])).execute(car.id)
    assert result == car


@pytest.mark.asyncio
async def test_get_car_invalid_id_skips_store():
    """Test a malformed id is rejected before the store is queried."""
    repository = AsyncMock(spec=CarCatalogRepository)

    with pytest.raises(InvalidRequest) as exc_info:
        await GetCar(repository).execute("brands")

    assert exc_info.value.message == "Invalid car ID format"
    repository.find_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_get_car_not_found():
    """Test a well-formed unknown id is a 404."""
    with pytest.raises(NotFound) as exc_info:
        await GetCar(InMemoryCarCatalogRepository()).execute("65a1f0c2e4b0a1b2c3d4e5f6")

    assert exc_info.value.to_dict() == {"message": "Car not found"}


@pytest.mark.asyncio
async def test_featured_excludes_discontinued_and_orders_newest_first(make_car):
    """Test featured cars are flagged, not discontinued, newest first."""
    repository = InMemoryCarCatalogRepository(
        [
            make_car(age=5, title="Old", is_featured=True),
            make_car(age=1, title="New", is_featured=True),
            make_car(age=0, title="Retired", is_featured=True, discontinued=True),
            make_car(age=0, title="Plain"),
        ]
    )

    featured = await GetFeaturedCars(repository, fallback_ids=[]).execute(limit=6)

    assert [car.title for car in featured] == ["New", "Old"]


@pytest.mark.asyncio
async def test_featured_falls_back_to_configured_ids(make_car):
    """Test configured ids are served when nothing is flagged featured."""
    first, second, third = make_car(title="A"), make_car(title="B"), make_car(title="C")
    repository = InMemoryCarCatalogRepository([first, second, third])

    featured = await GetFeaturedCars(
        repository, fallback_ids=[third.id, "not-an-id", first.id]
    ).execute(limit=1)

    assert len(featured) == 1
    assert featured[0].id in {first.id, third.id}


@pytest.mark.asyncio
async def test_featured_empty_without_fallback(make_car):
    """Test no featured cars and no fallback yields an empty list."""
    repository = InMemoryCarCatalogRepository([make_car()])
    assert await GetFeaturedCars(repository, fallback_ids=[]).execute(limit=6) == []


@pytest.mark.asyncio
async def test_oversized_limit_yields_fifty_per_page(make_car):
    """Test limit=1000 is served as 50 results per page."""
    repository = InMemoryCarCatalogRepository([make_car(age=index) for index in range(60)])

    result = await ListCars(repository).execute(MATCH_ALL, resolve_page_request(limit="1000"))

    assert len(result.data) == 50
    assert result.total_pages == 2
