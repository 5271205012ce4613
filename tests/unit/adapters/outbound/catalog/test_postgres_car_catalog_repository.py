"""Unit tests for Postgres car catalog repository using SQLite in-memory."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from carverse.adapters.outbound.catalog.models import Base
from carverse.adapters.outbound.catalog.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)
from carverse.application.errors import StoreUnavailable
from carverse.application.query.filter_compiler import compile_filters
from carverse.application.query.pagination import resolve_sort
from carverse.domain.query.predicates import MATCH_ALL, CarField, TextSearch


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def repository(sqlite_engine, monkeypatch):
    """Create Postgres repository with SQLite in-memory database for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)

    def get_test_db_session():
        return SessionLocal()

    monkeypatch.setattr(
        "carverse.adapters.outbound.catalog.postgres_car_catalog_repository.get_db_session",
        get_test_db_session,
    )

    return PostgresCarCatalogRepository()


@pytest.fixture
def drafts(make_draft):
    return [
        make_draft(
            title="Maruti Suzuki Swift",
            brand="Maruti Suzuki",
            model="Swift",
            body_type="Hatchback",
            power_bhp=80,
            price={"min": 649000, "max": 959000},
            tags=["city", "budget"],
        ),
        make_draft(
            title="Hyundai Creta",
            brand="Hyundai",
            model="Creta",
            power_bhp=114,
            safety_rating=5,
            engine={"displacement": 1493, "cylinders": 4, "turbo": True, "aspiration": "Turbo"},
            price={"min": 1100000, "max": 2015000},
            tags=["family", "suv"],
        ),
        make_draft(
            title="Lamborghini Huracan",
            brand="Lamborghini",
            model="Huracan",
            body_type="Supercar",
            price={"min": 32200000, "max": 32200000},
            specs={"colour": "Verde Mantis"},
        ),
    ]


@pytest.mark.asyncio
async def test_insert_and_get_round_trip(repository, drafts):
    """Test inserted cars read back with all fields."""
    inserted = await repository.insert_many(drafts)

    creta = await repository.find_by_id(inserted[1].id)

    assert creta is not None
    assert creta.brand == "HYUNDAI"
    assert creta.engine.turbo is True
    assert creta.engine.displacement == 1493
    assert creta.price.max == 2015000
    assert creta.tags == ["family", "suv"]
    assert creta.created_at.tzinfo is not None
    assert (await repository.find_by_id(inserted[2].id)).specs == {"colour": "Verde Mantis"}


@pytest.mark.asyncio
async def test_find_filters_counts_and_pages(repository, drafts):
    """Test filter translation, total before paging and limit."""
    await repository.insert_many(drafts)

    found, total = await repository.find(
        compile_filters({"minPrice": "500000", "maxPrice": "1500000"}),
        sort=resolve_sort("priceAsc"),
        skip=0,
        limit=1,
    )

    assert total == 2
    assert [car.model for car in found] == ["Swift"]


@pytest.mark.asyncio
async def test_missing_power_is_excluded_and_sorted_first(repository, drafts):
    """Test null handling in range filters and ascending sort."""
    await repository.insert_many(drafts)

    powered, total = await repository.find(compile_filters({"minPower": "0"}))
    ordered, _ = await repository.find(MATCH_ALL, sort=resolve_sort("powerAsc"))

    assert total == 2
    assert {car.model for car in powered} == {"Swift", "Creta"}
    assert ordered[0].model == "Huracan"


@pytest.mark.asyncio
async def test_brand_regex_and_tags(repository, drafts):
    """Test case-insensitive brand match and any-tag match."""
    await repository.insert_many(drafts)

    by_brand, _ = await repository.find(compile_filters({"brand": "suzuki"}))
    by_tags, _ = await repository.find(compile_filters({"tags": "suv,budget"}))

    assert [car.model for car in by_brand] == ["Swift"]
    assert {car.model for car in by_tags} == {"Swift", "Creta"}


@pytest.mark.asyncio
async def test_text_search_fallback_matches_whole_words(repository, drafts):
    """Test text search matches whole words in text fields or tags."""
    await repository.insert_many(drafts)

    found, _ = await repository.find(TextSearch("huracan family"))
    partial, _ = await repository.find(TextSearch("hura"))

    assert {car.model for car in found} == {"Huracan", "Creta"}
    assert partial == []


@pytest.mark.asyncio
async def test_distinct_and_count(repository, drafts):
    """Test distinct brands and total count."""
    await repository.insert_many(drafts)

    assert sorted(await repository.distinct(CarField.BRAND)) == [
        "HYUNDAI",
        "LAMBORGHINI",
        "MARUTI SUZUKI",
    ]
    assert sorted(await repository.distinct(CarField.TAGS)) == ["budget", "city", "family", "suv"]
    assert await repository.count(MATCH_ALL) == 3


@pytest.mark.asyncio
async def test_find_by_ids_batch(repository, drafts):
    """Test batch lookup returns only existing cars."""
    inserted = await repository.insert_many(drafts)

    found = await repository.find_by_ids([inserted[2].id, "65a1f0c2e4b0a1b2c3d4e5f6"])

    assert [car.id for car in found] == [inserted[2].id]
    assert await repository.find_by_ids([]) == []


@pytest.mark.asyncio
async def test_is_ready(repository):
    """Test readiness probe against a live engine."""
    assert await repository.is_ready() is True


@pytest.mark.asyncio
async def test_is_ready_false_without_database_url(monkeypatch):
    """Test readiness is false when no database is configured."""

    def _no_database():
        raise ValueError("DATABASE_URL is required for database operations")

    monkeypatch.setattr(
        "carverse.adapters.outbound.catalog.postgres_car_catalog_repository.get_db_session",
        _no_database,
    )

    assert await PostgresCarCatalogRepository().is_ready() is False


@pytest.mark.asyncio
async def test_connection_errors_map_to_store_unavailable(monkeypatch):
    """Test operational errors surface as StoreUnavailable."""

    class _BrokenSession:
        def get_bind(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        def close(self):
            pass

    monkeypatch.setattr(
        "carverse.adapters.outbound.catalog.postgres_car_catalog_repository.get_db_session",
        lambda: _BrokenSession(),
    )

    with pytest.raises(StoreUnavailable):
        await PostgresCarCatalogRepository().count(MATCH_ALL)
