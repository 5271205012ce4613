"""Unit tests for in-memory car catalog repository."""

import pytest

from carverse.adapters.outbound.catalog.in_memory_car_catalog_repository import (
    InMemoryCarCatalogRepository,
)
from carverse.domain.query.predicates import (
    MATCH_ALL,
    And,
    CarField,
    Eq,
    Or,
    Range,
    SortDirection,
    SortSpec,
    TextSearch,
)


@pytest.mark.asyncio
async def test_missing_field_never_satisfies_range(make_car):
    """Test a car without powerBHP is excluded by a power range."""
    repository = InMemoryCarCatalogRepository(
        [make_car(title="Known", power_bhp=150), make_car(title="Unknown")]
    )

    found, total = await repository.find(Range(CarField.POWER_BHP, gte=0))

    assert total == 1
    assert found[0].title == "Known"


@pytest.mark.asyncio
async def test_sort_places_missing_first_ascending_and_last_descending(make_car):
    """Test null ordering for both directions."""
    repository = InMemoryCarCatalogRepository(
        [
            make_car(title="Mid", mileage=18),
            make_car(title="None"),
            make_car(title="High", mileage=25),
        ]
    )

    ascending, _ = await repository.find(
        MATCH_ALL, sort=SortSpec(CarField.MILEAGE, SortDirection.ASC)
    )
    descending, _ = await repository.find(
        MATCH_ALL, sort=SortSpec(CarField.MILEAGE, SortDirection.DESC)
    )

    assert [car.title for car in ascending] == ["None", "Mid", "High"]
    assert [car.title for car in descending] == ["High", "Mid", "None"]


@pytest.mark.asyncio
async def test_sort_is_stable_for_ties(make_car):
    """Test equal sort keys keep insertion order."""
    repository = InMemoryCarCatalogRepository(
        [make_car(title=f"Car {index}", launch_year=2024) for index in range(5)]
    )

    found, _ = await repository.find(
        MATCH_ALL, sort=SortSpec(CarField.LAUNCH_YEAR, SortDirection.DESC)
    )

    assert [car.title for car in found] == [f"Car {index}" for index in range(5)]


@pytest.mark.asyncio
async def test_text_search_matches_words_in_text_fields_and_tags(make_car):
    """Test any query word matching title, brand, model or a tag is a hit."""
    repository = InMemoryCarCatalogRepository(
        [
            make_car(title="Tata Nexon EV", brand="Tata", model="Nexon EV"),
            make_car(title="Mahindra Thar", brand="Mahindra", model="Thar", tags=["offroad"]),
            make_car(title="Honda City", brand="Honda", model="City"),
        ]
    )

    found, _ = await repository.find(TextSearch("nexon OFFROAD"))
    partial, _ = await repository.find(TextSearch("nex"))

    assert {car.model for car in found} == {"Nexon EV", "Thar"}
    assert partial == []


@pytest.mark.asyncio
async def test_and_or_composition(make_car):
    """Test nested AND / OR evaluation."""
    repository = InMemoryCarCatalogRepository(
        [
            make_car(title="A", body_type="SUV", fuel_type="Diesel"),
            make_car(title="B", body_type="Sedan", fuel_type="Petrol"),
            make_car(title="C", body_type="SUV", fuel_type="Petrol"),
        ]
    )

    predicate = And(
        (
            Eq(CarField.BODY_TYPE, "SUV"),
            Or((Eq(CarField.FUEL_TYPE, "Diesel"), Eq(CarField.TITLE, "B"))),
        )
    )
    found, _ = await repository.find(predicate)

    assert [car.title for car in found] == ["A"]
    assert await repository.count(Or(())) == 0


@pytest.mark.asyncio
async def test_distinct_flattens_arrays(make_car):
    """Test distinct over tags yields each tag once."""
    repository = InMemoryCarCatalogRepository(
        [make_car(tags=["family", "suv"]), make_car(tags=["suv", "city"])]
    )

    assert sorted(await repository.distinct(CarField.TAGS)) == ["city", "family", "suv"]


@pytest.mark.asyncio
async def test_insert_many_assigns_identity(make_draft):
    """Test inserted cars get ids and timestamps."""
    repository = InMemoryCarCatalogRepository()

    inserted = await repository.insert_many([make_draft(title="One"), make_draft(title="Two")])

    assert len({car.id for car in inserted}) == 2
    assert all(car.created_at is not None for car in inserted)
    assert await repository.find_by_id(inserted[1].id) == inserted[1]
    assert await repository.count(MATCH_ALL) == 2


@pytest.mark.asyncio
async def test_find_by_ids_skips_unknown(make_car):
    """Test unknown ids are silently absent from the batch result."""
    car = make_car()
    repository = InMemoryCarCatalogRepository([car])

    found = await repository.find_by_ids([car.id, "65a1f0c2e4b0a1b2c3d4e5f6"])

    assert found == [car]


@pytest.mark.asyncio
async def test_is_ready_reflects_configuration():
    """Test readiness flag."""
    assert await InMemoryCarCatalogRepository().is_ready() is True
    assert await InMemoryCarCatalogRepository(ready=False).is_ready() is False
