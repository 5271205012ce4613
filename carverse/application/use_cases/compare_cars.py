"""Car comparison use case.

Aligns a fixed specification schema across 2 to 4 cars. Rows follow schema
declaration order; values follow request order.
"""

from dataclasses import dataclass
from typing import Any

from carverse.application.dtos.car import Car
from carverse.application.dtos.comparison import (
    ComparisonResult,
    ComparisonRow,
    ComparisonValue,
)
from carverse.application.errors import InvalidRequest, NotFound
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.domain.value_objects.car_id import is_valid_car_id

MIN_COMPARE_CARS = 2
MAX_COMPARE_CARS = 4

PRICE_KEY = "price"


@dataclass(frozen=True)
class SpecField:
    key: str  # camelCase path, dotted for nested fields
    label: str


COMPARISON_SCHEMA: tuple[SpecField, ...] = (
    SpecField("brand", "Brand"),
    SpecField("model", "Model"),
    SpecField("bodyType", "Body Type"),
    SpecField("fuelType", "Fuel Type"),
    SpecField("transmission", "Transmission"),
    SpecField("driveType", "Drive Type"),
    SpecField("powerBHP", "Power (BHP)"),
    SpecField("torqueNm", "Torque (Nm)"),
    SpecField("topSpeed", "Top Speed (km/h)"),
    SpecField("zeroToHundred", "0-100 km/h (s)"),
    SpecField("mileage", "Mileage (km/L)"),
    SpecField("range", "Range (km)"),
    SpecField("seatingCapacity", "Seating Capacity"),
    SpecField("safetyRating", "Safety Rating"),
    SpecField("launchYear", "Launch Year"),
    SpecField("engine.displacement", "Engine (cc)"),
    SpecField("engine.cylinders", "Cylinders"),
    SpecField("engine.turbo", "Turbo"),
    SpecField(PRICE_KEY, "Price (INR)"),
)


def _value_at(document: dict[str, Any], key: str) -> Any:
    value: Any = document
    for part in key.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _comparable(value: Any) -> tuple:
    """
    Equality key for the differs flag.

    Booleans, numbers and strings are compared within their own family, so
    0 never equals absent, False never equals 0 and 5 equals 5.0.
    """
    if value is None:
        return ("absent",)
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("number", float(value))
    return (type(value).__name__, value)


def build_comparison(cars: list[Car]) -> list[ComparisonRow]:
    """
    Build the aligned comparison matrix.

    Args:
        cars: Cars in output order

    Returns:
        One row per schema field
    """
    documents = [car.model_dump(by_alias=True, mode="json") for car in cars]

    rows = []
    for spec in COMPARISON_SCHEMA:
        values = []
        for car, document in zip(cars, documents):
            if spec.key == PRICE_KEY:
                value = car.price.to_range().display()
            else:
                value = _value_at(document, spec.key)
            values.append(ComparisonValue(car_id=car.id, value=value))

        base = _comparable(values[0].value) if values else None
        differs = any(_comparable(item.value) != base for item in values[1:])
        rows.append(ComparisonRow(key=spec.key, label=spec.label, values=values, differs=differs))
    return rows


class CompareCars:
    """Compare 2 to 4 cars side by side."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        """
        Initialize use case.

        Args:
            car_catalog_repository: Car catalog repository
        """
        self._car_catalog_repository = car_catalog_repository

    def _validate_ids(self, ids: Any) -> list[str]:
        """
        Validate the raw ids payload.

        Raises:
            InvalidRequest: If ids is absent, not a list, has the wrong length,
                or contains malformed identifiers
        """
        if ids is None:
            raise InvalidRequest('Request body must include "ids" array')
        if not isinstance(ids, list):
            raise InvalidRequest('"ids" must be an array')
        if not MIN_COMPARE_CARS <= len(ids) <= MAX_COMPARE_CARS:
            raise InvalidRequest(
                f"Provide between {MIN_COMPARE_CARS} and {MAX_COMPARE_CARS} "
                'car ids in "ids" array'
            )

        invalid_ids = [car_id for car_id in ids if not is_valid_car_id(car_id)]
        if invalid_ids:
            raise InvalidRequest("One or more ids are invalid", {"invalidIds": invalid_ids})
        return ids

    async def execute(self, ids: Any) -> ComparisonResult:
        """
        Compare cars.

        Args:
            ids: Requested car identifiers, in display order

        Returns:
            Cars in request order and the comparison matrix

        Raises:
            InvalidRequest: If the ids payload is malformed
            NotFound: If any requested car does not exist (no partial results)
        """
        car_ids = self._validate_ids(ids)

        found = await self._car_catalog_repository.find_by_ids(car_ids)
        by_id = {car.id: car for car in found}

        missing = [car_id for car_id in car_ids if car_id not in by_id]
        if missing:
            raise NotFound("Some cars were not found", missing)

        ordered = [by_id[car_id] for car_id in car_ids]
        return ComparisonResult(cars=ordered, comparison=build_comparison(ordered))
