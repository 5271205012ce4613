"""Car comparison DTOs."""

from typing import Any

from carverse.application.dtos.base import DTO
from carverse.application.dtos.car import Car


class ComparisonValue(DTO):
    """Value of one schema field for one car (None when absent)."""

    car_id: str
    value: Any = None


class ComparisonRow(DTO):
    """One schema field aligned across the compared cars."""

    key: str
    label: str
    values: list[ComparisonValue]
    differs: bool


class ComparisonResult(DTO):
    """Cars in request order plus the aligned comparison matrix."""

    cars: list[Car]
    comparison: list[ComparisonRow]
