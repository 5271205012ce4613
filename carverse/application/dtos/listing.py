"""Catalog listing DTOs."""

from typing import Optional

from carverse.application.dtos.base import DTO
from carverse.application.dtos.car import Car


class CarPage(DTO):
    """One page of a filtered, sorted car listing."""

    data: list[Car]
    page: int
    total_pages: int
    total: int
    limit: int


class SeedResult(DTO):
    """Outcome of a seed run."""

    status: str  # inserted, skipped or unavailable
    inserted: int = 0
    count: Optional[int] = None
