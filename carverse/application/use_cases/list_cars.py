"""Catalog listing use cases."""

from carverse.application.dtos.listing import CarPage
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.query.pagination import PageRequest
from carverse.domain.query.predicates import CarField, Predicate


class ListCars:
    """Run a compiled predicate against the catalog and return one page."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        """
        Initialize use case.

        Args:
            car_catalog_repository: Car catalog repository
        """
        self._car_catalog_repository = car_catalog_repository

    async def execute(self, predicate: Predicate, page_request: PageRequest) -> CarPage:
        """
        List cars.

        Args:
            predicate: Compiled filter predicate
            page_request: Normalized page, limit and sort

        Returns:
            Page of cars with paging metadata
        """
        cars, total = await self._car_catalog_repository.find(
            predicate,
            sort=page_request.sort,
            skip=page_request.offset,
            limit=page_request.limit,
        )
        return CarPage(
            data=cars,
            page=page_request.page,
            total_pages=page_request.total_pages(total),
            total=total,
            limit=page_request.limit,
        )


class ListBrands:
    """Distinct brands in the catalog."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._car_catalog_repository = car_catalog_repository

    async def execute(self) -> list[str]:
        """
        List brands.

        Returns:
            Brands sorted alphabetically
        """
        brands = await self._car_catalog_repository.distinct(CarField.BRAND)
        return sorted(brands)
