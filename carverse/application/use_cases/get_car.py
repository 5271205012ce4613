"""Single car and featured car use cases."""

from carverse.application.dtos.car import Car
from carverse.application.errors import InvalidRequest, NotFound
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.query.pagination import resolve_sort
from carverse.domain.query.predicates import And, CarField, Eq
from carverse.domain.value_objects.car_id import is_valid_car_id
from carverse.infrastructure.logging.logger import logger

FEATURED_PREDICATE = And(
    (
        Eq(CarField.IS_FEATURED, True),
        Eq(CarField.DISCONTINUED, False),
    )
)


class GetCar:
    """Fetch one car by identifier."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._car_catalog_repository = car_catalog_repository

    async def execute(self, car_id: str) -> Car:
        """
        Get a car.

        Args:
            car_id: Car identifier from the request path

        Returns:
            Car

        Raises:
            InvalidRequest: If the identifier is malformed
            NotFound: If no car has this identifier
        """
        if not is_valid_car_id(car_id):
            raise InvalidRequest("Invalid car ID format")

        car = await self._car_catalog_repository.find_by_id(car_id)
        if car is None:
            raise NotFound("Car not found")
        return car


class GetFeaturedCars:
    """Featured cars, falling back to a configured id list."""

    def __init__(
        self, car_catalog_repository: CarCatalogRepository, fallback_ids: list[str]
    ) -> None:
        """
        Initialize use case.

        Args:
            car_catalog_repository: Car catalog repository
            fallback_ids: Ids served when no car is flagged featured
        """
        self._car_catalog_repository = car_catalog_repository
        self._fallback_ids = fallback_ids

    async def execute(self, limit: int) -> list[Car]:
        """
        Get featured cars.

        Args:
            limit: Maximum number of cars (already clamped by the caller)

        Returns:
            Featured, non-discontinued cars newest first, or the fallback cars
        """
        featured, _ = await self._car_catalog_repository.find(
            FEATURED_PREDICATE, sort=resolve_sort("newest"), limit=limit
        )
        if featured or not self._fallback_ids:
            return featured

        valid_ids = [car_id for car_id in self._fallback_ids if is_valid_car_id(car_id)]
        if len(valid_ids) != len(self._fallback_ids):
            logger.warning("Ignoring malformed entries in FEATURED_IDS")
        if not valid_ids:
            return []

        cars = await self._car_catalog_repository.find_by_ids(valid_ids)
        return cars[:limit]
