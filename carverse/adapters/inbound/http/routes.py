"""HTTP routes."""

from typing import Any, Optional
from uuid import uuid4

from fastapi import APIRouter, Body, Depends, Request, status

from carverse.adapters.inbound.http.schemas import BrandsResponse, SeedResponse
from carverse.application.dtos.car import Car
from carverse.application.dtos.comparison import ComparisonResult
from carverse.application.dtos.listing import CarPage
from carverse.application.errors import (
    InvalidRequest,
    NotFound,
    SeedingDisabled,
    StoreUnavailable,
)
from carverse.application.ports.car_catalog_repository import CarCatalogRepository
from carverse.application.query.filter_compiler import (
    SEARCH_FILTER_KEYS,
    brand_predicate,
    build_predicate,
    parse_filters,
)
from carverse.application.query.pagination import clamp_featured_limit, resolve_page_request
from carverse.application.use_cases.compare_cars import CompareCars
from carverse.application.use_cases.get_car import GetCar, GetFeaturedCars
from carverse.application.use_cases.list_cars import ListBrands, ListCars
from carverse.application.use_cases.seed_catalog import SeedCatalog
from carverse.domain.query.predicates import MATCH_ALL, CarField, Eq
from carverse.infrastructure.config.settings import settings
from carverse.infrastructure.logging.logger import log_catalog_query, log_comparison, log_event
from carverse.infrastructure.wiring.dependencies import (
    get_car_catalog_repository,
    get_compare_cars,
    get_featured_cars,
    get_get_car,
    get_list_brands,
    get_list_cars,
    get_seed_catalog,
)


def assign_request_id(request: Request) -> str:
    """Generate a request id for log correlation."""
    request_id = str(uuid4())
    request.state.request_id = request_id
    return request_id


async def require_store_ready(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> None:
    """
    Reject catalog requests while the record store is unreachable.

    Raises:
        StoreUnavailable: If the store is not ready
    """
    if not await repository.is_ready():
        raise StoreUnavailable()


router = APIRouter(
    prefix="/api/cars",
    tags=["cars"],
    dependencies=[Depends(require_store_ready)],
)


def _page_body(page: CarPage, include_limit: bool = True, **extra: Any) -> dict[str, Any]:
    body = page.model_dump(by_alias=True, mode="json")
    if not include_limit:
        body.pop("limit")
    body.update(extra)
    return body


@router.get("", status_code=status.HTTP_200_OK)
async def list_cars(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    use_case: ListCars = Depends(get_list_cars),
    request_id: str = Depends(assign_request_id),
) -> dict[str, Any]:
    """
    Filtered, sorted, paginated catalog listing.

    Returns:
        data, page, totalPages, total and limit
    """
    filters = parse_filters(request.query_params)
    page_request = resolve_page_request(page, limit, sort)

    result = await use_case.execute(build_predicate(filters), page_request)

    log_catalog_query(request_id, filters.as_log_fields(), len(result.data), result.total)
    return _page_body(result)


@router.get("/brands", status_code=status.HTTP_200_OK, response_model=BrandsResponse)
async def list_brands(use_case: ListBrands = Depends(get_list_brands)) -> BrandsResponse:
    """List distinct brands."""
    return BrandsResponse(brands=await use_case.execute())


@router.get("/brand/{brand}", status_code=status.HTTP_200_OK)
async def list_cars_by_brand(
    brand: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    use_case: ListCars = Depends(get_list_cars),
    request_id: str = Depends(assign_request_id),
) -> dict[str, Any]:
    """
    Cars of one brand (case-insensitive partial match).

    Returns:
        data, page, totalPages, total and the uppercased brand
    """
    normalized_brand = brand.strip().upper()
    if not normalized_brand:
        raise InvalidRequest("Brand parameter is required")

    result = await use_case.execute(
        brand_predicate(normalized_brand), resolve_page_request(page, limit, sort)
    )

    log_catalog_query(request_id, {"brand": normalized_brand}, len(result.data), result.total)
    return _page_body(result, include_limit=False, brand=normalized_brand)


@router.get("/body-type/{body_type}", status_code=status.HTTP_200_OK)
async def list_cars_by_body_type(
    body_type: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    use_case: ListCars = Depends(get_list_cars),
    request_id: str = Depends(assign_request_id),
) -> dict[str, Any]:
    """
    Cars of one body type (exact match).

    Returns:
        data, page, totalPages, total and bodyType
    """
    normalized_body_type = body_type.strip()
    if not normalized_body_type:
        raise InvalidRequest("Body type parameter is required")

    result = await use_case.execute(
        Eq(CarField.BODY_TYPE, normalized_body_type), resolve_page_request(page, limit, sort)
    )

    log_catalog_query(
        request_id, {"body_type": normalized_body_type}, len(result.data), result.total
    )
    return _page_body(result, include_limit=False, bodyType=normalized_body_type)


@router.get("/search", status_code=status.HTTP_200_OK)
async def search_cars(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    use_case: ListCars = Depends(get_list_cars),
    request_id: str = Depends(assign_request_id),
) -> dict[str, Any]:
    """
    Advanced search over the text, brand, type, price and power filters.

    Returns:
        data, page, totalPages and total
    """
    filters = parse_filters(request.query_params, SEARCH_FILTER_KEYS)
    page_request = resolve_page_request(page, limit, sort)

    result = await use_case.execute(build_predicate(filters), page_request)

    log_catalog_query(
        request_id, filters.as_log_fields(), len(result.data), result.total, endpoint="search"
    )
    return _page_body(result, include_limit=False)


@router.get("/featured", status_code=status.HTTP_200_OK, response_model=list[Car])
async def featured_cars(
    limit: Optional[str] = None,
    use_case: GetFeaturedCars = Depends(get_featured_cars),
) -> list[Car]:
    """Featured, non-discontinued cars, newest first."""
    return await use_case.execute(clamp_featured_limit(limit))


@router.post("/seed", status_code=status.HTTP_200_OK, response_model=SeedResponse)
async def seed_cars(
    seed_catalog: SeedCatalog = Depends(get_seed_catalog),
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> SeedResponse:
    """
    Seed the catalog now (development only).

    Raises:
        SeedingDisabled: Outside development
    """
    if not settings.seeding_permitted:
        raise SeedingDisabled("Seeding is disabled outside development")

    result = await seed_catalog.execute()
    total_cars = await repository.count(MATCH_ALL)
    return SeedResponse(message="Seed completed", result=result, total_cars=total_cars)


@router.post("/compare", status_code=status.HTTP_200_OK, response_model=ComparisonResult)
async def compare_cars(
    payload: Any = Body(default=None),
    use_case: CompareCars = Depends(get_compare_cars),
    request_id: str = Depends(assign_request_id),
) -> ComparisonResult:
    """
    Compare 2 to 4 cars side by side.

    Body: {"ids": [...]} in display order.

    Returns:
        cars in request order and the aligned comparison rows
    """
    ids = payload.get("ids") if isinstance(payload, dict) else None

    try:
        result = await use_case.execute(ids)
    except NotFound as e:
        log_comparison(request_id, ids, missing=e.missing)
        raise

    log_comparison(request_id, ids)
    return result


@router.get("/{car_id}", status_code=status.HTTP_200_OK, response_model=Car)
async def get_car(
    car_id: str,
    use_case: GetCar = Depends(get_get_car),
    request_id: str = Depends(assign_request_id),
) -> Car:
    """
    Get a single car.

    Raises:
        InvalidRequest: Malformed id
        NotFound: No such car
    """
    car = await use_case.execute(car_id)
    log_event(request_id=request_id, component="catalog", car_id=car_id)
    return car
