from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from car_dealership.entrypoints.http.dependencies import (
    get_car_by_id_use_case,
    get_car_filter_options_use_case,
    get_list_featured_cars_use_case,
    get_search_cars_use_case,
    get_update_car_status_use_case,
)
from car_dealership.entrypoints.http.dtos.catalog_search import (
    CarFiltersDataDTO,
    CarListingDTO,
    CarResponseDTO,
    CarStatusUpdateDTO,
    FeaturedCarsQueryDTO,
)
from car_dealership.entrypoints.http.error_responses import FailureResponse, SuccessResponse
from car_dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_dealership.entrypoints.http.mappers.envelope_mapper import to_json_response
from car_dealership.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from car_dealership.use_cases.get_car_filter_options import GetCarFilterOptions
from car_dealership.use_cases.list_featured_cars import (
    ListFeaturedCars,
    ListFeaturedCarsRequest,
)
from car_dealership.use_cases.search_cars import SearchCars, SearchCarsRequest
from car_dealership.use_cases.update_car_status import UpdateCarStatus, UpdateCarStatusRequest


router = APIRouter(tags=["Cars"])

_STORE_UNAVAILABLE = {"model": FailureResponse, "description": "Catalog store unavailable"}


@router.get(
    "/cars",
    response_model=SuccessResponse[CarListingDTO],
    summary="Search available cars",
    description="""
    Search available cars with optional filters, sorting and pagination.

    ## Filters
    - All filters use AND semantics
    - search: case-insensitive substring over model, description, body type,
      number plate, make and colour
    - make/color: slugs from `GET /v1/cars/filters`
    - bodyType/fuelType/transmission: case-insensitive exact match
    - minPrice/maxPrice, minMileage/maxMileage, minAge/maxAge: inclusive ranges

    ## Sorting
    - sortBy: `newest` (default), `priceAsc`, `priceDesc`

    ## Pagination
    - Default limit: 6, max limit: 100 (out-of-range values are clamped)
    - Pages past the last one return the last page

    ## Example
    ```
    GET /v1/cars?make=toyota&maxPrice=30000&sortBy=priceAsc&page=2&limit=10
    ```
    """,
    responses={
        422: {"model": FailureResponse, "description": "Invalid search parameters"},
        503: _STORE_UNAVAILABLE,
    },
)
def search_cars(
    request: Request,
    use_case: SearchCars = Depends(get_search_cars_use_case),
) -> JSONResponse:
    """Search cars endpoint following parse → execute → map → return pattern."""
    # Raw values; the use case owns parsing so every bad field is reported
    params = dict(request.query_params)

    result = use_case.execute(SearchCarsRequest(params=params))

    return to_json_response(result, CatalogSearchMapper.to_listing_response)


@router.get(
    "/cars/filters",
    response_model=SuccessResponse[CarFiltersDataDTO],
    summary="Get search filter options",
    description="""
    Makes, colours, body types, fuel types, transmissions and the price,
    mileage and age ranges of the cars currently available.

    Prices are decimal strings. With no available cars every list is empty
    and every range is `{min: 0, max: 0}`.
    """,
    responses={503: _STORE_UNAVAILABLE},
)
def get_car_filter_options(
    use_case: GetCarFilterOptions = Depends(get_car_filter_options_use_case),
) -> JSONResponse:
    result = use_case.execute()
    return to_json_response(result, CatalogSearchMapper.to_filters_data_response)


@router.get(
    "/cars/featured",
    response_model=SuccessResponse[list[CarResponseDTO]],
    summary="List featured cars",
    description="""
    Available cars flagged as featured, newest first.

    ## Query Parameters
    - limit: maximum number of cars (default 3, max 100)
    """,
    responses={
        422: {"model": FailureResponse, "description": "Invalid limit"},
        503: _STORE_UNAVAILABLE,
    },
)
def list_featured_cars(
    query: FeaturedCarsQueryDTO = Depends(),
    use_case: ListFeaturedCars = Depends(get_list_featured_cars_use_case),
) -> JSONResponse:
    result = use_case.execute(ListFeaturedCarsRequest(limit=query.limit))
    return to_json_response(result, CatalogSearchMapper.to_cars_response)

@router.get(
    "/cars/{car_id}",
    response_model=SuccessResponse[CarResponseDTO],
    summary="Get car by ID",
    description="""
    Retrieve a single car by its unique identifier, whatever its status.

    ## Path Parameters
    - car_id: UUID of the car
    """,
    responses={
        404: {"model": FailureResponse, "description": "Car not found"},
        422: {"model": FailureResponse, "description": "Invalid car ID format"},
        503: _STORE_UNAVAILABLE,
    },
)
def get_car_by_id(
    car_id: str,
    use_case: GetCarById = Depends(get_car_by_id_use_case),
) -> JSONResponse:
    result = use_case.execute(GetCarByIdRequest(car_id=car_id))
    return to_json_response(result, CatalogSearchMapper.to_car_response)


@router.patch(
    "/cars/{car_id}/status",
    response_model=SuccessResponse[CarResponseDTO],
    summary="Change a car's status",
    description="""
    Move a listing between AVAILABLE, UNAVAILABLE and SOLD.

    AVAILABLE and UNAVAILABLE switch freely; AVAILABLE → SOLD is final.
    Disallowed transitions answer 409.
    """,
    responses={
        404: {"model": FailureResponse, "description": "Car not found"},
        409: {"model": FailureResponse, "description": "Transition not allowed"},
        422: {"model": FailureResponse, "description": "Invalid car ID or status"},
        503: _STORE_UNAVAILABLE,
    },
)
def update_car_status(
    car_id: str,
    payload: CarStatusUpdateDTO = Body(...),
    use_case: UpdateCarStatus = Depends(get_update_car_status_use_case),
) -> JSONResponse:
    result = use_case.execute(UpdateCarStatusRequest(car_id=car_id, status=payload.status))
    return to_json_response(result, CatalogSearchMapper.to_car_response)
