"""Featured cars for the home page."""

from __future__ import annotations

from dataclasses import dataclass

from car_dealership.domain.car import MAX_LIMIT, Car
from car_dealership.domain.errors import ValidationError
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action

DEFAULT_FEATURED_LIMIT = 3


@dataclass(frozen=True, slots=True)
class ListFeaturedCarsRequest:
    limit: int = DEFAULT_FEATURED_LIMIT


class ListFeaturedCars:
    """
    AVAILABLE cars flagged as featured, newest first.

    The limit must be between 1 and MAX_LIMIT; anything else is reported
    before the store is queried.
    """

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self, request: ListFeaturedCarsRequest) -> ActionResponse[list[Car]]:
        return run_action(lambda: self._list(request), name="list_featured_cars")

    def _list(self, request: ListFeaturedCarsRequest) -> list[Car]:
        if not 1 <= request.limit <= MAX_LIMIT:
            raise ValidationError(
                "Invalid featured cars limit",
                errors=[
                    {
                        "field": "limit",
                        "message": f"limit must be between 1 and {MAX_LIMIT}",
                        "code": "INVALID_LIMIT",
                    }
                ],
            )
        return self._repository.list_featured(request.limit)
