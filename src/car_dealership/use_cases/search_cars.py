from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from car_dealership.domain.car import Car, PaginationInfo
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action
from car_dealership.use_cases.normalize_car_filters import FilterNormalizer


@dataclass(frozen=True, slots=True)
class SearchCarsRequest:
    params: Mapping[str, Any] = field(default_factory=dict)  # Raw query-string values


@dataclass(frozen=True, slots=True)
class CarListing:
    items: list[Car]
    pagination: PaginationInfo


class SearchCars:
    """
    Car search with filters, sorting and pagination.

    This use case normalizes the raw parameters and delegates filtering
    to the repository adapter. No filtering logic exists in the use case.
    Invalid parameters are reported before any search query runs.
    """

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self, request: SearchCarsRequest) -> ActionResponse[CarListing]:
        """
        Execute catalog search.

        Args:
            request: Raw search parameters keyed by wire name

        Returns:
            Success with the page of cars and pagination metadata, or
            Failure listing every invalid parameter
        """
        return run_action(lambda: self._search(request), name="search_cars")

    def _search(self, request: SearchCarsRequest) -> CarListing:
        filters = FilterNormalizer(self._repository.get_filter_options).parse(request.params)

        result = self._repository.search(filters)

        return CarListing(
            items=result.cars,
            pagination=PaginationInfo.from_total(result.total_count, result.paging),
        )
