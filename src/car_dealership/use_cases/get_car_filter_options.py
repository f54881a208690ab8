from __future__ import annotations

from car_dealership.domain.car import CarFiltersData
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action


class GetCarFilterOptions:
    """
    Filter options for the search page (makes, colours, categories, ranges).

    Recomputed on every call from AVAILABLE inventory; nothing is cached,
    so the options always agree with what a search would return.
    """

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self) -> ActionResponse[CarFiltersData]:
        return run_action(self._repository.get_filter_options, name="get_car_filter_options")
