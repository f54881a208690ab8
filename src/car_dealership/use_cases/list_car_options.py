"""Make and colour listings for form comboboxes."""

from __future__ import annotations

from car_dealership.domain.car import CarColor, CarMake
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action


class ListCarMakes:
    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self) -> ActionResponse[list[CarMake]]:
        return run_action(self._repository.list_makes, name="list_car_makes")


class ListCarColors:
    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self) -> ActionResponse[list[CarColor]]:
        return run_action(self._repository.list_colors, name="list_car_colors")
