from __future__ import annotations

from dataclasses import dataclass

from car_dealership.domain.car import Car
from car_dealership.domain.enums import CarStatus
from car_dealership.domain.errors import ConflictError, NotFoundError, ValidationError
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action
from car_dealership.use_cases.get_car_by_id import ensure_car_id


@dataclass(frozen=True, slots=True)
class UpdateCarStatusRequest:
    car_id: str
    status: str  # Wire value, e.g. "SOLD"


class UpdateCarStatus:
    """
    Move a listing through its lifecycle.

    AVAILABLE <-> UNAVAILABLE is reversible, AVAILABLE -> SOLD is final.
    Setting the current status again is a no-op.
    """

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._repository = car_catalog_repository

    def execute(self, request: UpdateCarStatusRequest) -> ActionResponse[Car]:
        return run_action(lambda: self._update(request), name="update_car_status")

    def _update(self, request: UpdateCarStatusRequest) -> Car:
        ensure_car_id(request.car_id)
        target = self._parse_status(request.status)

        car = self._repository.get_by_id(request.car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        if car.status is target:
            return car
        if not car.status.can_transition_to(target):
            raise ConflictError(
                f"Cannot change status from {car.status.value} to {target.value}",
                car_id=car.id,
            )

        return self._repository.update_status(car.id, target)

    @staticmethod
    def _parse_status(value: str) -> CarStatus:
        try:
            return CarStatus(value)
        except ValueError:
            allowed = ", ".join(status.value for status in CarStatus)
            raise ValidationError(
                f"status must be one of: {allowed}",
                errors=[
                    {
                        "field": "status",
                        "message": f"status must be one of: {allowed}",
                        "code": "INVALID_STATUS",
                    }
                ],
            ) from None
