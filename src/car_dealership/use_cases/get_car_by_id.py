"""Get car by ID use case."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from car_dealership.domain.car import Car
from car_dealership.domain.errors import NotFoundError, ValidationError
from car_dealership.domain.results import ActionResponse
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.envelope import run_action


@dataclass(frozen=True, slots=True)
class GetCarByIdRequest:
    """Request to get a car by ID."""

    car_id: str


def ensure_car_id(car_id: str) -> None:
    """
    Validate car_id format (must be a valid UUID).

    Raises:
        ValidationError: If car_id is not a valid UUID format
    """
    try:
        UUID(car_id)
    except ValueError:
        raise ValidationError(
            "Invalid car id",
            errors=[
                {
                    "field": "car_id",
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ],
        ) from None


class GetCarById:
    """
    Use case for retrieving a single car by ID.

    Responsibilities:
    - Validate car_id format (must be valid UUID)
    - Delegate to repository for data access
    - Report a NOT_FOUND failure if the car doesn't exist

    Cars are returned whatever their status, so sold listings keep working links.
    """

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        """
        Initialize use case with dependencies.

        Args:
            car_catalog_repository: Repository for car data access
        """
        self._repository = car_catalog_repository

    def execute(self, request: GetCarByIdRequest) -> ActionResponse[Car]:
        """
        Execute the get car by ID use case.

        Args:
            request: Request containing car_id

        Returns:
            Success with the car, or Failure (VALIDATION_ERROR / NOT_FOUND)
        """
        return run_action(lambda: self._get(request), name="get_car_by_id")

    def _get(self, request: GetCarByIdRequest) -> Car:
        ensure_car_id(request.car_id)

        car = self._repository.get_by_id(request.car_id)

        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        return car
