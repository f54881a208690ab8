from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from car_dealership.domain.car import (
    Car,
    CarColor,
    CarFilters,
    CarFiltersData,
    CarMake,
    Paging,
)
from car_dealership.domain.enums import CarStatus


@dataclass(frozen=True)
class SearchResult:
    """Result from catalog search including pagination metadata."""

    cars: list[Car]
    total_count: int  # Total matching cars before paging
    paging: Paging  # Paging actually applied (page clamped to the last page)


class CarCatalogRepository(ABC):
    """
    Port for catalog data access.

    Contract (Preconditions):
        - filters must be pre-validated by caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate

    Contract (Postconditions):
        - search(), get_filter_options() and list_featured() only consider
          AVAILABLE cars
        - search() orders results deterministically, ``id`` breaks ties
        - Store failures surface as StoreError, never as driver exceptions
    """

    @abstractmethod
    def search(self, filters: CarFilters) -> SearchResult:
        """
        Search available cars with filters, sorting and paging.

        Precondition: filters must be validated by caller (UseCase).

        Args:
            filters: Filter criteria (AND semantics), sort order and paging

        Returns:
            SearchResult with the requested page and the total match count.
            A page past the end is clamped to the last page.
        """
        ...

    @abstractmethod
    def get_filter_options(self) -> CarFiltersData:
        """Compute the filter options snapshot over AVAILABLE cars."""
        ...

    @abstractmethod
    def get_by_id(self, car_id: str) -> Car | None:
        """Get a car by ID regardless of status, None when absent."""
        ...

    @abstractmethod
    def list_featured(self, limit: int) -> list[Car]:
        """
        AVAILABLE cars flagged as featured, newest first (``id`` breaks ties).

        Precondition: 1 <= limit <= MAX_LIMIT, checked by caller.
        """
        ...

    @abstractmethod
    def list_makes(self) -> list[CarMake]:
        """All car makes sorted by name."""
        ...

    @abstractmethod
    def list_colors(self) -> list[CarColor]:
        """All car colours sorted by name."""
        ...

    @abstractmethod
    def update_status(self, car_id: str, status: CarStatus) -> Car:
        """
        Persist a new status for an existing car.

        Precondition: the car exists and the transition was checked by caller.
        """
        ...
