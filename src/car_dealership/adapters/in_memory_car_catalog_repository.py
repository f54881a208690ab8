from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Callable

from car_dealership.domain.car import (
    Car,
    CarColor,
    CarFilters,
    CarFiltersData,
    CarMake,
    SortBy,
)
from car_dealership.domain.enums import CarStatus
from car_dealership.domain.filter_options import aggregate_filter_options
from car_dealership.ports.car_catalog_repository import CarCatalogRepository, SearchResult


class InMemoryCarCatalogRepository(CarCatalogRepository):
    """
    Canonical contract implementation for tests.

    - Stores cars in insertion order
    - Only AVAILABLE cars are searchable
    - Applies AND-semantics filtering
    - Sorts with ``id`` as the tie-breaker
    - Applies paging AFTER filtering and counting
    """

    def __init__(
        self,
        cars: list[Car],
        makes: list[CarMake] | None = None,
        colors: list[CarColor] | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._cars = list(cars)
        self._makes = makes if makes is not None else _distinct(car.make for car in cars)
        self._colors = colors if colors is not None else _distinct(car.color for car in cars)
        self._clock = clock

    def search(self, filters: CarFilters) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        current_year = self._clock().year
        matches = [car for car in self._cars if self._matches(car, filters, current_year)]
        total_count = len(matches)  # Count BEFORE paging

        paging = filters.paging.within(total_count)
        ordered = self._sorted(matches, filters.sort_by)

        return SearchResult(
            cars=ordered[paging.offset : paging.offset + paging.limit],
            total_count=total_count,
            paging=paging,
        )

    def get_filter_options(self) -> CarFiltersData:
        return aggregate_filter_options(self._cars, self._clock().year)

    def get_by_id(self, car_id: str) -> Car | None:
        return next((car for car in self._cars if car.id == car_id), None)

    def list_featured(self, limit: int) -> list[Car]:
        featured = [
            car for car in self._cars if car.featured and car.status is CarStatus.AVAILABLE
        ]
        return self._sorted(featured, SortBy.NEWEST)[:limit]

    def list_makes(self) -> list[CarMake]:
        return sorted(self._makes, key=lambda make: make.name.casefold())

    def list_colors(self) -> list[CarColor]:
        return sorted(self._colors, key=lambda color: color.name.casefold())

    def update_status(self, car_id: str, status: CarStatus) -> Car:
        for index, car in enumerate(self._cars):
            if car.id == car_id:
                updated = replace(car, status=status)
                self._cars[index] = updated
                return updated
        raise KeyError(car_id)

    def _matches(self, car: Car, filters: CarFilters, current_year: int) -> bool:
        if car.status is not CarStatus.AVAILABLE:
            return False
        if filters.search and not self._matches_search(car, filters.search):
            return False
        if filters.make and car.make.slug != filters.make:
            return False
        if filters.color and car.color.slug != filters.color:
            return False
        if filters.body_type and car.body_type.lower() != filters.body_type.lower():
            return False
        if filters.fuel_type and car.fuel_type.lower() != filters.fuel_type.lower():
            return False
        if filters.transmission and car.transmission.lower() != filters.transmission.lower():
            return False
        if filters.min_price is not None and car.price < filters.min_price:
            return False
        if filters.max_price is not None and car.price > filters.max_price:
            return False
        if filters.min_mileage is not None and car.mileage < filters.min_mileage:
            return False
        if filters.max_mileage is not None and car.mileage > filters.max_mileage:
            return False

        min_year, max_year = filters.year_bounds(current_year)
        if min_year is not None and car.year < min_year:
            return False
        if max_year is not None and car.year > max_year:
            return False
        return True

    def _matches_search(self, car: Car, search: str) -> bool:
        needle = search.casefold()
        haystack = (
            car.name,
            car.model,
            car.description,
            car.body_type,
            car.number_plate,
            car.make.name,
            car.color.name,
        )
        return any(needle in value.casefold() for value in haystack)

    def _sorted(self, cars: list[Car], sort_by: SortBy) -> list[Car]:
        # Sort by the tie-breaker first; Python's sort is stable (also with reverse=True)
        by_id = sorted(cars, key=lambda car: car.id)
        if sort_by is SortBy.PRICE_ASC:
            return sorted(by_id, key=lambda car: car.price)
        if sort_by is SortBy.PRICE_DESC:
            return sorted(by_id, key=lambda car: car.price, reverse=True)
        return sorted(
            by_id,
            key=lambda car: car.created_at.timestamp() if car.created_at else 0.0,
            reverse=True,
        )


def _distinct(items):
    seen = {}
    for item in items:
        seen.setdefault(item.id, item)
    return list(seen.values())
