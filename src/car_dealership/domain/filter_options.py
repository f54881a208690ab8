"""Filter options aggregation over an inventory snapshot."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from car_dealership.domain.car import Car, CarColor, CarFiltersData, CarMake, Range
from car_dealership.domain.enums import CarStatus


def aggregate_filter_options(cars: Iterable[Car], current_year: int) -> CarFiltersData:
    """
    Compute the filter options snapshot for a set of cars.

    Only AVAILABLE cars contribute: sold or unavailable listings would suggest
    values that match nothing and skew the ranges. An empty scope yields
    ``[0, 0]`` ranges and empty option lists.

    Args:
        cars: Inventory to aggregate (any status)
        current_year: Year used to turn model years into ages

    Returns:
        CarFiltersData with sorted option lists and inclusive ranges
    """
    available = [car for car in cars if car.status is CarStatus.AVAILABLE]

    makes: dict[str, CarMake] = {car.make.id: car.make for car in available}
    colors: dict[str, CarColor] = {car.color.id: car.color for car in available}

    return CarFiltersData(
        makes=sorted(makes.values(), key=lambda make: make.name.casefold()),
        colors=sorted(colors.values(), key=lambda color: color.name.casefold()),
        body_types=sorted({car.body_type for car in available if car.body_type}),
        fuel_types=sorted({car.fuel_type for car in available if car.fuel_type}),
        transmissions=sorted({car.transmission for car in available if car.transmission}),
        price_range=Range.spanning([car.price for car in available], Decimal("0")),
        mileage_range=Range.spanning([car.mileage for car in available], 0),
        age_range=Range.spanning([car.age(current_year) for car in available], 0),
    )
