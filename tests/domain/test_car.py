from __future__ import annotations

from decimal import Decimal
from typing import Callable

import pytest

from car_dealership.domain.car import (
    DEFAULT_LIMIT,
    Car,
    CarColor,
    CarFilters,
    CarFiltersData,
    CarMake,
    PaginationInfo,
    Paging,
    Range,
    SortBy,
)


# ==============================================================================
# Car
# ==============================================================================


def test_car_name_joins_make_and_model(car_factory: Callable[..., Car]) -> None:
    car = car_factory(1, model="Corolla")
    assert car.name == "Toyota Corolla"


def test_car_age_counts_whole_years(car_factory: Callable[..., Car]) -> None:
    car = car_factory(1, year=2019)
    assert car.age(2026) == 7


def test_next_years_model_has_age_zero(car_factory: Callable[..., Car]) -> None:
    car = car_factory(1, year=2027)
    assert car.age(2026) == 0


# ==============================================================================
# Range / CarFiltersData
# ==============================================================================


def test_range_spanning_values() -> None:
    assert Range.spanning([5, 1, 3], 0) == Range(min=1, max=5)


def test_range_spanning_nothing_uses_empty_value() -> None:
    assert Range.spanning([], Decimal("0")) == Range(min=Decimal("0"), max=Decimal("0"))


def test_empty_filters_data() -> None:
    data = CarFiltersData.empty()

    assert data.makes == []
    assert data.colors == []
    assert data.price_range == Range(min=Decimal("0"), max=Decimal("0"))
    assert data.mileage_range == Range(min=0, max=0)
    assert data.age_range == Range(min=0, max=0)


@pytest.fixture
def filters_data(makes: dict[str, CarMake], colors: dict[str, CarColor]) -> CarFiltersData:
    return CarFiltersData(
        makes=[makes["honda"], makes["toyota"]],
        colors=[colors["red"]],
        body_types=["SUV", "Sedan"],
        fuel_types=["Petrol"],
        transmissions=["Automatic", "Manual"],
        price_range=Range(min=Decimal("10000"), max=Decimal("30000")),
        mileage_range=Range(min=0, max=50000),
        age_range=Range(min=0, max=6),
    )


def test_find_make_by_slug_is_case_insensitive(filters_data: CarFiltersData) -> None:
    make = filters_data.find_make("TOYOTA")

    assert make is not None
    assert make.name == "Toyota"
    assert filters_data.find_make("ford") is None


def test_find_color_by_slug(filters_data: CarFiltersData) -> None:
    assert filters_data.find_color("red") is not None
    assert filters_data.find_color("blue") is None


def test_match_category_returns_canonical_spelling(filters_data: CarFiltersData) -> None:
    assert filters_data.match_body_type("suv") == "SUV"
    assert filters_data.match_fuel_type("PETROL") == "Petrol"
    assert filters_data.match_transmission("automatic") == "Automatic"
    assert filters_data.match_transmission("CVT") is None


# ==============================================================================
# Paging / PaginationInfo
# ==============================================================================


def test_paging_offset() -> None:
    assert Paging(page=3, limit=10).offset == 20


def test_paging_within_keeps_reachable_page() -> None:
    paging = Paging(page=2, limit=10)
    assert paging.within(25) is paging


def test_paging_within_clamps_to_last_page() -> None:
    assert Paging(page=9, limit=10).within(25) == Paging(page=3, limit=10)


def test_paging_within_empty_result_is_page_one() -> None:
    assert Paging(page=4, limit=10).within(0) == Paging(page=1, limit=10)


@pytest.mark.parametrize(
    "total, limit, pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3)],
)
def test_pagination_pages_round_up(total: int, limit: int, pages: int) -> None:
    info = PaginationInfo.from_total(total, Paging(page=1, limit=limit))
    assert info.pages == pages
    assert info.total == total
    assert info.limit == limit


# ==============================================================================
# CarFilters
# ==============================================================================


def test_default_filters() -> None:
    filters = CarFilters()

    assert filters.sort_by is SortBy.NEWEST
    assert filters.page == 1
    assert filters.limit == DEFAULT_LIMIT
    assert filters.range_errors() == []


def test_year_bounds_from_age() -> None:
    filters = CarFilters(min_age=2, max_age=5)
    assert filters.year_bounds(2026) == (2021, 2024)


def test_zero_min_age_does_not_bound_year() -> None:
    # Next year's models (age clamped to 0) must still match minAge=0
    assert CarFilters(min_age=0).year_bounds(2026) == (None, None)


def test_range_errors_report_inverted_ranges() -> None:
    filters = CarFilters(
        min_price=Decimal("30000"),
        max_price=Decimal("10000"),
        min_mileage=500,
        max_mileage=100,
    )

    errors = filters.range_errors()

    assert [(error["field"], error["code"]) for error in errors] == [
        ("minPrice", "INVALID_RANGE"),
        ("minMileage", "INVALID_RANGE"),
    ]
    assert errors[0]["message"] == "minPrice must be less than or equal to maxPrice"


def test_range_errors_report_negative_values() -> None:
    assert CarFilters(min_age=-1).range_errors() == [
        {"field": "minAge", "message": "minAge must be >= 0", "code": "NEGATIVE_VALUE"}
    ]


def test_equal_bounds_are_valid() -> None:
    assert CarFilters(min_price=Decimal("100"), max_price=Decimal("100")).range_errors() == []
