from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from car_dealership.domain.car import (
    Car,
    CarColor,
    CarFiltersData,
    CarMake,
    PaginationInfo,
    Range,
)
from car_dealership.domain.enums import CarStatus
from car_dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from car_dealership.use_cases.search_cars import CarListing


# ==============================================================================
# Car
# ==============================================================================


def test_to_car_response_maps_all_fields(car_factory: Callable[..., Car]) -> None:
    car = car_factory(
        7,
        price=Decimal("25999.99"),
        status=CarStatus.SOLD,
        featured=True,
        description="Panoramic roof",
    )

    dto = CatalogSearchMapper.to_car_response(car)

    assert dto.id == car.id
    assert dto.name == "Toyota Corolla"
    assert dto.make == "Toyota"
    assert dto.make_slug == "toyota"
    assert dto.color == "Red"
    assert dto.color_slug == "red"
    assert dto.price == "25999.99"  # Decimal → str, no float rounding
    assert dto.status == "SOLD"
    assert dto.featured is True
    assert dto.description == "Panoramic roof"
    assert dto.created_at == datetime(2026, 1, 8, tzinfo=timezone.utc)


def test_car_response_serializes_camel_case(car_factory: Callable[..., Car]) -> None:
    payload = CatalogSearchMapper.to_car_response(car_factory(1)).model_dump(
        mode="json", by_alias=True
    )

    assert payload["makeSlug"] == "toyota"
    assert payload["fuelType"] == "Petrol"
    assert payload["bodyType"] == "Sedan"
    assert payload["numberPlate"] == "AB20 C001"
    assert payload["createdAt"].startswith("2026-01-02T00:00:00")
    assert "make_slug" not in payload


def test_to_cars_response_keeps_order(car_factory: Callable[..., Car]) -> None:
    cars = [car_factory(3), car_factory(1)]

    dtos = CatalogSearchMapper.to_cars_response(cars)

    assert [dto.id for dto in dtos] == [cars[0].id, cars[1].id]
    assert CatalogSearchMapper.to_cars_response([]) == []


# ==============================================================================
# Listing
# ==============================================================================


def test_to_listing_response(car_factory: Callable[..., Car]) -> None:
    listing = CarListing(
        items=[car_factory(1), car_factory(2)],
        pagination=PaginationInfo(total=25, page=3, limit=10, pages=3),
    )

    dto = CatalogSearchMapper.to_listing_response(listing)

    assert [item.id for item in dto.items] == [listing.items[0].id, listing.items[1].id]
    assert dto.pagination.model_dump() == {"total": 25, "page": 3, "limit": 10, "pages": 3}


# ==============================================================================
# Filter options
# ==============================================================================


def test_to_filters_data_response(
    makes: dict[str, CarMake], colors: dict[str, CarColor]
) -> None:
    options = CarFiltersData(
        makes=[makes["honda"]],
        colors=[colors["blue"]],
        body_types=["SUV"],
        fuel_types=["Hybrid"],
        transmissions=["Automatic"],
        price_range=Range(min=Decimal("8500.00"), max=Decimal("64000.00")),
        mileage_range=Range(min=1200, max=98000),
        age_range=Range(min=0, max=9),
    )

    payload = CatalogSearchMapper.to_filters_data_response(options).model_dump(
        mode="json", by_alias=True
    )

    assert payload == {
        "makes": [{"id": "make-honda", "name": "Honda", "slug": "honda", "country": "Japan"}],
        "colors": [{"id": "color-blue", "name": "Blue", "slug": "blue"}],
        "bodyTypes": ["SUV"],
        "fuelTypes": ["Hybrid"],
        "transmissions": ["Automatic"],
        "priceRange": {"min": "8500.00", "max": "64000.00"},
        "mileageRange": {"min": 1200, "max": 98000},
        "ageRange": {"min": 0, "max": 9},
    }


def test_empty_filters_data_response() -> None:
    dto = CatalogSearchMapper.to_filters_data_response(CarFiltersData.empty())

    assert dto.makes == []
    assert dto.price_range.min == "0"
    assert dto.age_range.max == 0
