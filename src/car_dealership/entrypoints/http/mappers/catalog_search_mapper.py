from __future__ import annotations

from car_dealership.domain.car import Car, CarFiltersData
from car_dealership.entrypoints.http.dtos.catalog_search import (
    CarFiltersDataDTO,
    CarListingDTO,
    CarResponseDTO,
    IntRangeDTO,
    PaginationInfoDTO,
    PriceRangeDTO,
)
from car_dealership.entrypoints.http.mappers.reference_mapper import ReferenceMapper
from car_dealership.use_cases.search_cars import CarListing


class CatalogSearchMapper:
    """Maps domain search results to REST DTOs."""

    @staticmethod
    def to_car_response(car: Car) -> CarResponseDTO:
        """
        Converts domain Car entity to REST response DTO.

        Handles Decimal → str conversion at the boundary.

        Args:
            car: Domain Car entity

        Returns:
            CarResponseDTO: REST response DTO with string price
        """
        return CarResponseDTO(
            id=car.id,
            name=car.name,
            make=car.make.name,
            make_slug=car.make.slug,
            color=car.color.name,
            color_slug=car.color.slug,
            model=car.model,
            year=car.year,
            price=str(car.price),  # Decimal → str (no float precision loss)
            mileage=car.mileage,
            fuel_type=car.fuel_type,
            transmission=car.transmission,
            body_type=car.body_type,
            number_plate=car.number_plate,
            seats=car.seats,
            description=car.description,
            status=car.status.value,
            featured=car.featured,
            created_at=car.created_at,
            updated_at=car.updated_at,
        )

    @staticmethod
    def to_cars_response(cars: list[Car]) -> list[CarResponseDTO]:
        return [CatalogSearchMapper.to_car_response(car) for car in cars]

    @staticmethod
    def to_listing_response(listing: CarListing) -> CarListingDTO:
        pagination = listing.pagination
        return CarListingDTO(
            items=[CatalogSearchMapper.to_car_response(car) for car in listing.items],
            pagination=PaginationInfoDTO(
                total=pagination.total,
                page=pagination.page,
                limit=pagination.limit,
                pages=pagination.pages,
            ),
        )

    @staticmethod
    def to_filters_data_response(options: CarFiltersData) -> CarFiltersDataDTO:
        return CarFiltersDataDTO(
            makes=ReferenceMapper.to_makes_response(options.makes),
            colors=ReferenceMapper.to_colors_response(options.colors),
            body_types=list(options.body_types),
            fuel_types=list(options.fuel_types),
            transmissions=list(options.transmissions),
            price_range=PriceRangeDTO(
                min=str(options.price_range.min),
                max=str(options.price_range.max),
            ),
            mileage_range=IntRangeDTO(
                min=options.mileage_range.min, max=options.mileage_range.max
            ),
            age_range=IntRangeDTO(min=options.age_range.min, max=options.age_range.max),
        )
