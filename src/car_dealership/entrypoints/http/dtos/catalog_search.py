from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from car_dealership.domain.car import MAX_LIMIT
from car_dealership.entrypoints.http.dtos.base import CamelModel
from car_dealership.entrypoints.http.dtos.reference import CarColorDTO, CarMakeDTO
from car_dealership.use_cases.list_featured_cars import DEFAULT_FEATURED_LIMIT


class CarResponseDTO(CamelModel):
    id: str
    name: str = Field(description="Display name (make and model)", examples=["Toyota Corolla"])
    make: str
    make_slug: str
    color: str
    color_slug: str
    model: str
    year: int
    price: str = Field(description="Price as decimal string", examples=["25000.00"])
    mileage: int
    fuel_type: str
    transmission: str
    body_type: str
    number_plate: str
    seats: int | None = None
    description: str
    status: str = Field(examples=["AVAILABLE"])
    featured: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaginationInfoDTO(CamelModel):
    total: int = Field(description="Matching cars before paging", examples=[25])
    page: int = Field(description="Current page (1-based)", examples=[3])
    limit: int = Field(description="Page size", examples=[10])
    pages: int = Field(description="Number of pages, 0 when nothing matches", examples=[3])


class CarListingDTO(CamelModel):
    items: list[CarResponseDTO]
    pagination: PaginationInfoDTO


class PriceRangeDTO(CamelModel):
    min: str = Field(examples=["8500.00"])
    max: str = Field(examples=["64000.00"])


class IntRangeDTO(CamelModel):
    min: int
    max: int


class CarFiltersDataDTO(CamelModel):
    """Filter options for the search page, computed from available cars."""

    makes: list[CarMakeDTO]
    colors: list[CarColorDTO]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: PriceRangeDTO
    mileage_range: IntRangeDTO
    age_range: IntRangeDTO

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "makes": [{"id": "6f1c…", "name": "Toyota", "slug": "toyota", "country": "Japan"}],
                "colors": [{"id": "0a7e…", "name": "Red", "slug": "red"}],
                "bodyTypes": ["Hatchback", "SUV"],
                "fuelTypes": ["Diesel", "Petrol"],
                "transmissions": ["Automatic", "Manual"],
                "priceRange": {"min": "8500.00", "max": "64000.00"},
                "mileageRange": {"min": 1200, "max": 98000},
                "ageRange": {"min": 0, "max": 9},
            }
        }
    )


class CarStatusUpdateDTO(CamelModel):
    """Request payload for changing a listing's status."""

    status: str = Field(
        description="New status: AVAILABLE, UNAVAILABLE or SOLD",
        examples=["SOLD"],
    )


class FeaturedCarsQueryDTO(BaseModel):
    """Query parameters for the featured cars listing."""

    limit: int = Field(
        default=DEFAULT_FEATURED_LIMIT,
        description=f"Maximum number of cars (1-{MAX_LIMIT})",
        examples=[3],
    )
