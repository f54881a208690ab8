from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from car_dealership.domain.enums import CarStatus
from car_dealership.domain.errors import ValidationError


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6
MAX_LIMIT = 100

RangeValue = TypeVar("RangeValue", int, Decimal)


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


# ==============================================================================
# Entities
# ==============================================================================


class SortBy(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"


@dataclass(frozen=True, slots=True)
class CarMake:
    id: str
    name: str
    slug: str
    country: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CarColor:
    id: str
    name: str
    slug: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Car:
    id: str
    make: CarMake
    color: CarColor
    model: str
    year: int
    price: Decimal
    mileage: int
    fuel_type: str
    transmission: str
    body_type: str
    number_plate: str = ""
    description: str = ""
    seats: int | None = None
    status: CarStatus = CarStatus.AVAILABLE
    featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def name(self) -> str:
        return f"{self.make.name} {self.model}"

    def age(self, current_year: int) -> int:
        """Age in whole years; next year's models count as new."""
        return max(0, current_year - self.year)


# ==============================================================================
# Filter options snapshot
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Range(Generic[RangeValue]):
    min: RangeValue
    max: RangeValue

    @classmethod
    def spanning(cls, values: list[RangeValue], empty: RangeValue) -> Range[RangeValue]:
        """Smallest range containing every value, or ``[empty, empty]``."""
        if not values:
            return cls(min=empty, max=empty)
        return cls(min=min(values), max=max(values))


@dataclass(frozen=True)
class CarFiltersData:
    """Valid filter values and ranges derived from the current inventory."""

    makes: list[CarMake]
    colors: list[CarColor]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: Range[Decimal]
    mileage_range: Range[int]
    age_range: Range[int]

    @classmethod
    def empty(cls) -> CarFiltersData:
        return cls(
            makes=[],
            colors=[],
            body_types=[],
            fuel_types=[],
            transmissions=[],
            price_range=Range(min=Decimal("0"), max=Decimal("0")),
            mileage_range=Range(min=0, max=0),
            age_range=Range(min=0, max=0),
        )

    def find_make(self, slug: str) -> CarMake | None:
        return next((make for make in self.makes if make.slug == slug.lower()), None)

    def find_color(self, slug: str) -> CarColor | None:
        return next((color for color in self.colors if color.slug == slug.lower()), None)

    def match_body_type(self, value: str) -> str | None:
        return _match_option(self.body_types, value)

    def match_fuel_type(self, value: str) -> str | None:
        return _match_option(self.fuel_types, value)

    def match_transmission(self, value: str) -> str | None:
        return _match_option(self.transmissions, value)


def _match_option(options: list[str], value: str) -> str | None:
    """Case-insensitive lookup returning the canonical spelling."""
    wanted = value.casefold()
    return next((option for option in options if option.casefold() == wanted), None)


# ==============================================================================
# Paging
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def within(self, total: int) -> Paging:
        """Clamp the page to the last page that holds results."""
        last_page = max(1, -(-total // self.limit))
        if self.page <= last_page:
            return self
        return replace(self, page=last_page)


@dataclass(frozen=True, slots=True)
class PaginationInfo:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_total(cls, total: int, paging: Paging) -> PaginationInfo:
        return cls(
            total=total,
            page=paging.page,
            limit=paging.limit,
            pages=-(-total // paging.limit),
        )


# ==============================================================================
# Filter set
# ==============================================================================

# (wire name of min, wire name of max, attribute of min, attribute of max)
_RANGE_PAIRS = (
    ("minPrice", "maxPrice", "min_price", "max_price"),
    ("minMileage", "maxMileage", "min_mileage", "max_mileage"),
    ("minAge", "maxAge", "min_age", "max_age"),
)


@dataclass(frozen=True, slots=True)
class CarFilters:
    search: str | None = None
    make: str | None = None
    color: str | None = None
    body_type: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_mileage: int | None = None
    max_mileage: int | None = None
    min_age: int | None = None
    max_age: int | None = None
    sort_by: SortBy = SortBy.NEWEST
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def paging(self) -> Paging:
        return Paging(page=self.page, limit=self.limit)

    def year_bounds(self, current_year: int) -> tuple[int | None, int | None]:
        """Translate the age bounds into (min_year, max_year)."""
        min_year = current_year - self.max_age if self.max_age is not None else None
        max_year = current_year - self.min_age if self.min_age else None
        return min_year, max_year

    def range_errors(self) -> list[dict[str, str]]:
        """Negative bounds and inverted (min > max) pairs, one entry each."""
        errors = []
        for min_name, max_name, min_attr, max_attr in _RANGE_PAIRS:
            low = getattr(self, min_attr)
            high = getattr(self, max_attr)
            for name, value in ((min_name, low), (max_name, high)):
                if value is not None and value < 0:
                    errors.append(
                        {
                            "field": name,
                            "message": f"{name} must be >= 0",
                            "code": "NEGATIVE_VALUE",
                        }
                    )
            if low is not None and high is not None and low > high:
                errors.append(
                    {
                        "field": min_name,
                        "message": f"{min_name} must be less than or equal to {max_name}",
                        "code": "INVALID_RANGE",
                    }
                )
        return errors

