"""PostgreSQL implementation of CarCatalogRepository."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Iterator
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, joinedload

from car_dealership.domain.car import (
    Car,
    CarColor,
    CarFilters,
    CarFiltersData,
    CarMake,
    Range,
    SortBy,
)
from car_dealership.domain.enums import CarStatus
from car_dealership.domain.errors import StoreError
from car_dealership.infra.db.models import CarColorRow, CarMakeRow, CarRow
from car_dealership.ports.car_catalog_repository import CarCatalogRepository, SearchResult

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver/ORM failures into StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(
            "Car catalog query failed",
            operation=operation,
            cause=type(exc).__name__,
        ) from exc


def _like_pattern(text: str) -> str:
    """Substring pattern with LIKE wildcards in the user text escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresCarCatalogRepository(CarCatalogRepository):
    """
    PostgreSQL implementation of CarCatalogRepository.

    - Uses SQLAlchemy ORM for database access
    - Applies filters using SQL WHERE clauses joined with AND
    - Returns total_count via COUNT(*) query
    - Computes filter options with aggregate queries
    - Converts CarRow (infrastructure) to Car (domain)
    """

    def __init__(self, session: Session, clock: Callable[[], date] = date.today) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
            clock: Source of today's date, used to translate ages to model years
        """
        self._session = session
        self._clock = clock

    def search(self, filters: CarFilters) -> SearchResult:
        """
        Search available cars with filters, sorting and paging.

        Executes two queries:
        1. COUNT(*) to get total matching cars (before paging)
        2. SELECT with ORDER BY/OFFSET/LIMIT for the (clamped) page

        Note:
            Assumes inputs are validated by UseCase (contract programming).
        """
        current_year = self._clock().year

        with _store_errors("search"):
            count_query = self._apply_filters(
                select(func.count(CarRow.id))
                .select_from(CarRow)
                .join(CarRow.make)
                .join(CarRow.color),
                filters,
                current_year,
            )
            total_count = self._session.execute(count_query).scalar() or 0

            paging = filters.paging.within(total_count)

            query = (
                self._apply_filters(
                    select(CarRow).join(CarRow.make).join(CarRow.color),
                    filters,
                    current_year,
                )
                .options(contains_eager(CarRow.make), contains_eager(CarRow.color))
                .order_by(*self._order_by(filters.sort_by))
                .offset(paging.offset)
                .limit(paging.limit)
            )
            rows = self._session.execute(query).scalars().all()

        return SearchResult(
            cars=[self._to_domain(row) for row in rows],
            total_count=total_count,
            paging=paging,
        )

    def get_filter_options(self) -> CarFiltersData:
        """
        Compute filter options over AVAILABLE cars.

        Executes four queries: numeric ranges, makes in use, colours in use,
        and the distinct (body type, fuel type, transmission) combinations.
        """
        current_year = self._clock().year
        available = CarRow.status == CarStatus.AVAILABLE

        with _store_errors("get_filter_options"):
            ranges = self._session.execute(
                select(
                    func.min(CarRow.price),
                    func.max(CarRow.price),
                    func.min(CarRow.mileage),
                    func.max(CarRow.mileage),
                    func.min(CarRow.year),
                    func.max(CarRow.year),
                ).where(available)
            ).one()
            make_rows = (
                self._session.execute(
                    select(CarMakeRow)
                    .where(CarMakeRow.id.in_(select(CarRow.car_make_id).where(available)))
                    .order_by(CarMakeRow.name)
                )
                .scalars()
                .all()
            )
            color_rows = (
                self._session.execute(
                    select(CarColorRow)
                    .where(CarColorRow.id.in_(select(CarRow.car_color_id).where(available)))
                    .order_by(CarColorRow.name)
                )
                .scalars()
                .all()
            )
            categories = self._session.execute(
                select(CarRow.body_type, CarRow.fuel_type, CarRow.transmission)
                .where(available)
                .distinct()
            ).all()

        min_price, max_price, min_mileage, max_mileage, min_year, max_year = ranges
        if min_price is None:
            return CarFiltersData.empty()

        return CarFiltersData(
            makes=[self._make_to_domain(row) for row in make_rows],
            colors=[self._color_to_domain(row) for row in color_rows],
            body_types=sorted({body for body, _, _ in categories if body}),
            fuel_types=sorted({fuel for _, fuel, _ in categories if fuel}),
            transmissions=sorted({gearbox for _, _, gearbox in categories if gearbox}),
            price_range=Range(min=Decimal(min_price), max=Decimal(max_price)),
            mileage_range=Range(min=min_mileage, max=max_mileage),
            age_range=Range(
                min=max(0, current_year - max_year),
                max=max(0, current_year - min_year),
            ),
        )

    def get_by_id(self, car_id: str) -> Car | None:
        """
        Get car by ID.

        Args:
            car_id: Car ID (expected to be a valid UUID string)

        Returns:
            Car entity if found, None otherwise
        """
        try:
            identifier = UUID(car_id)
        except ValueError:  # Invalid UUID format
            return None

        with _store_errors("get_by_id"):
            row = self._session.execute(self._by_id_query(identifier)).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def list_featured(self, limit: int) -> list[Car]:
        with _store_errors("list_featured"):
            rows = (
                self._session.execute(
                    select(CarRow)
                    .options(joinedload(CarRow.make), joinedload(CarRow.color))
                    .where(CarRow.status == CarStatus.AVAILABLE, CarRow.featured.is_(True))
                    .order_by(*self._order_by(SortBy.NEWEST))
                    .limit(limit)
                )
                .scalars()
                .all()
            )
        return [self._to_domain(row) for row in rows]

    def list_makes(self) -> list[CarMake]:
        with _store_errors("list_makes"):
            rows = self._session.execute(select(CarMakeRow).order_by(CarMakeRow.name)).scalars().all()
        return [self._make_to_domain(row) for row in rows]

    def list_colors(self) -> list[CarColor]:
        with _store_errors("list_colors"):
            rows = (
                self._session.execute(select(CarColorRow).order_by(CarColorRow.name)).scalars().all()
            )
        return [self._color_to_domain(row) for row in rows]

    def update_status(self, car_id: str, status: CarStatus) -> Car:
        with _store_errors("update_status"):
            row = self._session.execute(self._by_id_query(UUID(car_id))).scalar_one()
            row.status = status
            self._session.flush()
            return self._to_domain(row)

    def _by_id_query(self, identifier: UUID) -> Select[tuple[CarRow]]:
        return (
            select(CarRow)
            .options(joinedload(CarRow.make), joinedload(CarRow.color))
            .where(CarRow.id == identifier)
        )

    def _apply_filters(
        self, query: Select[Any], filters: CarFilters, current_year: int
    ) -> Select[Any]:
        """
        Add the WHERE clauses for a filter set.

        The query must already join CarMakeRow and CarColorRow.
        """
        query = query.where(CarRow.status == CarStatus.AVAILABLE)

        # Case-insensitive substring match across the display name and descriptive columns
        if filters.search:
            pattern = _like_pattern(filters.search)
            query = query.where(
                or_(
                    func.concat(CarMakeRow.name, " ", CarRow.model).ilike(pattern, escape="\\"),
                    CarRow.model.ilike(pattern, escape="\\"),
                    CarRow.description.ilike(pattern, escape="\\"),
                    CarRow.body_type.ilike(pattern, escape="\\"),
                    CarRow.number_plate.ilike(pattern, escape="\\"),
                    CarMakeRow.name.ilike(pattern, escape="\\"),
                    CarColorRow.name.ilike(pattern, escape="\\"),
                )
            )

        # Slug filters resolve through the joined tables
        if filters.make:
            query = query.where(CarMakeRow.slug == filters.make)
        if filters.color:
            query = query.where(CarColorRow.slug == filters.color)

        # Case-insensitive exact match for categorical columns
        if filters.body_type:
            query = query.where(func.lower(CarRow.body_type) == func.lower(filters.body_type))
        if filters.fuel_type:
            query = query.where(func.lower(CarRow.fuel_type) == func.lower(filters.fuel_type))
        if filters.transmission:
            query = query.where(
                func.lower(CarRow.transmission) == func.lower(filters.transmission)
            )

        # Price and mileage ranges (inclusive)
        if filters.min_price is not None:
            query = query.where(CarRow.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(CarRow.price <= filters.max_price)
        if filters.min_mileage is not None:
            query = query.where(CarRow.mileage >= filters.min_mileage)
        if filters.max_mileage is not None:
            query = query.where(CarRow.mileage <= filters.max_mileage)

        # Age bounds become model-year bounds
        min_year, max_year = filters.year_bounds(current_year)
        if min_year is not None:
            query = query.where(CarRow.year >= min_year)
        if max_year is not None:
            query = query.where(CarRow.year <= max_year)

        return query

    def _order_by(self, sort_by: SortBy) -> tuple[Any, ...]:
        # id breaks ties so equal prices/timestamps page consistently
        if sort_by is SortBy.PRICE_ASC:
            return (CarRow.price.asc(), CarRow.id.asc())
        if sort_by is SortBy.PRICE_DESC:
            return (CarRow.price.desc(), CarRow.id.asc())
        return (CarRow.created_at.desc(), CarRow.id.asc())

    def _to_domain(self, row: CarRow) -> Car:
        """
        Convert database model (CarRow) to domain entity (Car).

        Args:
            row: SQLAlchemy CarRow model with make and color loaded

        Returns:
            Car domain entity
        """
        return Car(
            id=str(row.id),  # Convert UUID to string
            make=self._make_to_domain(row.make),
            color=self._color_to_domain(row.color),
            model=row.model,
            year=row.year,
            price=row.price,  # Already Decimal from NUMERIC column
            mileage=row.mileage,
            fuel_type=row.fuel_type,
            transmission=row.transmission,
            body_type=row.body_type,
            number_plate=row.number_plate,
            description=row.description,
            seats=row.seats,
            status=CarStatus(row.status),
            featured=row.featured,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _make_to_domain(self, row: CarMakeRow) -> CarMake:
        return CarMake(
            id=str(row.id),
            name=row.name,
            slug=row.slug,
            country=row.country,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _color_to_domain(self, row: CarColorRow) -> CarColor:
        return CarColor(
            id=str(row.id),
            name=row.name,
            slug=row.slug,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
