"""
Unit test suite for PostgresCarCatalogRepository.

This test suite verifies the PostgreSQL implementation using mocks.
Tests verify:
- COUNT(*) runs before the page query and drives page clamping
- Filters become SQL WHERE clauses (inspected on the compiled statement)
- Filter options are assembled from the aggregate queries
- Driver failures are translated into StoreError
- Type conversions (UUID → string, NUMERIC → Decimal) work
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from car_dealership.adapters.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)
from car_dealership.domain.car import CarFilters, CarFiltersData, Paging, Range, SortBy
from car_dealership.domain.enums import CarStatus
from car_dealership.domain.errors import StoreError

CAR_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
CREATED = datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture()
def mock_session() -> Mock:
    """Mock SQLAlchemy session."""
    return Mock(spec=Session)


@pytest.fixture()
def repo(mock_session: Mock) -> PostgresCarCatalogRepository:
    return PostgresCarCatalogRepository(mock_session, clock=lambda: date(2026, 6, 1))


def make_row(**overrides: Any) -> SimpleNamespace:
    return SimpleNamespace(
        **{
            "id": uuid.uuid4(),
            "name": "Toyota",
            "slug": "toyota",
            "country": "Japan",
            "created_at": CREATED,
            "updated_at": CREATED,
            **overrides,
        }
    )


def color_row(**overrides: Any) -> SimpleNamespace:
    return SimpleNamespace(
        **{
            "id": uuid.uuid4(),
            "name": "Red",
            "slug": "red",
            "created_at": CREATED,
            "updated_at": CREATED,
            **overrides,
        }
    )


def car_row(**overrides: Any) -> SimpleNamespace:
    return SimpleNamespace(
        **{
            "id": CAR_ID,
            "make": make_row(),
            "color": color_row(),
            "model": "Corolla",
            "year": 2020,
            "price": Decimal("18500.00"),
            "mileage": 42000,
            "fuel_type": "Petrol",
            "transmission": "Manual",
            "body_type": "Sedan",
            "number_plate": "AB20 CDE",
            "description": "Clean",
            "seats": 5,
            "status": CarStatus.AVAILABLE,
            "featured": False,
            "created_at": CREATED,
            "updated_at": CREATED,
            **overrides,
        }
    )


def search_results(total: int | None, rows: list[Any]) -> list[Mock]:
    count_result = Mock()
    count_result.scalar.return_value = total

    select_result = Mock()
    select_result.scalars.return_value.all.return_value = rows
    return [count_result, select_result]


def compiled(statement: Any) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


def executed_sql(mock_session: Mock, index: int) -> str:
    return compiled(mock_session.execute.call_args_list[index].args[0])


# ==============================================================================
# Search
# ==============================================================================


def test_search_executes_count_then_select(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(1, [car_row()])

    result = repo.search(CarFilters())

    assert mock_session.execute.call_count == 2
    assert "count(cars.id)" in executed_sql(mock_session, 0)
    assert result.total_count == 1
    assert result.paging == Paging(page=1, limit=6)
    assert len(result.cars) == 1


def test_search_only_sees_available_cars(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(0, [])

    repo.search(CarFilters())

    assert "cars.status = " in executed_sql(mock_session, 0)
    assert "cars.status = " in executed_sql(mock_session, 1)


def test_search_applies_filters_to_query(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(0, [])

    repo.search(
        CarFilters(
            search="rav",
            make="toyota",
            color="red",
            body_type="SUV",
            min_price=Decimal("10000"),
            max_price=Decimal("30000"),
            max_mileage=50000,
            min_age=1,
            max_age=5,
        )
    )

    sql = executed_sql(mock_session, 1)
    assert "concat(car_makes.name, " in sql and "cars.model) ILIKE" in sql
    assert "cars.model ILIKE" in sql
    assert "car_makes.name ILIKE" in sql
    assert "ESCAPE" in sql
    assert "car_makes.slug = " in sql
    assert "car_colors.slug = " in sql
    assert "lower(cars.body_type) = lower(" in sql
    assert "cars.price >= " in sql and "cars.price <= " in sql
    assert "cars.mileage <= " in sql
    assert "cars.year >= " in sql and "cars.year <= " in sql


def test_search_escapes_like_wildcards(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(0, [])

    repo.search(CarFilters(search="50%_off"))

    params = mock_session.execute.call_args_list[0].args[0].compile().params
    assert "%50\\%\\_off%" in params.values()


@pytest.mark.parametrize(
    "sort_by, order",
    [
        (SortBy.NEWEST, "ORDER BY cars.created_at DESC, cars.id ASC"),
        (SortBy.PRICE_ASC, "ORDER BY cars.price ASC, cars.id ASC"),
        (SortBy.PRICE_DESC, "ORDER BY cars.price DESC, cars.id ASC"),
    ],
)
def test_search_sort_order_has_id_tie_break(
    repo: PostgresCarCatalogRepository, mock_session: Mock, sort_by: SortBy, order: str
) -> None:
    mock_session.execute.side_effect = search_results(0, [])

    repo.search(CarFilters(sort_by=sort_by))

    assert order in executed_sql(mock_session, 1)


def test_search_clamps_page_to_last_page(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(25, [])

    result = repo.search(CarFilters(page=9, limit=10))

    assert result.paging == Paging(page=3, limit=10)
    select = mock_session.execute.call_args_list[1].args[0]
    values = list(select.compile().params.values())
    assert 10 in values  # LIMIT
    assert 20 in values  # OFFSET of page 3


def test_search_handles_null_count_as_zero(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(None, [])

    assert repo.search(CarFilters()).total_count == 0


def test_search_converts_rows_to_domain(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = search_results(1, [car_row()])

    car = repo.search(CarFilters()).cars[0]

    assert car.id == str(CAR_ID)
    assert car.name == "Toyota Corolla"
    assert car.make.slug == "toyota"
    assert car.color.name == "Red"
    assert car.price == Decimal("18500.00")
    assert car.status is CarStatus.AVAILABLE


def test_search_translates_driver_errors(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

    with pytest.raises(StoreError) as exc_info:
        repo.search(CarFilters())

    assert exc_info.value.context == {"operation": "search", "cause": "OperationalError"}


# ==============================================================================
# Filter options
# ==============================================================================


def test_filter_options_assembled_from_aggregates(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    ranges = Mock()
    ranges.one.return_value = (
        Decimal("9000.00"),
        Decimal("41000.00"),
        150,
        98000,
        2017,
        2026,
    )
    makes = Mock()
    makes.scalars.return_value.all.return_value = [make_row(name="Honda", slug="honda")]
    colors = Mock()
    colors.scalars.return_value.all.return_value = [color_row()]
    categories = Mock()
    categories.all.return_value = [
        ("SUV", "Hybrid", "Automatic"),
        ("Sedan", "Petrol", "Manual"),
        ("SUV", "Petrol", "Manual"),
    ]
    mock_session.execute.side_effect = [ranges, makes, colors, categories]

    options = repo.get_filter_options()

    assert [make.slug for make in options.makes] == ["honda"]
    assert [color.slug for color in options.colors] == ["red"]
    assert options.body_types == ["SUV", "Sedan"]
    assert options.fuel_types == ["Hybrid", "Petrol"]
    assert options.transmissions == ["Automatic", "Manual"]
    assert options.price_range == Range(min=Decimal("9000.00"), max=Decimal("41000.00"))
    assert options.mileage_range == Range(min=150, max=98000)
    assert options.age_range == Range(min=0, max=9)


def test_filter_options_without_available_cars(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    ranges = Mock()
    ranges.one.return_value = (None, None, None, None, None, None)
    empty = Mock()
    empty.scalars.return_value.all.return_value = []
    empty.all.return_value = []
    mock_session.execute.side_effect = [ranges, empty, empty, empty]

    assert repo.get_filter_options() == CarFiltersData.empty()


# ==============================================================================
# Lookups and updates
# ==============================================================================


def test_get_by_id_returns_car_whatever_its_status(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = car_row(
        status=CarStatus.SOLD
    )

    car = repo.get_by_id(str(CAR_ID))

    assert car is not None
    assert car.status is CarStatus.SOLD
    assert "cars.status" not in executed_sql(mock_session, 0).split("WHERE")[1]


def test_get_by_id_not_found(repo: PostgresCarCatalogRepository, mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = None

    assert repo.get_by_id(str(CAR_ID)) is None


def test_get_by_id_invalid_uuid_skips_query(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    assert repo.get_by_id("not-a-uuid") is None
    mock_session.execute.assert_not_called()


def test_list_featured_newest_available_first(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [
        car_row(featured=True)
    ]

    cars = repo.list_featured(limit=3)

    assert [car.featured for car in cars] == [True]
    sql = executed_sql(mock_session, 0)
    assert "cars.status = " in sql
    assert "cars.featured IS true" in sql
    assert "ORDER BY cars.created_at DESC, cars.id ASC" in sql
    assert 3 in mock_session.execute.call_args_list[0].args[0].compile().params.values()


def test_list_featured_translates_driver_errors(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

    with pytest.raises(StoreError) as exc_info:
        repo.list_featured(limit=3)

    assert exc_info.value.context["operation"] == "list_featured"

def test_list_makes_ordered_by_name(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [
        make_row(name="Audi", slug="audi", country="Germany")
    ]

    makes = repo.list_makes()

    assert [(make.name, make.country) for make in makes] == [("Audi", "Germany")]
    assert "ORDER BY car_makes.name" in executed_sql(mock_session, 0)


def test_list_colors_ordered_by_name(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [color_row()]

    assert [color.slug for color in repo.list_colors()] == ["red"]
    assert "ORDER BY car_colors.name" in executed_sql(mock_session, 0)


def test_update_status_flushes_new_status(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    row = car_row()
    mock_session.execute.return_value.scalar_one.return_value = row

    car = repo.update_status(str(CAR_ID), CarStatus.SOLD)

    assert row.status is CarStatus.SOLD
    assert car.status is CarStatus.SOLD
    mock_session.flush.assert_called_once_with()


def test_update_status_translates_driver_errors(
    repo: PostgresCarCatalogRepository, mock_session: Mock
) -> None:
    mock_session.execute.return_value.scalar_one.return_value = car_row()
    mock_session.flush.side_effect = OperationalError("UPDATE", {}, Exception("down"))

    with pytest.raises(StoreError):
        repo.update_status(str(CAR_ID), CarStatus.UNAVAILABLE)
