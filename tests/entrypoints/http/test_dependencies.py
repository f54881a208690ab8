"""
Unit tests for FastAPI dependency injection functions.

- get_db() yields a database session per request
- use case factories wire a fresh repository bound to that session
- No caching of sessions or stateful objects

Tests use mocks to verify wiring without requiring a real database.
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import MagicMock, Mock, patch

import pytest

from car_dealership.adapters.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)
from car_dealership.entrypoints.http.dependencies import (
    get_car_by_id_use_case,
    get_car_catalog_repository,
    get_car_filter_options_use_case,
    get_db,
    get_list_car_colors_use_case,
    get_list_car_makes_use_case,
    get_list_featured_cars_use_case,
    get_search_cars_use_case,
    get_update_car_status_use_case,
)
from car_dealership.use_cases.get_car_by_id import GetCarById
from car_dealership.use_cases.get_car_filter_options import GetCarFilterOptions
from car_dealership.use_cases.list_car_options import ListCarColors, ListCarMakes
from car_dealership.use_cases.list_featured_cars import ListFeaturedCars
from car_dealership.use_cases.search_cars import SearchCars
from car_dealership.use_cases.update_car_status import UpdateCarStatus


# ==============================================================================
# get_db() - Database Session Provider
# ==============================================================================


def test_get_db_yields_session_from_get_session() -> None:
    mock_session = Mock()
    mock_context_manager = MagicMock()
    mock_context_manager.__enter__.return_value = mock_session
    mock_context_manager.__exit__.return_value = None

    with patch("car_dealership.entrypoints.http.dependencies.get_session") as mock_get_session:
        mock_get_session.return_value = mock_context_manager

        generator = get_db()
        session = next(generator)

        mock_get_session.assert_called_once()
        assert session is mock_session

        # Complete the generator (simulates FastAPI cleanup)
        with pytest.raises(StopIteration):
            next(generator)

    mock_context_manager.__exit__.assert_called_once()


# ==============================================================================
# Repository and use case factories
# ==============================================================================


def test_repository_is_bound_to_request_session() -> None:
    session = Mock()

    repository = get_car_catalog_repository(db=session)

    assert isinstance(repository, PostgresCarCatalogRepository)
    assert repository._session is session


def test_repository_is_not_cached() -> None:
    session = Mock()
    assert get_car_catalog_repository(db=session) is not get_car_catalog_repository(db=session)


@pytest.mark.parametrize(
    "factory, use_case_class",
    [
        (get_search_cars_use_case, SearchCars),
        (get_car_filter_options_use_case, GetCarFilterOptions),
        (get_car_by_id_use_case, GetCarById),
        (get_update_car_status_use_case, UpdateCarStatus),
        (get_list_car_makes_use_case, ListCarMakes),
        (get_list_car_colors_use_case, ListCarColors),
        (get_list_featured_cars_use_case, ListFeaturedCars),
    ],
)
def test_use_case_factories_wire_repository(
    factory: Callable[..., Any], use_case_class: type
) -> None:
    repository = Mock()

    use_case = factory(repository=repository)

    assert isinstance(use_case, use_case_class)
    assert use_case._repository is repository
