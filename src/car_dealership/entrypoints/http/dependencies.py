"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from car_dealership.adapters.postgres_car_catalog_repository import (
    PostgresCarCatalogRepository,
)
from car_dealership.infra.db.session import get_session
from car_dealership.ports.car_catalog_repository import CarCatalogRepository
from car_dealership.use_cases.get_car_by_id import GetCarById
from car_dealership.use_cases.get_car_filter_options import GetCarFilterOptions
from car_dealership.use_cases.list_car_options import ListCarColors, ListCarMakes
from car_dealership.use_cases.list_featured_cars import ListFeaturedCars
from car_dealership.use_cases.search_cars import SearchCars
from car_dealership.use_cases.update_car_status import UpdateCarStatus


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits on success, rolls back on
    exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_car_catalog_repository(db: Session = Depends(get_db)) -> CarCatalogRepository:
    """Fresh repository bound to the request's session."""
    return PostgresCarCatalogRepository(session=db)


def get_search_cars_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> SearchCars:
    return SearchCars(car_catalog_repository=repository)


def get_car_filter_options_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> GetCarFilterOptions:
    return GetCarFilterOptions(car_catalog_repository=repository)


def get_list_featured_cars_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> ListFeaturedCars:
    return ListFeaturedCars(car_catalog_repository=repository)

def get_car_by_id_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> GetCarById:
    return GetCarById(car_catalog_repository=repository)


def get_update_car_status_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> UpdateCarStatus:
    return UpdateCarStatus(car_catalog_repository=repository)


def get_list_car_makes_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> ListCarMakes:
    return ListCarMakes(car_catalog_repository=repository)


def get_list_car_colors_use_case(
    repository: CarCatalogRepository = Depends(get_car_catalog_repository),
) -> ListCarColors:
    return ListCarColors(car_catalog_repository=repository)
