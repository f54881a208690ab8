"""Shared inventory builders for the test suite."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest

from car_dealership.domain.car import Car, CarColor, CarMake

TODAY = date(2026, 6, 1)

TOYOTA = CarMake(id="make-toyota", name="Toyota", slug="toyota", country="Japan")
HONDA = CarMake(id="make-honda", name="Honda", slug="honda", country="Japan")
FORD = CarMake(id="make-ford", name="Ford", slug="ford", country="United States")

RED = CarColor(id="color-red", name="Red", slug="red")
BLUE = CarColor(id="color-blue", name="Blue", slug="blue")
BLACK = CarColor(id="color-black", name="Black", slug="black")


def build_car(index: int, **overrides: Any) -> Car:
    """Car with a UUID-shaped id; later indexes are listed more recently."""
    fields: dict[str, Any] = {
        "id": f"00000000-0000-0000-0000-{index:012d}",
        "make": TOYOTA,
        "color": RED,
        "model": "Corolla",
        "year": 2020,
        "price": Decimal("20000.00"),
        "mileage": 30000,
        "fuel_type": "Petrol",
        "transmission": "Manual",
        "body_type": "Sedan",
        "number_plate": f"AB20 C{index:03d}",
        "description": "",
        "seats": 5,
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(days=index),
    }
    fields.update(overrides)
    return Car(**fields)


@pytest.fixture
def clock() -> Callable[[], date]:
    """Frozen 'today' so age filters are stable."""
    return lambda: TODAY


@pytest.fixture
def car_factory() -> Callable[..., Car]:
    return build_car


@pytest.fixture
def makes() -> dict[str, CarMake]:
    return {"toyota": TOYOTA, "honda": HONDA, "ford": FORD}


@pytest.fixture
def colors() -> dict[str, CarColor]:
    return {"red": RED, "blue": BLUE, "black": BLACK}
