#!/usr/bin/env python3
"""
Seed the catalog (makes, colours, cars) with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices correlated with year + make band, mileage with age

Usage:
    python scripts/seed_cars.py
"""

from __future__ import annotations

import random
import string
import sys
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from car_dealership.domain.enums import CarStatus
from car_dealership.domain.reference import slugify
from car_dealership.infra.db.models import CarColorRow, CarMakeRow, CarRow
from car_dealership.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_CARS = 60  # Number of cars to generate


# ==============================================================================
# Inventory data
# ==============================================================================

# Price bands per make (GBP)
MAKES = {
    "economy": {
        "makes": {"Dacia": "Romania", "Kia": "South Korea", "Hyundai": "South Korea", "SEAT": "Spain"},
        "base_price_min": Decimal("9000"),
        "base_price_max": Decimal("16000"),
    },
    "mid_range": {
        "makes": {"Toyota": "Japan", "Honda": "Japan", "Volkswagen": "Germany", "Ford": "United States"},
        "base_price_min": Decimal("16000"),
        "base_price_max": Decimal("30000"),
    },
    "premium": {
        "makes": {"BMW": "Germany", "Mercedes-Benz": "Germany", "Audi": "Germany", "Volvo": "Sweden"},
        "base_price_min": Decimal("30000"),
        "base_price_max": Decimal("65000"),
    },
}

# (model, body type, seats)
MODELS_BY_MAKE = {
    "Dacia": [("Sandero", "Hatchback", 5), ("Duster", "SUV", 5), ("Jogger", "SUV", 7)],
    "Kia": [("Picanto", "Hatchback", 4), ("Ceed", "Hatchback", 5), ("Sportage", "SUV", 5)],
    "Hyundai": [("i20", "Hatchback", 5), ("Tucson", "SUV", 5), ("i30 Fastback", "Coupe", 5)],
    "SEAT": [("Ibiza", "Hatchback", 5), ("Leon", "Hatchback", 5), ("Ateca", "SUV", 5)],
    "Toyota": [("Corolla", "Sedan", 5), ("Yaris", "Hatchback", 5), ("RAV4", "SUV", 5), ("GR86", "Coupe", 4)],
    "Honda": [("Civic", "Hatchback", 5), ("Jazz", "Hatchback", 5), ("CR-V", "SUV", 5)],
    "Volkswagen": [("Golf", "Hatchback", 5), ("Passat", "Sedan", 5), ("Tiguan", "SUV", 7)],
    "Ford": [("Fiesta", "Hatchback", 5), ("Focus", "Hatchback", 5), ("Mustang", "Coupe", 4), ("Kuga", "SUV", 5)],
    "BMW": [("3 Series", "Sedan", 5), ("4 Series", "Coupe", 4), ("X3", "SUV", 5)],
    "Mercedes-Benz": [("C-Class", "Sedan", 5), ("E-Class", "Sedan", 5), ("GLC", "SUV", 5)],
    "Audi": [("A3", "Hatchback", 5), ("A5", "Coupe", 4), ("Q5", "SUV", 5)],
    "Volvo": [("S60", "Sedan", 5), ("XC40", "SUV", 5), ("XC90", "SUV", 7)],
}

COLORS = ["Black", "White", "Silver", "Grey", "Blue", "Red", "Green"]

TRANSMISSIONS = ["Manual", "Automatic"]

FUEL_TYPES = ["Petrol", "Diesel", "Hybrid", "Electric"]

STATUSES = [CarStatus.AVAILABLE, CarStatus.UNAVAILABLE, CarStatus.SOLD]


# ==============================================================================
# Price Calculation with Realism
# ==============================================================================


def calculate_price(category: str, year: int, current_year: int) -> Decimal:
    """
    Calculate price based on make category and year.

    Logic:
    - Newer cars are more expensive
    - Premium brands cost more than economy
    - Price depreciates ~12% per year from base price, capped at 75%
    """
    band = MAKES[category]
    base_price = Decimal(random.randint(int(band["base_price_min"]), int(band["base_price_max"])))

    years_old = max(0, current_year - year)
    total_depreciation = min(Decimal("0.12") * years_old, Decimal("0.75"))
    depreciated_price = base_price * (Decimal("1") - total_depreciation)

    # Add some randomness (+/- 10%)
    variance = Decimal(str(random.uniform(0.90, 1.10)))
    final_price = depreciated_price * variance

    # Round to nearest 50
    final_price = (final_price / 50).quantize(Decimal("1")) * 50

    return max(final_price, Decimal("2500")).quantize(Decimal("0.01"))


def number_plate(year: int) -> str:
    """UK-style plate, e.g. ``AB21 XYZ``; the age identifier follows the year."""
    letters = string.ascii_uppercase
    return (
        "".join(random.choices(letters, k=2))
        + f"{year % 100:02d} "
        + "".join(random.choices(letters, k=3))
    )


# ==============================================================================
# Seed Generation
# ==============================================================================


def build_makes() -> dict[str, tuple[str, CarMakeRow]]:
    """Make name → (price category, row)."""
    makes = {}
    for category, band in MAKES.items():
        for name, country in band["makes"].items():
            makes[name] = (category, CarMakeRow(name=name, slug=slugify(name), country=country))
    return makes


def build_colors() -> list[CarColorRow]:
    return [CarColorRow(name=name, slug=slugify(name)) for name in COLORS]


def generate_car(
    makes: dict[str, tuple[str, CarMakeRow]],
    colors: list[CarColorRow],
    current_year: int,
) -> CarRow:
    """Generate a single random car with realistic data."""
    make_name = random.choice(sorted(makes))
    category, make = makes[make_name]
    model, body_type, seats = random.choice(MODELS_BY_MAKE[make_name])

    # Last ten model years, weighted toward newer
    year = random.choices(
        range(current_year - 9, current_year + 1),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7],
        k=1,
    )[0]

    # Mileage: correlated with age
    years_old = current_year - year
    max_mileage = min(150000, years_old * 12000 + random.randint(0, 15000))
    mileage = random.randint(0, max(1000, max_mileage))

    if year >= current_year - 3 or category == "premium":
        transmission = random.choices(TRANSMISSIONS, weights=[1, 4], k=1)[0]
    else:
        transmission = random.choices(TRANSMISSIONS, weights=[3, 2], k=1)[0]

    if year >= current_year - 2:
        fuel_type = random.choices(FUEL_TYPES, weights=[5, 1, 3, 2], k=1)[0]
    else:
        fuel_type = random.choices(FUEL_TYPES, weights=[6, 3, 1, 0], k=1)[0]

    color = random.choice(colors)

    # Spread listings over the last six months so "newest" has an order
    created_at = datetime.now(timezone.utc) - timedelta(minutes=random.randint(0, 60 * 24 * 180))

    return CarRow(
        make=make,
        color=color,
        model=model,
        year=year,
        price=calculate_price(category, year, current_year),
        mileage=mileage,
        fuel_type=fuel_type,
        transmission=transmission,
        body_type=body_type,
        number_plate=number_plate(year),
        seats=seats,
        description=f"{year} {make_name} {model} in {color.name.lower()}, {mileage:,} miles.",
        status=random.choices(STATUSES, weights=[8, 1, 1], k=1)[0],
        featured=random.random() < 0.1,
        created_at=created_at,
        updated_at=created_at,
    )


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random catalog data.

    Args:
        num_cars: Number of cars to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    current_year = date.today().year

    print(f"Seeding catalog with {num_cars} cars (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data (cars first, they reference makes/colours)
        deleted_cars = session.query(CarRow).delete()
        session.query(CarMakeRow).delete()
        session.query(CarColorRow).delete()
        print(f"   Deleted {deleted_cars} existing cars")

        # Step 2: Reference data
        makes = build_makes()
        colors = build_colors()
        session.add_all([row for _, row in makes.values()])
        session.add_all(colors)

        # Step 3: Cars
        cars = [generate_car(makes, colors, current_year) for _ in range(num_cars)]
        session.add_all(cars)
        session.flush()

        print(f"Seeded {len(makes)} makes, {len(colors)} colours and {len(cars)} cars")

        print("\nSample cars:")
        for i, car in enumerate(cars[:5], 1):
            print(
                f"   {i}. {car.year} {car.make.name} {car.model} - "
                f"£{car.price:,.2f} ({car.transmission}, {car.fuel_type}, {car.status.value})"
            )

        if len(cars) > 5:
            print(f"   ... and {len(cars) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_cars()
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
