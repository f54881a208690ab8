"""Parse, validate and encode car search parameters.

The wire format is the search page's query string: camelCase names and the
``newest | priceAsc | priceDesc`` sort values are a stable contract.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping
from urllib.parse import urlencode

from car_dealership.domain.car import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    CarFilters,
    CarFiltersData,
    FilterValidationError,
    SortBy,
)
from car_dealership.domain.results import ActionResponse
from car_dealership.use_cases.envelope import run_action

OptionsProvider = Callable[[], CarFiltersData]

CARS_PATH = "/cars"

# (attribute, wire name) in query-string order
WIRE_FIELDS = (
    ("search", "search"),
    ("make", "make"),
    ("color", "color"),
    ("body_type", "bodyType"),
    ("fuel_type", "fuelType"),
    ("transmission", "transmission"),
    ("min_price", "minPrice"),
    ("max_price", "maxPrice"),
    ("min_mileage", "minMileage"),
    ("max_mileage", "maxMileage"),
    ("min_age", "minAge"),
    ("max_age", "maxAge"),
    ("sort_by", "sortBy"),
    ("page", "page"),
    ("limit", "limit"),
)

_CATEGORICAL_FIELDS = ("make", "color", "bodyType", "fuelType", "transmission")

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Largest decimal exponent accepted for money bounds
MAX_DECIMAL_EXPONENT = 12


def _text(value: Any) -> str | None:
    """Strip a raw value; blank strings count as absent."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class FilterNormalizer:
    """
    Turn untrusted search parameters into a validated CarFilters.

    - Every invalid field is reported, not just the first one
    - ``page`` defaults to 1 and is raised to 1 when lower
    - ``limit`` defaults to DEFAULT_LIMIT and is clamped to [1, MAX_LIMIT]
    - Categorical values must exist in the live filter options snapshot,
      which is only requested when a categorical filter is present
    """

    def __init__(self, options_provider: OptionsProvider) -> None:
        self._options_provider = options_provider

    def parse(self, raw: Mapping[str, Any]) -> CarFilters:
        """
        Parse raw values keyed by wire name.

        Args:
            raw: Query-string style mapping (strings, or numbers from JSON)

        Returns:
            Normalized CarFilters

        Raises:
            FilterValidationError: With one entry per invalid field
        """
        errors: list[dict[str, str]] = []

        parsed = CarFilters(
            search=_text(raw.get("search")),
            min_price=self._decimal(raw, "minPrice", errors),
            max_price=self._decimal(raw, "maxPrice", errors),
            min_mileage=self._integer(raw, "minMileage", errors),
            max_mileage=self._integer(raw, "maxMileage", errors),
            min_age=self._integer(raw, "minAge", errors),
            max_age=self._integer(raw, "maxAge", errors),
            sort_by=self._sort_by(raw, errors),
            page=self._page(raw, errors),
            limit=self._limit(raw, errors),
        )
        errors.extend(parsed.range_errors())

        categorical = {name: _text(raw.get(name)) for name in _CATEGORICAL_FIELDS}
        if any(categorical.values()):
            parsed = self._with_categories(parsed, categorical, errors)

        if errors:
            raise FilterValidationError(
                "Invalid search filters: " + "; ".join(error["message"] for error in errors),
                errors=errors,
            )
        return parsed

    def _with_categories(
        self,
        parsed: CarFilters,
        values: dict[str, str | None],
        errors: list[dict[str, str]],
    ) -> CarFilters:
        options = self._options_provider()

        def unknown(field: str, value: str) -> None:
            errors.append(
                {
                    "field": field,
                    "message": f"Unknown {field} '{value}'",
                    "code": "UNKNOWN_VALUE",
                }
            )

        make = color = body_type = fuel_type = transmission = None

        if values["make"]:
            found_make = options.find_make(values["make"])
            if found_make is None:
                unknown("make", values["make"])
            else:
                make = found_make.slug
        if values["color"]:
            found_color = options.find_color(values["color"])
            if found_color is None:
                unknown("color", values["color"])
            else:
                color = found_color.slug
        if values["bodyType"]:
            body_type = options.match_body_type(values["bodyType"])
            if body_type is None:
                unknown("bodyType", values["bodyType"])
        if values["fuelType"]:
            fuel_type = options.match_fuel_type(values["fuelType"])
            if fuel_type is None:
                unknown("fuelType", values["fuelType"])
        if values["transmission"]:
            transmission = options.match_transmission(values["transmission"])
            if transmission is None:
                unknown("transmission", values["transmission"])

        return CarFilters(
            search=parsed.search,
            make=make,
            color=color,
            body_type=body_type,
            fuel_type=fuel_type,
            transmission=transmission,
            min_price=parsed.min_price,
            max_price=parsed.max_price,
            min_mileage=parsed.min_mileage,
            max_mileage=parsed.max_mileage,
            min_age=parsed.min_age,
            max_age=parsed.max_age,
            sort_by=parsed.sort_by,
            page=parsed.page,
            limit=parsed.limit,
        )

    @staticmethod
    def _decimal(
        raw: Mapping[str, Any], field: str, errors: list[dict[str, str]]
    ) -> Decimal | None:
        value = raw.get(field)
        if isinstance(value, str):
            value = _text(value)
        if value is None:
            return None

        try:
            if isinstance(value, bool):
                raise TypeError(field)
            # str() keeps floats from JSON at their printed precision
            number = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            errors.append(
                {
                    "field": field,
                    "message": f"{field} must be a valid decimal: {value}",
                    "code": "INVALID_NUMBER",
                }
            )
            return None

        if not number.is_finite():
            errors.append(
                {
                    "field": field,
                    "message": f"{field} must be a finite number",
                    "code": "INVALID_NUMBER",
                }
            )
            return None
        if number and abs(number.adjusted()) > MAX_DECIMAL_EXPONENT:
            errors.append(
                {
                    "field": field,
                    "message": f"{field} is out of range: {value}",
                    "code": "OUT_OF_RANGE",
                }
            )
            return None
        return number

    @staticmethod
    def _integer(
        raw: Mapping[str, Any], field: str, errors: list[dict[str, str]]
    ) -> int | None:
        value = raw.get(field)
        if isinstance(value, str):
            value = _text(value)
        if value is None:
            return None

        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and _INTEGER.fullmatch(value):
            return int(value)

        errors.append(
            {
                "field": field,
                "message": f"{field} must be a whole number: {value}",
                "code": "INVALID_INTEGER",
            }
        )
        return None

    def _page(self, raw: Mapping[str, Any], errors: list[dict[str, str]]) -> int:
        page = self._integer(raw, "page", errors)
        if page is None or page < 1:
            return DEFAULT_PAGE
        return page

    def _limit(self, raw: Mapping[str, Any], errors: list[dict[str, str]]) -> int:
        limit = self._integer(raw, "limit", errors)
        if limit is None:
            return DEFAULT_LIMIT
        return min(max(limit, 1), MAX_LIMIT)

    @staticmethod
    def _sort_by(raw: Mapping[str, Any], errors: list[dict[str, str]]) -> SortBy:
        value = _text(raw.get("sortBy"))
        if value is None:
            return SortBy.NEWEST
        try:
            return SortBy(value)
        except ValueError:
            allowed = ", ".join(option.value for option in SortBy)
            errors.append(
                {
                    "field": "sortBy",
                    "message": f"sortBy must be one of: {allowed}",
                    "code": "INVALID_SORT",
                }
            )
            return SortBy.NEWEST


def normalize_car_filters(
    raw: Mapping[str, Any], options_provider: OptionsProvider
) -> ActionResponse[CarFilters]:
    """Envelope-returning variant of FilterNormalizer.parse (never raises on bad input)."""
    return run_action(
        lambda: FilterNormalizer(options_provider).parse(raw),
        name="normalize_car_filters",
    )


def encode_car_filters(filters: CarFilters) -> str:
    """
    Encode a filter set as a query string.

    Absent values and defaults (newest, page 1, default limit) are left out,
    so parsing the result yields an equal CarFilters.
    """
    params: list[tuple[str, str]] = []
    for attribute, wire_name in WIRE_FIELDS:
        value = getattr(filters, attribute)
        if value is None:
            continue
        if attribute == "sort_by":
            if value is SortBy.NEWEST:
                continue
            value = value.value
        if attribute == "page" and value == DEFAULT_PAGE:
            continue
        if attribute == "limit" and value == DEFAULT_LIMIT:
            continue
        params.append((wire_name, str(value)))
    return urlencode(params)


def car_search_url(filters: CarFilters) -> str:
    """Listing page URL for a filter set, e.g. ``/cars?make=toyota``."""
    query = encode_car_filters(filters)
    return f"{CARS_PATH}?{query}" if query else CARS_PATH
