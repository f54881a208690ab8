"""Reference enumerations shared by entities, filters and the wire format.

Values are persisted and transmitted verbatim: renaming one is a breaking
change that needs a data migration.
"""

from __future__ import annotations

from enum import Enum


class CarStatus(str, Enum):
    """Lifecycle of a car listing."""

    AVAILABLE = "AVAILABLE"
    SOLD = "SOLD"
    UNAVAILABLE = "UNAVAILABLE"

    def can_transition_to(self, target: CarStatus) -> bool:
        return target in _CAR_STATUS_TRANSITIONS[self]


class BookingStatus(str, Enum):
    """Status of a test drive booking."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def is_terminal(self) -> bool:
        return not _BOOKING_STATUS_TRANSITIONS[self]

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in _BOOKING_STATUS_TRANSITIONS[self]


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class DayOfWeek(str, Enum):
    """Keys for dealership working hours, one entry per day."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


_CAR_STATUS_TRANSITIONS: dict[CarStatus, frozenset[CarStatus]] = {
    CarStatus.AVAILABLE: frozenset({CarStatus.SOLD, CarStatus.UNAVAILABLE}),
    CarStatus.UNAVAILABLE: frozenset({CarStatus.AVAILABLE}),
    CarStatus.SOLD: frozenset(),
}

_BOOKING_STATUS_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}
