"""Result envelope returned by every use case.

An action either succeeds with data or fails with a human-readable error.
Exactly one branch exists per value, so ``data`` and ``error`` never coexist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar, Union

from car_dealership.domain.errors import DomainError, ValidationError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    data: T
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class Failure:
    error: str
    code: str = "ERROR"
    errors: list[dict[str, str]] | None = None
    success: Literal[False] = field(default=False, init=False)

    @classmethod
    def from_error(cls, exc: DomainError) -> Failure:
        """Build a failure that exposes only the error's public message."""
        errors = exc.errors if isinstance(exc, ValidationError) else None
        return cls(error=exc.message, code=exc.error_code, errors=errors)


ActionResponse = Union[Success[T], Failure]
