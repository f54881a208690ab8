"""Domain error classes.

Protocol-agnostic errors that represent business failures.
Use cases turn them into ``Failure`` envelopes; the HTTP layer only maps
the error code to a status code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a human-readable message, a stable error code and optional
    context that is safe to log.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed, out-of-range or unknown input.

    Examples:
        - minPrice > maxPrice
        - make slug not present in the current inventory
        - sortBy outside the closed set

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field', 'message' and 'code'
                   Example: [{"field": "minPrice", "message": "Must be >= 0", "code": "NEGATIVE_VALUE"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Car with ID not found
        - Car make or colour slug doesn't exist

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Car", "CarMake")
            identifier: Resource identifier (e.g., UUID, slug)
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Examples:
        - Status transition not allowed (SOLD -> AVAILABLE)
        - Duplicate slug

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class StoreError(DomainError):
    """Persistence layer unreachable or a query failed.

    Raised by adapters. The message is logged, never shown to callers.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "STORE_ERROR"


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
