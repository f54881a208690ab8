"""FastAPI exception handlers.

Use cases report expected failures through the envelope, so these handlers
only cover what escapes it: request parsing errors, domain errors raised
outside a use case, and bugs. Every handler answers with the failure
envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from car_dealership.domain.errors import DomainError
from car_dealership.domain.results import Failure
from car_dealership.entrypoints.http.mappers.envelope_mapper import (
    status_code_for,
    to_failure_response,
)
from car_dealership.use_cases.envelope import GENERIC_FAILURE_MESSAGE

logger = logging.getLogger(__name__)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle domain errors raised outside the envelope.

    Args:
        request: FastAPI request object
        exc: Domain error to handle

    Returns:
        Failure envelope with the status code for the error code
    """
    status_code = status_code_for(exc.error_code)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            exc_info=exc,
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                "path": request.url.path,
                "method": request.method,
            },
        )
        # Never leak store/internal details to callers
        return to_failure_response(Failure(error=GENERIC_FAILURE_MESSAGE, code=exc.error_code))

    logger.info(
        "Client error",
        extra={
            "error_code": exc.error_code,
            "error_message": exc.message,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return to_failure_response(Failure.from_error(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors.

    Examples:
        - PATCH body without ``status``
        - Body that is not JSON

    Args:
        request: FastAPI request object
        exc: Pydantic validation error

    Returns:
        Failure envelope with 422 status and field errors
    """
    errors = []

    for error in exc.errors():
        # Filter out 'body' and 'query' prefixes
        field_path = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query"))

        errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "code": error["type"],
            }
        )

    logger.info(
        "Request validation error",
        extra={
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return to_failure_response(
        Failure(error="Invalid request parameters", code="VALIDATION_ERROR", errors=errors)
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors.

    These should be rare and indicate bugs or infrastructure issues.
    Always logged with full traceback for investigation.
    """
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": GENERIC_FAILURE_MESSAGE,
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    This should be called once during app initialization.
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
