"""Wrap use case outcomes in the ActionResponse envelope."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from car_dealership.domain.errors import DomainError, InternalError, StoreError
from car_dealership.domain.results import ActionResponse, Failure, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_FAILURE_MESSAGE = "The request could not be completed. Please try again later."


def run_action(action: Callable[[], T], *, name: str = "action") -> ActionResponse[T]:
    """
    Run an action and report its outcome as an envelope.

    - Expected failures (validation, not found, conflict) become a Failure
      carrying the error's own message and field details.
    - Store and internal failures are logged with full detail and become a
      Failure with a generic message.
    - Any other exception propagates to the outer boundary.

    Args:
        action: Zero-argument callable producing the success payload
        name: Operation name used in log records

    Returns:
        Success with the action's result, or Failure
    """
    try:
        return Success(action())
    except (StoreError, InternalError) as exc:
        logger.error(
            "Action failed",
            exc_info=exc,
            extra={
                "action": name,
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
            },
        )
        return Failure(error=GENERIC_FAILURE_MESSAGE, code=exc.error_code)
    except DomainError as exc:
        logger.info(
            "Action rejected",
            extra={
                "action": name,
                "error_code": exc.error_code,
                "error_message": exc.message,
            },
        )
        return Failure.from_error(exc)
