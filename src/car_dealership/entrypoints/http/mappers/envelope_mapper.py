"""Translate ActionResponse envelopes into HTTP responses."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from car_dealership.domain.results import ActionResponse, Failure
from car_dealership.entrypoints.http.error_responses import FailureResponse

T = TypeVar("T")

# Error code -> HTTP status; unknown codes are client errors
STATUS_CODES: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "STORE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(code: str | None) -> int:
    return STATUS_CODES.get(code or "", status.HTTP_400_BAD_REQUEST)


def to_failure_response(failure: Failure) -> JSONResponse:
    body = FailureResponse(error=failure.error, code=failure.code, errors=failure.errors)
    return JSONResponse(
        status_code=status_code_for(failure.code),
        content=jsonable_encoder(body, exclude_none=True),
    )


def to_json_response(result: ActionResponse[T], to_dto: Callable[[T], Any]) -> JSONResponse:
    """
    Render an envelope.

    Args:
        result: Use case outcome
        to_dto: Maps the success payload to its REST DTO(s)

    Returns:
        200 with ``{"success": true, "data": ...}`` (camelCase keys), or the
        failure envelope with the status code for its error code
    """
    if isinstance(result, Failure):
        return to_failure_response(result)

    content = {"success": True, "data": to_dto(result.data)}
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=jsonable_encoder(content, by_alias=True),
    )
