"""REST API envelope models.

Every endpoint answers with the same envelope shape:
``{"success": true, "data": ...}`` or
``{"success": false, "error": ..., "code": ..., "errors": [...]}``.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "minPrice",
                "message": "minPrice must be less than or equal to maxPrice",
                "code": "INVALID_RANGE",
            }
        }
    )


class SuccessResponse(BaseModel, Generic[DataT]):
    """Successful envelope; ``data`` holds the endpoint's payload."""

    success: Literal[True] = True
    data: DataT


class FailureResponse(BaseModel):
    """Failed envelope.

    ``error`` is always safe to show to end users. Store and internal
    failures carry a generic message; details only go to the logs.

    Examples:
        Not found:
            {
                "success": false,
                "error": "Car with identifier '…' not found",
                "code": "NOT_FOUND"
            }

        Validation error with multiple fields:
            {
                "success": false,
                "error": "Invalid search filters: minPrice must be less than or equal to maxPrice",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "minPrice",
                        "message": "minPrice must be less than or equal to maxPrice",
                        "code": "INVALID_RANGE"
                    }
                ]
            }
    """

    success: Literal[False] = False
    error: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": False,
                    "error": "Car with identifier '550e8400-e29b-41d4-a716-446655440000' not found",
                    "code": "NOT_FOUND",
                },
                {
                    "success": False,
                    "error": "Invalid search filters: Unknown make 'unicorn-motors'",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "make",
                            "message": "Unknown make 'unicorn-motors'",
                            "code": "UNKNOWN_VALUE",
                        }
                    ],
                },
                {
                    "success": False,
                    "error": "The request could not be completed. Please try again later.",
                    "code": "STORE_ERROR",
                },
            ]
        }
    )
