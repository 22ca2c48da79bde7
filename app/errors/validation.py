"""Validation errors and request validation handling for FastAPI."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class ValidationError(BaseAppError):
    """Raised when post input is missing, malformed or out of range."""

    public_fields = ("errors",)

    def __init__(self, errors: list[str]) -> None:
        super().__init__(detail=", ".join(errors), status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors


async def request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle FastAPI request validation errors with a cleaner response format.

    Covers malformed JSON bodies, wrongly typed fields and unparsable query
    parameters such as ``?page=abc``.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with a 400 status and formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'/'query'
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        # Convert non-serializable context values (like ValueError) to strings
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )


validation_exception_handler = create_exception_handler(logger)
