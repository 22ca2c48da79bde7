"""
Error base class and the shared JSON error response.

Every error body has a ``detail`` string. An error class may list extra
attributes in ``public_fields`` to send next to it, as ``ValidationError``
does with its per-field ``errors``.
"""

from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.utils.helpers import host


class BaseAppError(Exception):
    """Base exception for errors that map to an HTTP status."""

    public_fields: tuple[str, ...] = ()

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    def to_content(self) -> dict[str, Any]:
        """Response body: ``detail`` plus the declared public attributes."""
        return {"detail": self.detail} | {name: getattr(self, name) for name in self.public_fields}


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create an exception handler that answers with ``BaseAppError.to_content``.

    Args:
        logger: Logger of the module that owns the error types.

    Returns:
        A callable exception handler. Exceptions that are not
        ``BaseAppError`` are answered as a bare 500.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        error = exc if isinstance(exc, BaseAppError) else BaseAppError()
        logger.warning(
            f"{error.status_code} {error.detail} for ip: {host(request)} "
            f"at endpoint {request.method} {request.url.path}",
        )
        return ORJSONResponse(content=error.to_content(), status_code=error.status_code)

    return handler
