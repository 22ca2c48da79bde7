from logging import getLogger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import DEFAULT_ERROR_MESSAGE, file_logger
from app.errors.base import BaseAppError
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class StorageError(BaseAppError):
    """Base exception for unexpected persistence failures."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(StorageError):
    """Exception raised when database connection fails."""

    def __init__(
        self,
        detail: str = "Failed to connect to the database",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DatabaseInitializationError(StorageError):
    """Exception raised when database initialization fails."""

    def __init__(
        self,
        detail: str = "Failed to initialize database",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DuplicateEntryError(StorageError):
    """Exception raised when a unique constraint rejects a write."""

    def __init__(
        self,
        detail: str = "A record with this value already exists",
        field: str | None = None,
    ) -> None:
        super().__init__(detail, HTTP_409_CONFLICT)
        self.field = field


async def storage_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Log the storage failure detail and answer with a generic message.

    Args:
        request: The incoming request.
        exc: The StorageError raised while serving it.

    Returns:
        ORJSONResponse with a 500 status and no internal detail.
    """
    detail = getattr(exc, "detail", str(exc))
    logger.error(
        f"Storage error for ip: {host(request)} at endpoint "
        f"{request.method} {request.url.path}: {detail}",
    )
    return ORJSONResponse(
        content={"detail": DEFAULT_ERROR_MESSAGE},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
    )
