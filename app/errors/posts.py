from logging import getLogger

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from app.configs import INVALID_POST_ID, POST_NOT_FOUND, file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class NotFoundError(BaseAppError):
    """Exception raised when no post has the requested ID."""

    def __init__(
        self,
        detail: str = POST_NOT_FOUND,
    ) -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class MalformedIdError(BaseAppError):
    """Exception raised when a post ID is not a valid UUID."""

    def __init__(
        self,
        detail: str = INVALID_POST_ID,
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


posts_exception_handler = create_exception_handler(logger)
