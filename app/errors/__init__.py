from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseInitializationError,
    DuplicateEntryError,
    StorageError,
    storage_exception_handler,
)
from app.errors.posts import MalformedIdError, NotFoundError, posts_exception_handler
from app.errors.validation import (
    ValidationError,
    request_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "MalformedIdError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    "create_exception_handler",
    "posts_exception_handler",
    "request_validation_exception_handler",
    "storage_exception_handler",
    "validation_exception_handler",
]
