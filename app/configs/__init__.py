from app.configs.logger import configure_logging, file_logger
from app.configs.settings import (
    DEFAULT_ERROR_MESSAGE,
    INVALID_POST_ID,
    POST_NOT_FOUND,
    Settings,
    settings,
)

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "INVALID_POST_ID",
    "POST_NOT_FOUND",
    "Settings",
    "configure_logging",
    "file_logger",
    "settings",
]
