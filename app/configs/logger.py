"""
Logging configuration.

Modules log through plain standard-library loggers obtained with
``file_logger(getLogger(__name__))``. The root logger gets a console handler
rendered by structlog:

- Pretty console output with rich tracebacks for development
- JSON output for staging/production
- Control characters escaped to prevent log injection

When ``LOG_TO_FILE`` is enabled, ``file_logger`` also attaches a rotating
JSON file handler to the module logger.

Examples
--------
>>> from logging import getLogger
>>> from app.configs import file_logger
>>> logger = file_logger(getLogger(__name__))
>>> logger.info("Post created: 6f1c...")
"""

from logging import INFO, Filter, Logger, LogRecord, StreamHandler, root
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter
from structlog import configure
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import JSONRenderer, add_log_level, format_exc_info
from structlog.processors import json as struct_json
from structlog.stdlib import (
    BoundLogger,
    LoggerFactory,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from app.configs.settings import settings
from app.utils.helpers import today_str

# Characters to sanitize to prevent log injection
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})

FILE_MAX_BYTES = 5 * 1024 * 1024
FILE_BACKUP_COUNT = 5


def sanitize_log_message(message: str) -> str:
    r"""
    Remove control characters and sanitize log messages.

    Args:
        message: Raw log message that might contain injection attempts.

    Returns:
        Sanitized message with control characters escaped or removed.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return str(message).translate(CONTROL_CHARS)


class SanitizeFilter(Filter):
    """Escape control characters in the rendered message of every record."""

    def filter(self, record: LogRecord) -> bool:
        record.msg = sanitize_log_message(record.getMessage())
        record.args = None
        return True


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Add a local timestamp to the log entry.

    Args:
        logger: The wrapped logger instance.
        method_name: The name of the logging method being called.
        event_dict: The event dictionary being built.

    Returns:
        Updated event dictionary with timestamp.
    """
    event_dict["timestamp"] = today_str()
    return event_dict


def get_renderer(*, colors: bool = True) -> Processor:
    """
    Get the final structlog renderer for the current environment.

    Args:
        colors: Whether to enable colors in ConsoleRenderer.

    Returns:
        Console renderer for development, JSON renderer otherwise.
    """
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer(serializer=struct_json.dumps)


def configure_logging() -> None:
    """Configure structured console logging for the application."""
    # Clear any existing root handlers to prevent duplicates on reload
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            add_logger_name,
            add_log_level,
            format_exc_info,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.addFilter(SanitizeFilter())
    console_handler.setFormatter(
        ProcessorFormatter(
            processor=get_renderer(colors=True),
            foreign_pre_chain=[add_logger_name, add_log_level, add_timestamp],
        ),
    )
    root.addHandler(console_handler)


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating JSON file handler to a logger.

    Does nothing unless ``LOG_TO_FILE`` is enabled, and never attaches the
    same file twice.

    Args:
        logger: Logger to extend.

    Returns:
        The same logger, for inline use.
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = Path(settings.LOG_FILE).resolve()
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == str(log_file):
            return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=FILE_MAX_BYTES,
        backupCount=FILE_BACKUP_COUNT,
    )
    file_handler.setLevel(INFO)
    file_handler.addFilter(SanitizeFilter())
    file_handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(file_handler)
    return logger
