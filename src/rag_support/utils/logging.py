"""Structured logging configuration for rag-support."""

import logging
import sys

_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "asctime",
    }
)

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        ]

        base_msg = super().format(record)
        if extras:
            return f"{base_msg} | {' '.join(extras)}"
        return base_msg


def setup_logger(
    name: str,
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Set up a logger with structured formatting.

    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, the LOG_LEVEL setting is used
        format_string: Custom format string. If None, uses default format

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        # Imported lazily so that importing a module never requires a valid .env
        from rag_support.config import get_settings

        level = get_settings().log_level

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        StructuredFormatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger

