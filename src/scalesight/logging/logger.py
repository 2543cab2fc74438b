"""Structured logging configuration for scalesight using structlog.

Provides structured logging with context preservation on top of the
standard library logging handlers.
"""

import logging
import os
import sys
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    add_caller_info: bool = False,
    colorize: bool = True,
) -> None:
    """Configure structured logging for scalesight.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by SCALESIGHT_DISABLE_CONSOLE_LOGGING env var)
        add_timestamp: Add timestamps to logs
        add_caller_info: Add caller information
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv("SCALESIGHT_DISABLE_CONSOLE_LOGGING") == "1":
        console = False

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if add_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        # stdout is reserved for command output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )

    global _logging_initialized
    _logging_initialized = True


# Global state for lazy initialization
_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    if _logging_initialized:
        return

    try:
        settings = get_settings()
        log_file = None
        if settings.log_path is not None:
            log_file = settings.log_path / f"scalesight_{datetime.now().strftime('%Y%m%d')}.log"
        setup_logging(
            level="DEBUG" if settings.debug_mode else "INFO",
            log_file=log_file,
            structured=not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (OSError, ValueError):
        # Invalid settings or unwritable log path: fall back to console logging
        setup_logging(level="INFO", structured=False)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class LogContext:
    """Context manager for temporary log context.

    Values are bound to the current context, so every logger used inside the
    block (including those of nested calls) carries them until exit.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, **kwargs) -> None:
        """Initialize with logger and context.

        Args:
            logger: Logger instance
            **kwargs: Context key-value pairs
        """
        self.logger = logger
        self.context = kwargs
        self._tokens: Mapping[str, Any] = {}

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        """Enter context and bind values."""
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context and restore the previous values."""
        structlog.contextvars.reset_contextvars(**self._tokens)
