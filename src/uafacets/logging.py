"""
Structured logging configuration for uafacets.

Provides consistent JSON logging with structured fields and configurable
log levels. Classification itself never logs; only rule loading, rule
compilation and cache housekeeping do.
"""

import logging
import os
import sys
import time
from functools import wraps
from typing import Any, Callable

import structlog


def add_service_info(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add service info to log entries."""
    event_dict["service"] = "uafacets"
    return event_dict


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    show_timestamps: bool = True,
) -> None:
    """
    Configure structured logging for the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ('json' or 'console')
        show_timestamps: Whether to include timestamps
    """
    # Get configuration from environment
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    # Build processor chain
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_info,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    # Choose renderer based on format
    if format == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
        )
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


# Pre-configured loggers for different components
def parser_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for parser construction events."""
    return get_logger("uafacets.parser")


def rules_logger(section: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get logger for rule loading and compilation, optionally per section."""
    logger = get_logger("uafacets.rules")
    return logger.bind(section=section) if section else logger


def cache_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for result cache events."""
    return get_logger("uafacets.cache")


def log_execution_time(logger: structlog.stdlib.BoundLogger | None = None):
    """
    Decorator to log function execution time.

    Args:
        logger: Optional logger instance (uses default if not provided)
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.perf_counter() - start) * 1000
                _logger.debug(
                    "Function executed",
                    function=func.__qualname__,
                    duration_ms=round(duration_ms, 2),
                )
                return result
            except Exception as e:
                duration_ms = (time.perf_counter() - start) * 1000
                _logger.error(
                    "Function failed",
                    function=func.__qualname__,
                    duration_ms=round(duration_ms, 2),
                    error=str(e),
                )
                raise
        return wrapper
    return decorator


# Initialize with defaults on module load
configure_logging()
