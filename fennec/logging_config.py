"""
Logging configuration for Fennec.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs for
tracing a caller's requests across log events.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Fennec.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if name.startswith("fennec"):
        return structlog.get_logger(name)
    return structlog.get_logger(f"fennec.{name}")


# Convenience functions for common logging patterns

def log_request_dispatch(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    elapsed_ms: float,
    status_code: Optional[int] = None,
    error: Optional[BaseException] = None,
    **kwargs: Any,
) -> None:
    """
    Log one request/response exchange.

    Successful exchanges are logged at debug level regardless of status code;
    a transport failure or cancellation is logged as a warning.

    Args:
        logger: Logger instance
        method: HTTP method
        path: Request path, including the query string
        elapsed_ms: Wall time of the exchange in milliseconds
        status_code: Response status code, when a response was received
        error: Exception raised by the exchange, if any
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "request_dispatch",
        "method": method,
        "path": path,
        "elapsed_ms": round(elapsed_ms, 2),
    }

    if status_code is not None:
        log_data["status_code"] = status_code

    log_data.update(kwargs)

    if error is not None:
        log_data["error"] = str(error)
        log_data["error_type"] = type(error).__name__
        logger.warning("request_failed", **log_data)
    else:
        logger.debug("request_completed", **log_data)


def log_configuration_loaded(
    logger: structlog.stdlib.BoundLogger,
    source: str,
    **kwargs: Any,
) -> None:
    """
    Log where the active configuration came from.

    Args:
        logger: Logger instance
        source: Configuration file path, or "defaults"
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "configuration_loaded",
        "source": source,
    }
    log_data.update(kwargs)
    logger.info("configuration_loaded", **log_data)
