"""
Logging utilities for request-scoped structured logging.

User-supplied values (questions, filenames, ids) are truncated and
stringified before they reach a log record.

Dependencies: logging (stdlib)
System role: Logging helper functions for the HTTP and service layers
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert any value to a bounded string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value
        elif isinstance(value, (bytes, bytearray)):
            text = f"{type(value).__name__}({len(value)} bytes)"
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)

        if len(text) > max_length:
            return text[:max_length] + f"... (truncated, {len(text)} total)"
        return text
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message with structured context, converting every value safely.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value context
    """
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update({"error_type": type(exc).__name__, "error_msg": safe_log_value(str(exc))})
    logger.error(message, exc_info=exc, extra=safe_context)
