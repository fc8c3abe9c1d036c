"""
Logger configuration.

Console logging with ISO timestamps, configured once at application start.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

NOISY_LOGGERS = (
    "urllib3",
    "httpx",
    "httpcore",
    "jieba",
    "pinecone",
    "google_genai",
    "sqlalchemy.engine",
)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    root_logger.setLevel(logging.getLevelName(level.upper()))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
