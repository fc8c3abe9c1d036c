"""
Observability package.

Exports:
  - configure_logging: Root logger setup
  - safe_log_value, log_with_context, log_exception_with_context: Logging helpers
"""

from finmind.observability.log_utils import log_exception_with_context, log_with_context, safe_log_value
from finmind.observability.logger import configure_logging

__all__ = ["configure_logging", "log_exception_with_context", "log_with_context", "safe_log_value"]
