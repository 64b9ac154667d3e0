"""Structured stdout logging for faults.

Wraps Python's ``logging`` module with context propagation and a safe
exception logger that never renders unsafe argument values.
"""

from .config import configure_logging, configure_logging_from_settings, get_logger
from .context import bind_context, clear_context, get_context, log_context
from .safe import log_safe_exception, safe_fields

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_context",
    "get_logger",
    "log_context",
    "log_safe_exception",
    "safe_fields",
]
