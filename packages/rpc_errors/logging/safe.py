"""Log faults without leaking unsafe argument values.

Only the stable log message, the safe arguments and the identifying fields of
a fault reach the log record. Faults and QoS directives are read by attribute,
so any exception can be passed; plain exceptions log their type name only.
"""

from __future__ import annotations

import logging
from typing import Any

from . import fields
from .context import log_context


def safe_fields(exc: BaseException) -> dict[str, Any]:
    """Return the structured fields that may be logged for ``exc``."""
    values: dict[str, Any] = {fields.EXCEPTION_TYPE: type(exc).__name__}
    instance_id = getattr(exc, "error_instance_id", None)
    if instance_id:
        values[fields.ERROR_INSTANCE_ID] = instance_id
    error_type = getattr(exc, "error_type", None)
    if error_type is not None:
        values[fields.ERROR_CODE] = error_type.code.value
        values[fields.ERROR_NAME] = error_type.name
    status = getattr(exc, "status", None)
    if isinstance(status, int):
        values[fields.STATUS] = status
    reason = getattr(exc, "reason", None)
    if reason is not None and hasattr(reason, "retry_hint"):
        values[fields.QOS_REASON] = str(reason)
        if reason.retry_hint is not None:
            values[fields.QOS_RETRY_HINT] = str(reason.retry_hint)
        if reason.due_to is not None:
            values[fields.QOS_DUE_TO] = str(reason.due_to)
    for arg in getattr(exc, "safe_arguments", ()):
        values[f"{fields.ARG_PREFIX}{arg.name}"] = arg.value
    return values


def log_safe_exception(
    logger: logging.Logger,
    exc: BaseException,
    *,
    level: int | str = logging.ERROR,
    include_traceback: bool = False,
) -> None:
    """Emit one record for ``exc`` carrying only safe content.

    Tracebacks render ``str(exc)``, which holds unsafe values, so they are
    opt-in.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]
    message = getattr(exc, "log_message", None) or type(exc).__name__
    with log_context(safe_fields(exc)):
        logger.log(level, message, exc_info=exc if include_traceback else None)
