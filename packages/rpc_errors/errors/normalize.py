"""Normalization of arbitrary Python exceptions into service faults."""

from __future__ import annotations

from .args import SafeArg, UnsafeArg
from .service import ServiceException
from .types import ErrorType

# Checked in order; the first matching base class wins.
_BUILTIN_MAPPING: tuple[tuple[type[BaseException], ErrorType], ...] = (
    (PermissionError, ErrorType.PERMISSION_DENIED),
    (TimeoutError, ErrorType.TIMEOUT),
    (KeyError, ErrorType.NOT_FOUND),
    (ValueError, ErrorType.INVALID_ARGUMENT),
)


def error_type_for_exception(exc: BaseException) -> ErrorType:
    """Return the built-in error type a plain exception maps to."""
    for exception_type, error_type in _BUILTIN_MAPPING:
        if isinstance(exc, exception_type):
            return error_type
    return ErrorType.INTERNAL


def exception_to_service_exception(exc: BaseException) -> ServiceException:
    """Normalize a Python exception into a ``ServiceException``.

    Service faults are returned unchanged. Everything else is wrapped with the
    original as cause, so an identified fault further down the chain keeps its
    error instance id. The exception text is attached as an unsafe argument.
    """
    if isinstance(exc, ServiceException):
        return exc
    return ServiceException(
        error_type_for_exception(exc),
        SafeArg("exceptionType", type(exc).__name__),
        UnsafeArg("exceptionMessage", str(exc)) if str(exc) else None,
        cause=exc,
    )
