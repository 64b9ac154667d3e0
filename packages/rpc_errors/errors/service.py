"""Server-side faults raised to signal a typed ``ErrorType`` to callers.

All arguments are propagated to clients through the wire representation; their
safety classification only controls what is logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .args import Arg, render_args
from .codes import ErrorCode
from .instance_ids import InstanceIdentified, resolve_error_instance_id
from .loggable import SafeLoggable
from .types import ErrorType

if TYPE_CHECKING:
    from .wire import SerializableError


class Fault(InstanceIdentified, SafeLoggable, Exception):
    """Shared construction and rendering for server-side fault families."""

    LABEL: ClassVar[str] = "ServiceException"

    def __init__(
        self,
        error_type: ErrorType,
        *args: Arg | None,
        cause: BaseException | None = None,
    ) -> None:
        arguments = tuple(arg for arg in args if arg is not None)
        log_message = render_log_message(self.LABEL, error_type)
        message = (
            f"{log_message}: {render_args(arguments)}" if arguments else log_message
        )
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause
        self._error_type = error_type
        self._arguments = arguments
        self._error_instance_id = resolve_error_instance_id(cause)
        self._log_message = log_message
        self._message = message

    @property
    def error_type(self) -> ErrorType:
        """Return the error type that gave rise to this fault."""
        return self._error_type

    @property
    def error_instance_id(self) -> str:
        return self._error_instance_id

    @property
    def http_status(self) -> int:
        """Return the HTTP status this fault is conveyed with."""
        return self._error_type.http_error_code

    @property
    def message(self) -> str:
        """Return the full message including every argument value."""
        return self._message

    @property
    def log_message(self) -> str:
        return self._log_message

    @property
    def arguments(self) -> tuple[Arg, ...]:
        return self._arguments

    def __str__(self) -> str:
        return self._message


class ServiceException(Fault):
    """Fault raised in server-side code for an ``ErrorType`` error state."""


class ConjureDefinedError(ServiceException):
    """Service fault whose error type is declared in an API definition."""


class CheckedServiceException(Fault):
    """Recoverable fault that callers are expected to handle explicitly.

    This family is deliberately not a ``ServiceException`` so a generic
    ``except ServiceException`` does not absorb it. Declare one subclass per
    API-defined error. Messages keep the ``ServiceException`` label so log
    lines stay stable across subclasses.
    """

    def __init__(
        self,
        error_type: ErrorType,
        *args: Arg | None,
        cause: BaseException | None = None,
    ) -> None:
        if type(self) is CheckedServiceException:
            raise TypeError("CheckedServiceException must be subclassed")
        super().__init__(error_type, *args, cause=cause)


class FieldMissingException(Fault):
    """Fault raised when a required request field is absent."""

    LABEL = "FieldMissingException"
    ERROR_TYPE = ErrorType.create(ErrorCode.INVALID_ARGUMENT, "Error:MissingField")

    def __init__(self, *args: Arg | None, cause: BaseException | None = None) -> None:
        super().__init__(self.ERROR_TYPE, *args, cause=cause)

    def as_serializable_error(self) -> SerializableError:
        """Return the wire representation of this fault."""
        from .wire import SerializableError

        return SerializableError.for_exception(self)


def render_log_message(label: str, error_type: ErrorType) -> str:
    """Render ``"<label>: <CODE> (<name>)"``."""
    return f"{label}: {error_type.code.value} ({error_type.name})"
