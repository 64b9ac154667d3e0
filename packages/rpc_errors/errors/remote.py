"""Client-side reconstructions of faults received from a remote service."""

from __future__ import annotations

from functools import cached_property

from packages.rpc_errors.logging import get_logger, log_context

from .args import Arg, SafeArg, UnsafeArg
from .instance_ids import InstanceIdentified
from .loggable import SafeLoggable
from .wire import MissingFieldError, SerializableError, SerializableErrorParseError

_LOGGER = get_logger(__name__)

_ERROR_INSTANCE_ID = "errorInstanceId"
_ERROR_CODE = "errorCode"
_ERROR_NAME = "errorName"


def _stable_message(label: str, error: SerializableError) -> str:
    """Render ``"<label>: <code>[ (<name>)]"``, omitting the name when it equals the code."""
    if error.error_code == error.error_name:
        return f"{label}: {error.error_code}"
    return f"{label}: {error.error_code} ({error.error_name})"


class RemoteException(InstanceIdentified, SafeLoggable, Exception):
    """Fault thrown by a remote process that caused an RPC call to fail.

    Arguments recorded on the producing service are not re-attached here; only
    the identifying fields are exposed. ``parameter_args`` recovers the wire
    parameters, all classified unsafe since safety does not survive the wire.
    """

    def __init__(self, error: SerializableError, status: int) -> None:
        super().__init__()
        self._error = error
        self._status = status
        self._stable_message = _stable_message("RemoteException", error)
        self._arguments: tuple[Arg, ...] = (
            SafeArg(_ERROR_INSTANCE_ID, error.error_instance_id),
            UnsafeArg(_ERROR_NAME, error.error_name),
            SafeArg(_ERROR_CODE, error.error_code),
        )

    @property
    def error(self) -> SerializableError:
        """Return the wire error sent by the remote service."""
        return self._error

    @property
    def status(self) -> int:
        """Return the status of the response that conveyed the error."""
        return self._status

    @property
    def error_instance_id(self) -> str:
        return self._error.error_instance_id

    @cached_property
    def message(self) -> str:
        """Return the full message including every wire parameter."""
        message = f"{self._stable_message} with instance ID {self._error.error_instance_id}"
        if self._error.parameters:
            rendered = ", ".join(
                f"{name}={value}" for name, value in self._error.parameters.items()
            )
            message = f"{message}: {{{rendered}}}"
        return message

    @property
    def log_message(self) -> str:
        return self._stable_message

    @property
    def arguments(self) -> tuple[Arg, ...]:
        return self._arguments

    def parameter_args(self) -> tuple[UnsafeArg, ...]:
        """Return the wire parameters as unsafe arguments."""
        return tuple(
            UnsafeArg(name, value) for name, value in self._error.parameters.items()
        )

    def __str__(self) -> str:
        return self.message


class ConjureDefinedRemoteException(RemoteException):
    """Remote fault whose error type is declared in an API definition."""


class CheckedRemoteException(InstanceIdentified, SafeLoggable, Exception):
    """Remote counterpart of ``CheckedServiceException``; must be subclassed."""

    def __init__(self, error: SerializableError, status: int) -> None:
        if type(self) is CheckedRemoteException:
            raise TypeError("CheckedRemoteException must be subclassed")
        stable_message = _stable_message(type(self).__name__, error)
        message = f"{stable_message} with instance ID {error.error_instance_id}"
        super().__init__(message)
        self._error = error
        self._status = status
        self._stable_message = stable_message
        self._message = message

    @property
    def error(self) -> SerializableError:
        """Return the wire error sent by the remote service."""
        return self._error

    @property
    def status(self) -> int:
        """Return the status of the response that conveyed the error."""
        return self._status

    @property
    def error_instance_id(self) -> str:
        return self._error.error_instance_id

    @property
    def message(self) -> str:
        return self._message

    @property
    def log_message(self) -> str:
        return self._stable_message

    @property
    def arguments(self) -> tuple[Arg, ...]:
        return (SafeArg(_ERROR_INSTANCE_ID, self._error.error_instance_id),)

    def __str__(self) -> str:
        return self._message


class UnknownRemoteException(SafeLoggable, Exception):
    """Failed response whose body is not a recognizable wire error."""

    def __init__(self, status: int, body: str) -> None:
        message = f"Response status: {status}"
        super().__init__(message)
        self._status = status
        self._body = body
        self._message = message

    @property
    def status(self) -> int:
        """Return the status of the failed response."""
        return self._status

    @property
    def body(self) -> str:
        """Return the raw response body."""
        return self._body

    @property
    def message(self) -> str:
        return self._message

    @property
    def log_message(self) -> str:
        return self._message

    @property
    def arguments(self) -> tuple[Arg, ...]:
        return (SafeArg("status", self._status), UnsafeArg("body", self._body))

    def __str__(self) -> str:
        return self._message


def remote_exception_from_response(
    status: int, body: str | bytes
) -> RemoteException | UnknownRemoteException:
    """Build the client-side fault for one failed response.

    Bodies that do not parse into a ``SerializableError`` yield an
    ``UnknownRemoteException`` carrying the raw body.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        error = SerializableError.parse(text)
    except (MissingFieldError, SerializableErrorParseError) as exc:
        with log_context({"status": status, "reason": type(exc).__name__}):
            _LOGGER.warning("Unparseable remote error response body")
        return UnknownRemoteException(status, text)
    return RemoteException(error, status)
