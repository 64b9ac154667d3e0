"""Helpers for re-raising remote faults inside a service."""

from __future__ import annotations

from .args import UnsafeArg
from .codes import ErrorCode
from .remote import RemoteException
from .service import ServiceException
from .types import ErrorType


def remote_error_type(remote: RemoteException) -> ErrorType:
    """Rebuild the ``ErrorType`` carried by a remote fault.

    Raises ``ValueError`` when the remote code or name is not valid locally.
    """
    return ErrorType(ErrorCode(remote.error.error_code), remote.error.error_name)


def has_error_type(remote: RemoteException, error_type: ErrorType) -> bool:
    """Return ``True`` when ``remote`` carries exactly ``error_type``."""
    try:
        return remote_error_type(remote) == error_type
    except ValueError:
        return False


def propagate_if_error_type_equals(
    remote: RemoteException, error_type: ErrorType
) -> None:
    """Re-raise ``remote`` as a ``ServiceException`` iff it matches ``error_type``.

    The new fault inherits the remote error instance id through its cause and
    carries every remote parameter as an unsafe argument::

        try:
            client.some_method()
        except RemoteException as exc:
            propagate_if_error_type_equals(exc, REMOTE_ERROR_TYPE)
            raise
    """
    if has_error_type(remote, error_type):
        args: tuple[UnsafeArg, ...] = remote.parameter_args()
        raise ServiceException(error_type, *args, cause=remote)
