"""Unit tests for re-raising remote faults and normalizing exceptions."""

from __future__ import annotations

import pytest

from packages.rpc_errors.errors import (
    ErrorCode,
    ErrorType,
    RemoteException,
    SafeArg,
    SerializableError,
    ServiceException,
    UnsafeArg,
    exception_to_service_exception,
    has_error_type,
    propagate_if_error_type_equals,
)
from packages.rpc_errors.testing import assert_service_exception

ERROR_TYPE = ErrorType.create(ErrorCode.CUSTOM_CLIENT, "Namespace:MyDesc")
ERROR_INSTANCE_ID = "85afe977"


def _remote(code: str, name: str, **parameters: str) -> RemoteException:
    error = SerializableError(
        error_code=code,
        error_name=name,
        error_instance_id=ERROR_INSTANCE_ID,
        parameters=parameters,
    )
    return RemoteException(error, 400)


def test_propagates_when_error_type_matches() -> None:
    """A matching remote fault should be re-raised as a service fault."""
    remote = _remote("CUSTOM_CLIENT", "Namespace:MyDesc", arg="value")

    with pytest.raises(ServiceException) as exc_info:
        propagate_if_error_type_equals(remote, ERROR_TYPE)

    assert_service_exception(
        exc_info.value,
        error_type=ERROR_TYPE,
        error_instance_id=ERROR_INSTANCE_ID,
        args=[UnsafeArg("arg", "value")],
    )
    assert exc_info.value.__cause__ is remote


def test_propagates_builtin_error_types() -> None:
    """Default namespace types should match their remote counterparts."""
    remote = _remote("INVALID_ARGUMENT", "Default:InvalidArgument")

    with pytest.raises(ServiceException) as exc_info:
        propagate_if_error_type_equals(remote, ErrorType.INVALID_ARGUMENT)

    assert exc_info.value.error_type == ErrorType.INVALID_ARGUMENT


def test_does_not_propagate_on_mismatch() -> None:
    """A different error type should leave the remote fault alone."""
    remote = _remote("CUSTOM_CLIENT", "Namespace:MyDesc")

    propagate_if_error_type_equals(remote, ErrorType.INVALID_ARGUMENT)


def test_invalid_remote_error_type_never_matches() -> None:
    """Unknown codes or malformed names should be treated as a mismatch."""
    assert not has_error_type(_remote("INVALID", "Invalid"), ErrorType.INVALID_ARGUMENT)
    assert not has_error_type(_remote("CUSTOM_CLIENT", "invalid"), ERROR_TYPE)

    propagate_if_error_type_equals(_remote("INVALID", "Invalid"), ErrorType.INVALID_ARGUMENT)


@pytest.mark.parametrize(
    ("exc", "error_type"),
    [
        (ValueError("bad"), ErrorType.INVALID_ARGUMENT),
        (KeyError("missing"), ErrorType.NOT_FOUND),
        (PermissionError("nope"), ErrorType.PERMISSION_DENIED),
        (TimeoutError("slow"), ErrorType.TIMEOUT),
        (RuntimeError("boom"), ErrorType.INTERNAL),
    ],
)
def test_exception_to_service_exception_maps_builtins(
    exc: Exception, error_type: ErrorType
) -> None:
    """Plain Python exceptions should map to the matching built-in type."""
    fault = exception_to_service_exception(exc)

    assert fault.error_type == error_type
    assert fault.__cause__ is exc
    assert SafeArg("exceptionType", type(exc).__name__) in fault.arguments


def test_exception_to_service_exception_returns_service_faults_unchanged() -> None:
    """Existing service faults should pass through as-is."""
    fault = ServiceException(ErrorType.CONFLICT)

    assert exception_to_service_exception(fault) is fault


def test_exception_to_service_exception_keeps_remote_instance_id() -> None:
    """Wrapping a remote fault should keep its instance id."""
    remote = _remote("INTERNAL", "Default:Internal")

    fault = exception_to_service_exception(remote)

    assert fault.error_type == ErrorType.INTERNAL
    assert fault.error_instance_id == ERROR_INSTANCE_ID


def test_exception_to_service_exception_omits_empty_messages() -> None:
    """Exceptions without text should not add an empty message argument."""
    fault = exception_to_service_exception(RuntimeError())

    assert fault.arguments == (SafeArg("exceptionType", "RuntimeError"),)
