"""Assertion helpers for tests that exercise faults.

Each helper raises ``AssertionError`` with a message naming the mismatching
field, so they read naturally inside pytest tests.
"""

from __future__ import annotations

from typing import Any, Iterable

from packages.rpc_errors.errors import Arg, ErrorType, Fault, RemoteException
from packages.rpc_errors.qos import QosException, QosReason


def _split_args(args: Iterable[Arg]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split arguments into safe and unsafe name/value maps.

    Duplicate names within one classification fail the assertion.
    """
    safe: dict[str, Any] = {}
    unsafe: dict[str, Any] = {}
    for arg in args:
        target, label = (safe, "safe") if arg.safe else (unsafe, "unsafe")
        if arg.name in target:
            raise AssertionError(
                f"Duplicate {label} arg name '{arg.name}', first value: "
                f"{target[arg.name]}, second value: {arg.value}"
            )
        target[arg.name] = arg.value
    return safe, unsafe


def assert_service_exception(
    exc: BaseException,
    *,
    error_type: ErrorType | None = None,
    error_instance_id: str | None = None,
    args: Iterable[Arg] | None = None,
) -> Fault:
    """Assert ``exc`` is a server-side fault with the given attributes.

    ``args`` compares safe and unsafe arguments separately and ignores order.
    """
    if not isinstance(exc, Fault):
        raise AssertionError(f"Expected a service fault, but found {type(exc).__name__}")
    if error_type is not None and exc.error_type != error_type:
        raise AssertionError(
            f"Expected ErrorType to be {error_type}, but found {exc.error_type}"
        )
    if error_instance_id is not None and exc.error_instance_id != error_instance_id:
        raise AssertionError(
            f"Expected error instance id to be {error_instance_id}, "
            f"but found {exc.error_instance_id}"
        )
    if args is not None:
        expected_safe, expected_unsafe = _split_args(args)
        actual_safe, actual_unsafe = _split_args(exc.arguments)
        if expected_safe != actual_safe:
            raise AssertionError(
                f"Expected safe args to be {expected_safe}, but found {actual_safe}"
            )
        if expected_unsafe != actual_unsafe:
            raise AssertionError(
                f"Expected unsafe args to be {expected_unsafe}, but found {actual_unsafe}"
            )
    return exc


def assert_remote_exception_generated_from(
    exc: BaseException, error_type: ErrorType
) -> RemoteException:
    """Assert ``exc`` is the remote reconstruction of a fault of ``error_type``."""
    if not isinstance(exc, RemoteException):
        raise AssertionError(f"Expected a RemoteException, but found {type(exc).__name__}")
    for field_name, expected, actual in (
        ("error code", error_type.code.value, exc.error.error_code),
        ("error name", error_type.name, exc.error.error_name),
        ("error status", error_type.http_error_code, exc.status),
    ):
        if expected != actual:
            raise AssertionError(
                f"Expected {field_name} to be {expected}, but found {actual}; "
                f"remote exception: {exc}"
            )
    return exc


def assert_qos_exception_has_reason(exc: BaseException, reason: QosReason) -> QosException:
    """Assert ``exc`` is a QoS directive carrying exactly ``reason``."""
    if not isinstance(exc, QosException):
        raise AssertionError(f"Expected a QosException, but found {type(exc).__name__}")
    if exc.reason != reason:
        raise AssertionError(f"Expected QosReason to be {reason!r}, but found {exc.reason!r}")
    return exc
