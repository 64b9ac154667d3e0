"""Test helpers for asserting on faults and QoS directives."""

from .assertions import (
    assert_qos_exception_has_reason,
    assert_remote_exception_generated_from,
    assert_service_exception,
)

__all__ = [
    "assert_qos_exception_has_reason",
    "assert_remote_exception_generated_from",
    "assert_service_exception",
]
