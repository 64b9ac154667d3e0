"""Closed catalog of error codes and their HTTP status bindings.

Codes are coarse, domain-agnostic buckets. Every ``ErrorType`` is drawn from
exactly one of them; the code decides the status a fault is conveyed with.
By convention ``4xx`` codes are client errors and ``5xx`` codes are server
errors.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Fixed error codes shared by every service speaking the wire format."""

    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    REQUEST_ENTITY_TOO_LARGE = "REQUEST_ENTITY_TOO_LARGE"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    INTERNAL = "INTERNAL"
    TIMEOUT = "TIMEOUT"
    CUSTOM_CLIENT = "CUSTOM_CLIENT"
    CUSTOM_SERVER = "CUSTOM_SERVER"

    @property
    def http_status(self) -> int:
        """Return the HTTP status bound to this code."""
        return _HTTP_STATUS[self]

    def __str__(self) -> str:
        return self.value


_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.REQUEST_ENTITY_TOO_LARGE: 413,
    ErrorCode.FAILED_PRECONDITION: 500,
    ErrorCode.INTERNAL: 500,
    ErrorCode.TIMEOUT: 500,
    ErrorCode.CUSTOM_CLIENT: 400,
    ErrorCode.CUSTOM_SERVER: 500,
}
