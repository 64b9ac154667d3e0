"""Error types: a code paired with a stable, namespaced error name.

``ErrorType`` instances are meant to be module-level constants. The name must
not carry runtime information; it is part of the API surface of the service
that produces it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from .codes import ErrorCode

_UPPER_CAMEL = r"(([A-Z][a-z0-9]+)+)"
_ERROR_NAME_PATTERN = re.compile(rf"{_UPPER_CAMEL}:{_UPPER_CAMEL}")
_RESERVED_NAMESPACE = "Default"


class InvalidErrorNameError(ValueError):
    """Error type name violates the grammar or uses a reserved namespace."""


@dataclass(frozen=True)
class ErrorType:
    """Immutable pairing of an ``ErrorCode`` and an error name."""

    code: ErrorCode
    name: str

    UNAUTHORIZED: ClassVar[ErrorType]
    PERMISSION_DENIED: ClassVar[ErrorType]
    INVALID_ARGUMENT: ClassVar[ErrorType]
    REQUEST_ENTITY_TOO_LARGE: ClassVar[ErrorType]
    NOT_FOUND: ClassVar[ErrorType]
    CONFLICT: ClassVar[ErrorType]
    FAILED_PRECONDITION: ClassVar[ErrorType]
    INTERNAL: ClassVar[ErrorType]
    TIMEOUT: ClassVar[ErrorType]

    def __post_init__(self) -> None:
        if not isinstance(self.code, ErrorCode):
            raise TypeError(f"ErrorType code must be an ErrorCode: {self.code!r}")
        if _ERROR_NAME_PATTERN.fullmatch(self.name) is None:
            raise InvalidErrorNameError(
                "ErrorType names must be of the form "
                f"'UpperCamelNamespace:UpperCamelName': {self.name}"
            )

    @property
    def http_error_code(self) -> int:
        """Return the HTTP status used to convey this error to clients."""
        return self.code.http_status

    @property
    def namespace(self) -> str:
        """Return the namespace portion of the error name."""
        return self.name.partition(":")[0]

    @classmethod
    def create(cls, code: ErrorCode, name: str) -> ErrorType:
        """Create a user-defined error type.

        Raises ``InvalidErrorNameError`` when the name is malformed or uses the
        ``Default`` namespace reserved for the built-in types.
        """
        error_type = cls(code=code, name=name)
        if error_type.namespace == _RESERVED_NAMESPACE:
            raise InvalidErrorNameError(
                f"Namespace must not be '{_RESERVED_NAMESPACE}' in ErrorType name: {name}"
            )
        return error_type

    def __str__(self) -> str:
        return f"{self.code.value} ({self.name})"


def _builtin(code: ErrorCode, name: str) -> ErrorType:
    """Create one built-in type; only the name grammar applies."""
    return ErrorType(code=code, name=f"{_RESERVED_NAMESPACE}:{name}")


ErrorType.UNAUTHORIZED = _builtin(ErrorCode.UNAUTHORIZED, "Unauthorized")
ErrorType.PERMISSION_DENIED = _builtin(ErrorCode.PERMISSION_DENIED, "PermissionDenied")
ErrorType.INVALID_ARGUMENT = _builtin(ErrorCode.INVALID_ARGUMENT, "InvalidArgument")
ErrorType.REQUEST_ENTITY_TOO_LARGE = _builtin(
    ErrorCode.REQUEST_ENTITY_TOO_LARGE, "RequestEntityTooLarge"
)
ErrorType.NOT_FOUND = _builtin(ErrorCode.NOT_FOUND, "NotFound")
ErrorType.CONFLICT = _builtin(ErrorCode.CONFLICT, "Conflict")
ErrorType.FAILED_PRECONDITION = _builtin(ErrorCode.FAILED_PRECONDITION, "FailedPrecondition")
ErrorType.INTERNAL = _builtin(ErrorCode.INTERNAL, "Internal")
ErrorType.TIMEOUT = _builtin(ErrorCode.TIMEOUT, "Timeout")
