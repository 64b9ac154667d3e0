"""Typed faults, their wire representation and client-side reconstruction."""

from .args import Arg, SafeArg, UnsafeArg, render_args, render_value
from .codes import ErrorCode
from .instance_ids import (
    InstanceIdentified,
    is_error_instance_id,
    new_error_instance_id,
    resolve_error_instance_id,
)
from .loggable import SafeLoggable
from .normalize import error_type_for_exception, exception_to_service_exception
from .remote import (
    CheckedRemoteException,
    ConjureDefinedRemoteException,
    RemoteException,
    UnknownRemoteException,
    remote_exception_from_response,
)
from .service import (
    CheckedServiceException,
    ConjureDefinedError,
    Fault,
    FieldMissingException,
    ServiceException,
)
from .throwables import has_error_type, propagate_if_error_type_equals, remote_error_type
from .types import ErrorType, InvalidErrorNameError
from .wire import (
    ConjureError,
    MissingFieldError,
    SerializableConjureDefinedError,
    SerializableConjureErrorParameter,
    SerializableError,
    SerializableErrorParseError,
)

__all__ = [
    "Arg",
    "CheckedRemoteException",
    "CheckedServiceException",
    "ConjureDefinedError",
    "ConjureDefinedRemoteException",
    "ConjureError",
    "ErrorCode",
    "ErrorType",
    "Fault",
    "FieldMissingException",
    "InstanceIdentified",
    "InvalidErrorNameError",
    "MissingFieldError",
    "RemoteException",
    "SafeArg",
    "SafeLoggable",
    "SerializableConjureDefinedError",
    "SerializableConjureErrorParameter",
    "SerializableError",
    "SerializableErrorParseError",
    "ServiceException",
    "UnknownRemoteException",
    "UnsafeArg",
    "error_type_for_exception",
    "exception_to_service_exception",
    "has_error_type",
    "is_error_instance_id",
    "new_error_instance_id",
    "propagate_if_error_type_equals",
    "remote_error_type",
    "remote_exception_from_response",
    "render_args",
    "render_value",
    "resolve_error_instance_id",
]
