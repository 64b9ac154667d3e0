"""Fault conveyance over HTTP: httpx response decoding and FastAPI handlers."""

from .client import ClientFault, exception_from_response, raise_for_remote_error
from .headers import (
    HTTPX_HEADERS,
    LOCATION_HEADER,
    RETRY_AFTER_HEADER,
    STARLETTE_HEADERS,
    HttpxHeadersAdapter,
    StarletteHeadersAdapter,
)
from .server import as_fault, error_response, install_exception_handlers, qos_response

__all__ = [
    "ClientFault",
    "HTTPX_HEADERS",
    "HttpxHeadersAdapter",
    "LOCATION_HEADER",
    "RETRY_AFTER_HEADER",
    "STARLETTE_HEADERS",
    "StarletteHeadersAdapter",
    "as_fault",
    "error_response",
    "exception_from_response",
    "install_exception_handlers",
    "qos_response",
    "raise_for_remote_error",
]
