"""Decode failed httpx responses into remote faults and QoS directives."""

from __future__ import annotations

from datetime import timedelta
from urllib.parse import urlsplit

import httpx

from packages.rpc_errors.config import RpcErrorsSettings
from packages.rpc_errors.errors import (
    RemoteException,
    UnknownRemoteException,
    remote_exception_from_response,
)
from packages.rpc_errors.logging import get_logger, log_safe_exception
from packages.rpc_errors.qos import QosException, parse_from_response

from .headers import HTTPX_HEADERS, LOCATION_HEADER, RETRY_AFTER_HEADER

_LOGGER = get_logger(__name__)

ClientFault = RemoteException | UnknownRemoteException | QosException


def _response_text(response: httpx.Response) -> str:
    """Return response text, or empty text for an unread streaming response."""
    try:
        return response.text
    except httpx.ResponseNotRead:
        return ""


def _retry_after(response: httpx.Response) -> timedelta | None:
    """Parse a delay-seconds ``Retry-After``; HTTP dates and junk yield ``None``."""
    value = HTTPX_HEADERS.get_first_header(response, RETRY_AFTER_HEADER)
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return timedelta(seconds=seconds) if seconds >= 0 else None


def _redirect_target(response: httpx.Response) -> str | None:
    """Return the absolute ``Location`` target, resolved against the request URL."""
    location = HTTPX_HEADERS.get_first_header(response, LOCATION_HEADER)
    if not location:
        return None
    try:
        target = str(response.request.url.join(location))
    except RuntimeError:
        # Response was built without a request.
        target = location
    parts = urlsplit(target)
    return target if parts.scheme and parts.netloc else None


def exception_from_response(response: httpx.Response) -> ClientFault:
    """Return the fault a failed response conveys.

    429, 503 and 308-with-``Location`` are QoS directives whose reason comes
    from the QoS headers. Every other status is decoded from the body.
    """
    status = response.status_code
    location = _redirect_target(response)
    match status:
        case 429:
            return QosException.throttle(
                _retry_after(response),
                reason=parse_from_response(response, HTTPX_HEADERS),
            )
        case 308 if location:
            return QosException.retry_other(
                location, reason=parse_from_response(response, HTTPX_HEADERS)
            )
        case 503:
            return QosException.unavailable(
                reason=parse_from_response(response, HTTPX_HEADERS)
            )
        case _:
            return remote_exception_from_response(status, _response_text(response))


def raise_for_remote_error(
    response: httpx.Response, *, settings: RpcErrorsSettings | None = None
) -> httpx.Response:
    """Raise the conveyed fault for an error or redirect response; else return it."""
    if not response.is_error and response.status_code != 308:
        return response
    fault = exception_from_response(response)
    resolved = settings if settings is not None else RpcErrorsSettings()
    level = (
        resolved.http.server_error_log_level
        if response.status_code >= 500
        else resolved.http.client_error_log_level
    )
    log_safe_exception(_LOGGER, fault, level=level)
    raise fault
