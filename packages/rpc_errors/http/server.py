"""Render faults as FastAPI responses using the wire error schema."""

from __future__ import annotations

import logging
import math

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from packages.rpc_errors.config import RpcErrorsSettings
from packages.rpc_errors.errors import (
    CheckedRemoteException,
    ErrorType,
    Fault,
    RemoteException,
    SerializableError,
    ServiceException,
    UnknownRemoteException,
)
from packages.rpc_errors.logging import get_logger, log_safe_exception
from packages.rpc_errors.qos import (
    QosException,
    RetryOther,
    Throttle,
    Unavailable,
    encode_to_response,
)

from .headers import LOCATION_HEADER, RETRY_AFTER_HEADER, STARLETTE_HEADERS

_LOGGER = get_logger(__name__)

_HANDLED_TYPES: tuple[type[Exception], ...] = (
    Fault,
    RemoteException,
    CheckedRemoteException,
    UnknownRemoteException,
    QosException,
    Exception,
)


def as_fault(exc: BaseException) -> Fault:
    """Return the fault ``exc`` is answered with.

    Anything that is not already a server-side fault becomes ``INTERNAL`` with
    ``exc`` as its cause, so a wrapped remote fault keeps its instance id.
    """
    if isinstance(exc, Fault):
        return exc
    return ServiceException(ErrorType.INTERNAL, cause=exc)


def qos_response(exc: QosException) -> Response:
    """Return the empty-bodied response for one QoS directive."""
    match exc:
        case Throttle(retry_after):
            response = Response(status_code=429)
            if retry_after is not None:
                response.headers[RETRY_AFTER_HEADER] = str(
                    math.ceil(retry_after.total_seconds())
                )
        case RetryOther(redirect_to):
            response = Response(status_code=308)
            response.headers[LOCATION_HEADER] = redirect_to
        case Unavailable():
            response = Response(status_code=503)
        case _:
            raise TypeError(f"Unsupported QoS directive: {type(exc).__name__}")
    encode_to_response(exc.reason, response, STARLETTE_HEADERS)
    return response


def error_response(
    exc: BaseException, settings: RpcErrorsSettings | None = None
) -> Response:
    """Render ``exc`` as the response a client receives and log it safely.

    Remote authentication and authorization failures are passed through with
    their original status and body; other remote faults become ``INTERNAL``.
    """
    resolved = settings if settings is not None else RpcErrorsSettings()
    match exc:
        case QosException():
            log_safe_exception(_LOGGER, exc, level=logging.DEBUG)
            return qos_response(exc)
        case RemoteException(status=401 | 403):
            log_safe_exception(
                _LOGGER, exc, level=resolved.http.client_error_log_level
            )
            return JSONResponse(content=exc.error.to_wire(), status_code=exc.status)

    fault = as_fault(exc)
    status = fault.http_status
    log_safe_exception(
        _LOGGER,
        fault,
        level=(
            resolved.http.server_error_log_level
            if status >= 500
            else resolved.http.client_error_log_level
        ),
    )
    error = SerializableError.for_exception(
        fault, include_unsafe=resolved.http.include_unsafe_parameters
    )
    return JSONResponse(content=error.to_wire(), status_code=status)


def install_exception_handlers(
    app: FastAPI, settings: RpcErrorsSettings | None = None
) -> FastAPI:
    """Register ``error_response`` for every fault family and unexpected errors.

    Starlette answers the ``Exception`` handler from its outermost middleware
    and then re-raises, so unexpected errors still reach the server log.
    """
    resolved = settings if settings is not None else RpcErrorsSettings()

    async def _handle(request: Request, exc: Exception) -> Response:
        return error_response(exc, resolved)

    for exception_type in _HANDLED_TYPES:
        app.add_exception_handler(exception_type, _handle)
    return app
