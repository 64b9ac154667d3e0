"""QoS directives raised by a service to steer caller retry behavior.

``QosException`` has exactly three variants. Callers dispatch on them with
structural pattern matching::

    match exc:
        case Throttle(retry_after):
            ...
        case RetryOther(redirect_to):
            ...
        case Unavailable():
            ...
"""

from __future__ import annotations

from datetime import timedelta
from typing import ClassVar
from urllib.parse import urlsplit

from packages.rpc_errors.errors.args import Arg, SafeArg, UnsafeArg, render_value
from packages.rpc_errors.errors.loggable import SafeLoggable

from .reasons import QosReason

THROTTLE_REASON = QosReason("qos-throttle")
RETRY_OTHER_REASON = QosReason("qos-retry-other")
UNAVAILABLE_REASON = QosReason("qos-unavailable")


class QosException(SafeLoggable, Exception):
    """Base of the QoS directives; use the factory classmethods to build one."""

    DEFAULT_REASON: ClassVar[QosReason]

    def __init__(
        self,
        message: str,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if type(self) is QosException:
            raise TypeError("QosException must be one of Throttle, RetryOther or Unavailable")
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause
        self._message = message
        self._reason = reason if reason is not None else self.DEFAULT_REASON

    @classmethod
    def throttle(
        cls,
        retry_after: timedelta | None = None,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> Throttle:
        """Ask the caller to back off, optionally for ``retry_after``."""
        return Throttle(retry_after, reason=reason, cause=cause)

    @classmethod
    def retry_other(
        cls,
        redirect_to: str,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> RetryOther:
        """Ask the caller to retry against another absolute URL."""
        return RetryOther(redirect_to, reason=reason, cause=cause)

    @classmethod
    def unavailable(
        cls,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> Unavailable:
        """Signal that the server cannot handle requests right now."""
        return Unavailable(reason=reason, cause=cause)

    @property
    def reason(self) -> QosReason:
        """Return the reason this directive was produced for."""
        return self._reason

    @property
    def message(self) -> str:
        return self._message

    @property
    def arguments(self) -> tuple[Arg, ...]:
        return self._variant_arguments() + (
            SafeArg("reason", self._reason.reason),
            SafeArg("retryHint", self._reason.retry_hint),
            SafeArg("dueTo", self._reason.due_to),
        )

    def _variant_arguments(self) -> tuple[Arg, ...]:
        return ()

    def __str__(self) -> str:
        return self._message


class Throttle(QosException):
    """Caller should reduce its request rate."""

    DEFAULT_REASON = THROTTLE_REASON
    __match_args__ = ("retry_after",)

    def __init__(
        self,
        retry_after: timedelta | None = None,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            "Suggesting request throttling with optional retryAfter duration: "
            f"{render_value(retry_after)}",
            reason=reason,
            cause=cause,
        )
        self._retry_after = retry_after

    @property
    def retry_after(self) -> timedelta | None:
        """Return how long the caller should wait, if the server said so."""
        return self._retry_after

    @property
    def log_message(self) -> str:
        return "Suggested request throttling"

    def _variant_arguments(self) -> tuple[Arg, ...]:
        return (SafeArg("retryAfter", self._retry_after),)


class RetryOther(QosException):
    """Caller should retry the request against ``redirect_to``."""

    DEFAULT_REASON = RETRY_OTHER_REASON
    __match_args__ = ("redirect_to",)

    def __init__(
        self,
        redirect_to: str,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> None:
        parts = urlsplit(redirect_to)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"redirect_to must be an absolute URL: {redirect_to!r}")
        super().__init__(
            f"Suggesting request retry against: {redirect_to}",
            reason=reason,
            cause=cause,
        )
        self._redirect_to = redirect_to

    @property
    def redirect_to(self) -> str:
        """Return the URL the caller should retry against."""
        return self._redirect_to

    @property
    def log_message(self) -> str:
        return "RetryOther: Requesting retry"

    def _variant_arguments(self) -> tuple[Arg, ...]:
        return (UnsafeArg("redirectTo", self._redirect_to),)


class Unavailable(QosException):
    """Server cannot handle requests; caller may retry elsewhere or later."""

    DEFAULT_REASON = UNAVAILABLE_REASON
    __match_args__ = ()

    def __init__(
        self,
        *,
        reason: QosReason | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__("Server unavailable", reason=reason, cause=cause)

    @property
    def log_message(self) -> str:
        return "Server unavailable"
