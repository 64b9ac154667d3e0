"""QoS reasons and their response header codec.

A ``QosReason`` travels on the wire only through two optional headers,
``Qos-Due-To`` and ``Qos-Retry-Hint``. The free-text reason itself is never
sent: a decoded reason always carries ``DEFAULT_CLIENT_REASON`` instead of the
sender's value, and a reason with neither attribute set writes no headers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, MutableMapping, Protocol, TypeVar

DUE_TO_HEADER = "Qos-Due-To"
RETRY_HINT_HEADER = "Qos-Retry-Hint"
CLIENT_REASON = "client-qos-response"

_REASON_PATTERN = re.compile(r"[a-z0-9-]{1,50}")

ResponseT = TypeVar("ResponseT")
ResponseContraT = TypeVar("ResponseContraT", contravariant=True)


class InvalidQosReasonError(ValueError):
    """QoS reason string violates the reason grammar."""


class DueTo(str, Enum):
    """What a QoS response is attributed to."""

    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str) -> DueTo | None:
        """Return the member for a header value, ignoring case; unknown values yield ``None``."""
        return _parse_member(cls, value)

    def __str__(self) -> str:
        return self.value


class RetryHint(str, Enum):
    """How a caller should treat the QoS response when retrying."""

    PROPAGATE = "propagate"
    DO_NOT_RETRY = "do-not-retry"

    @classmethod
    def parse(cls, value: str) -> RetryHint | None:
        """Return the member for a header value, ignoring case; unknown values yield ``None``."""
        return _parse_member(cls, value)

    def __str__(self) -> str:
        return self.value


EnumT = TypeVar("EnumT", DueTo, RetryHint)


def _parse_member(enum_type: type[EnumT], value: str) -> EnumT | None:
    lowered = value.lower()
    for member in enum_type:
        if member.value == lowered:
            return member
    return None


@dataclass(frozen=True)
class QosReason:
    """Safe, low-cardinality description of why a QoS response was produced.

    ``reason`` must be 1 to 50 characters of lowercase letters, digits and
    hyphens. ``str(reason)`` returns the bare reason string.
    """

    reason: str
    retry_hint: RetryHint | None = None
    due_to: DueTo | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.reason, str) or _REASON_PATTERN.fullmatch(self.reason) is None:
            raise InvalidQosReasonError(
                "Reason must be at most 50 characters, and only contain lowercase "
                "letters, numbers, and hyphens (-)."
            )

    def __str__(self) -> str:
        return self.reason


DEFAULT_CLIENT_REASON = QosReason(CLIENT_REASON)


class QosResponseEncodingAdapter(Protocol[ResponseContraT]):
    """Writes one header onto a response of some transport."""

    def set_header(self, response: ResponseContraT, name: str, value: str) -> None: ...


class QosResponseDecodingAdapter(Protocol[ResponseContraT]):
    """Reads the first value of one header from a response, if present."""

    def get_first_header(self, response: ResponseContraT, name: str) -> str | None: ...


class MappingHeaderAdapter:
    """Header adapter over plain mappings with case-insensitive lookup."""

    def set_header(self, response: MutableMapping[str, str], name: str, value: str) -> None:
        response[name] = value

    def get_first_header(self, response: Mapping[str, str], name: str) -> str | None:
        lowered = name.lower()
        for key, value in response.items():
            if key.lower() == lowered:
                return value
        return None


def encode_to_response(
    reason: QosReason,
    response: ResponseT,
    adapter: QosResponseEncodingAdapter[ResponseT],
) -> None:
    """Write the headers for the attributes ``reason`` sets; nothing otherwise."""
    if reason.due_to is not None:
        adapter.set_header(response, DUE_TO_HEADER, reason.due_to.value)
    if reason.retry_hint is not None:
        adapter.set_header(response, RETRY_HINT_HEADER, reason.retry_hint.value)


def parse_from_response(
    response: ResponseT,
    adapter: QosResponseDecodingAdapter[ResponseT],
) -> QosReason:
    """Decode the QoS reason a response carries.

    Returns ``DEFAULT_CLIENT_REASON`` itself when neither header is present.
    Unrecognized header values are dropped.
    """
    due_to = adapter.get_first_header(response, DUE_TO_HEADER)
    retry_hint = adapter.get_first_header(response, RETRY_HINT_HEADER)
    if due_to is None and retry_hint is None:
        return DEFAULT_CLIENT_REASON
    return QosReason(
        CLIENT_REASON,
        retry_hint=None if retry_hint is None else RetryHint.parse(retry_hint),
        due_to=None if due_to is None else DueTo.parse(due_to),
    )
