"""Quality-of-service directives and the header codec for their reasons."""

from .exceptions import (
    RETRY_OTHER_REASON,
    THROTTLE_REASON,
    UNAVAILABLE_REASON,
    QosException,
    RetryOther,
    Throttle,
    Unavailable,
)
from .reasons import (
    CLIENT_REASON,
    DEFAULT_CLIENT_REASON,
    DUE_TO_HEADER,
    RETRY_HINT_HEADER,
    DueTo,
    InvalidQosReasonError,
    MappingHeaderAdapter,
    QosReason,
    QosResponseDecodingAdapter,
    QosResponseEncodingAdapter,
    RetryHint,
    encode_to_response,
    parse_from_response,
)

__all__ = [
    "CLIENT_REASON",
    "DEFAULT_CLIENT_REASON",
    "DUE_TO_HEADER",
    "DueTo",
    "InvalidQosReasonError",
    "MappingHeaderAdapter",
    "QosException",
    "QosReason",
    "QosResponseDecodingAdapter",
    "QosResponseEncodingAdapter",
    "RETRY_HINT_HEADER",
    "RETRY_OTHER_REASON",
    "RetryHint",
    "RetryOther",
    "THROTTLE_REASON",
    "Throttle",
    "UNAVAILABLE_REASON",
    "Unavailable",
    "encode_to_response",
    "parse_from_response",
]
