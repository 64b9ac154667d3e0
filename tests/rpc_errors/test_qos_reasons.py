"""Unit tests for QoS reasons and their header codec."""

from __future__ import annotations

import pytest

from packages.rpc_errors.qos import (
    DEFAULT_CLIENT_REASON,
    DueTo,
    InvalidQosReasonError,
    MappingHeaderAdapter,
    QosReason,
    RetryHint,
    encode_to_response,
    parse_from_response,
)

ADAPTER = MappingHeaderAdapter()


def test_reason_without_attributes_writes_no_headers() -> None:
    """A bare reason should be invisible on the wire."""
    headers: dict[str, str] = {}

    encode_to_response(QosReason("reason"), headers, ADAPTER)

    assert headers == {}


def test_reason_with_attributes_writes_both_headers() -> None:
    """Due-to and retry-hint should each get their own header."""
    headers: dict[str, str] = {}
    reason = QosReason("reason", retry_hint=RetryHint.PROPAGATE, due_to=DueTo.CUSTOM)

    encode_to_response(reason, headers, ADAPTER)

    assert headers == {"Qos-Due-To": "custom", "Qos-Retry-Hint": "propagate"}


def test_encoding_is_sparse() -> None:
    """Only the attributes that are set should be written."""
    headers: dict[str, str] = {}

    encode_to_response(QosReason("reason", due_to=DueTo.CUSTOM), headers, ADAPTER)

    assert headers == {"Qos-Due-To": "custom"}


def test_round_trip_replaces_reason_with_client_sentinel() -> None:
    """Decoding should keep the attributes but relabel the reason."""
    headers: dict[str, str] = {}
    original = QosReason("custom", retry_hint=RetryHint.PROPAGATE, due_to=DueTo.CUSTOM)

    encode_to_response(original, headers, ADAPTER)
    recreated = parse_from_response(headers, ADAPTER)

    assert recreated != original
    assert recreated == QosReason(
        "client-qos-response", retry_hint=RetryHint.PROPAGATE, due_to=DueTo.CUSTOM
    )


def test_decoding_empty_headers_returns_shared_default() -> None:
    """No QoS headers should decode to the one shared default reason."""
    assert parse_from_response({}, ADAPTER) is DEFAULT_CLIENT_REASON
    assert str(DEFAULT_CLIENT_REASON) == "client-qos-response"


def test_decoding_drops_unknown_values() -> None:
    """Unrecognized header values should be dropped, not fatal."""
    recreated = parse_from_response(
        {"qos-due-to": "somebody-else", "QOS-RETRY-HINT": "PROPAGATE"}, ADAPTER
    )

    assert recreated == QosReason("client-qos-response", retry_hint=RetryHint.PROPAGATE)


@pytest.mark.parametrize("value", ["do-not-retry", "DO-NOT-RETRY"])
def test_decoding_reads_do_not_retry_hint(value: str) -> None:
    """The do-not-retry hint sent by other peers should be recognized."""
    recreated = parse_from_response({"Qos-Retry-Hint": value}, ADAPTER)

    assert recreated == QosReason("client-qos-response", retry_hint=RetryHint.DO_NOT_RETRY)


@pytest.mark.parametrize("member", list(DueTo))
def test_due_to_header_values_round_trip(member: DueTo) -> None:
    """Every due-to member should parse back from its header value."""
    assert DueTo.parse(member.value) is member


@pytest.mark.parametrize("member", list(RetryHint))
def test_retry_hint_header_values_round_trip(member: RetryHint) -> None:
    """Every retry-hint member should parse back from its header value."""
    assert RetryHint.parse(member.value) is member


def test_header_value_parsing_ignores_case() -> None:
    """Header values should match regardless of case."""
    assert DueTo.parse("CUSTOM") is DueTo.CUSTOM
    assert RetryHint.parse("Propagate") is RetryHint.PROPAGATE
    assert DueTo.parse("other") is None


@pytest.mark.parametrize(
    "reason",
    [
        "reason-reason-reason-reason-reason-reason-reason---",
        "reason?",
        "Reason",
        "",
    ],
)
def test_invalid_reasons_are_rejected(reason: str) -> None:
    """Reasons must be 1-50 lowercase letters, digits or hyphens."""
    with pytest.raises(InvalidQosReasonError) as exc_info:
        QosReason(reason)

    assert str(exc_info.value) == (
        "Reason must be at most 50 characters, and only contain lowercase letters, "
        "numbers, and hyphens (-)."
    )


def test_reason_str_is_bare_reason() -> None:
    """str() should return only the reason string."""
    reason = QosReason("my-reason", due_to=DueTo.CUSTOM)

    assert str(reason) == "my-reason"
