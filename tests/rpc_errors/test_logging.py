"""Unit tests for structured logging and safe fault logging."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest

from packages.rpc_errors.config import LoggingSettings
from packages.rpc_errors.errors import ErrorType, SafeArg, ServiceException, UnsafeArg
from packages.rpc_errors.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_context,
    get_logger,
    log_context,
    log_safe_exception,
    safe_fields,
)
from packages.rpc_errors.logging.config import ContextFilter, JsonFormatter, PlainFormatter
from packages.rpc_errors.qos import DueTo, QosException, QosReason


@pytest.fixture(autouse=True)
def _reset_context() -> Iterator[None]:
    """Isolate the logging context between tests."""
    clear_context()
    yield
    clear_context()


def _capture(formatter: logging.Formatter) -> tuple[logging.Logger, io.StringIO]:
    """Return a non-propagating logger writing to an in-memory stream."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(ContextFilter())
    handler.setFormatter(formatter)
    logger = logging.getLogger(f"rpc_errors.tests.{id(stream)}")
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger, stream


def test_bind_context_stringifies_and_skips_none() -> None:
    """Bound values should be strings and None values ignored."""
    bind_context(status=500, missing=None)

    assert get_context() == {"status": "500"}


def test_log_context_restores_previous_values() -> None:
    """Context bound in a block should be removed after the block."""
    bind_context(service="outer")
    with log_context({"error_code": "INTERNAL"}):
        assert get_context() == {"service": "outer", "error_code": "INTERNAL"}

    assert get_context() == {"service": "outer"}


def test_safe_fields_include_only_safe_arguments() -> None:
    """Unsafe argument values should never appear in the logged fields."""
    exc = ServiceException(ErrorType.CONFLICT, SafeArg("widgetId", "w-1"), UnsafeArg("owner", "alice"))

    fields = safe_fields(exc)

    assert fields["error_instance_id"] == exc.error_instance_id
    assert fields["error_code"] == "CONFLICT"
    assert fields["error_name"] == "Default:Conflict"
    assert fields["arg.widgetId"] == "w-1"
    assert "alice" not in fields.values()


def test_log_safe_exception_emits_json_without_unsafe_values() -> None:
    """JSON output should carry the log message and safe fields only."""
    logger, stream = _capture(JsonFormatter())
    exc = ServiceException(ErrorType.CONFLICT, SafeArg("widgetId", "w-1"), UnsafeArg("owner", "alice"))

    log_safe_exception(logger, exc, level="WARNING")

    payload = json.loads(stream.getvalue())
    assert payload["level"] == "WARNING"
    assert payload["message"] == "ServiceException: CONFLICT (Default:Conflict)"
    assert payload["arg.widgetId"] == "w-1"
    assert payload["error_instance_id"] == exc.error_instance_id
    assert "alice" not in stream.getvalue()


def test_log_safe_exception_handles_plain_exceptions() -> None:
    """Exceptions without a log message should log their type name."""
    logger, stream = _capture(PlainFormatter())

    log_safe_exception(logger, RuntimeError("secret"))

    output = stream.getvalue()
    assert "RuntimeError" in output
    assert "secret" not in output
    assert "exception_type=RuntimeError" in output


def test_configure_logging_installs_single_stdout_handler(capsys: pytest.CaptureFixture[str]) -> None:
    """Repeated configuration should not stack handlers."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        configure_logging(level="INFO", json_output=True, service="widgets", environment="test")
        configure_logging(level="INFO", json_output=True, service="widgets", environment="test")
        assert len(root.handlers) == 1

        get_logger("rpc_errors.tests").info("hello")
        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["message"] == "hello"
        assert payload["service"] == "widgets"
        assert payload["environment"] == "test"
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_from_settings_uses_plain_output(capsys: pytest.CaptureFixture[str]) -> None:
    """Resolved settings should drive level, format and seeded context."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        settings = LoggingSettings(level="WARNING", json_output=False, service="widgets", environment="prod")
        configure_logging_from_settings(settings)

        get_logger("rpc_errors.tests").info("dropped")
        get_logger("rpc_errors.tests").warning("kept")
        output = capsys.readouterr().out
        assert "dropped" not in output
        assert "WARNING rpc_errors.tests kept" in output
        assert "environment=prod service=widgets" in output
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_json_context_does_not_shadow_core_keys() -> None:
    """A bound field named like a core key should not replace it."""
    logger, stream = _capture(JsonFormatter())

    with log_context({"message": "spoofed"}):
        logger.info("real")

    assert json.loads(stream.getvalue())["message"] == "real"


def test_safe_fields_describe_qos_reasons() -> None:
    """QoS directives should log their reason and its set attributes."""
    exc = QosException.unavailable(reason=QosReason("overloaded", due_to=DueTo.CUSTOM))

    fields = safe_fields(exc)

    assert fields["qos_reason"] == "overloaded"
    assert fields["qos_due_to"] == "custom"
    assert "qos_retry_hint" not in fields
