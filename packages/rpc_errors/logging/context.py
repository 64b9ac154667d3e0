"""Per-task logging context carried by a ``ContextVar``.

Fields bound here appear on every record emitted while they are bound, which
is how the safe fields of a fault reach the formatter without being passed to
each logging call.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Mapping

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar(
    "rpc_errors_log_context", default={}
)


def _stringify(values: Mapping[str, object]) -> dict[str, str]:
    """Render values as strings, dropping ``None``."""
    return {str(key): str(value) for key, value in values.items() if value is not None}


def get_context() -> dict[str, str]:
    """Return a copy of the fields currently bound."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> Token[dict[str, str]]:
    """Merge ``values`` into the current context; ``None`` values are skipped.

    Returns the token that restores the previous context.
    """
    return _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **_stringify(values)})


def clear_context(*keys: str) -> None:
    """Drop the named fields, or every field when none are named."""
    if not keys:
        _LOG_CONTEXT.set({})
        return
    _LOG_CONTEXT.set(
        {key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys}
    )


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of the block only."""
    token = _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **_stringify(values)})
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)
