"""Error instance id resolution across causal exception chains.

An error instance id correlates one occurrence of a fault across logs, wire
payloads and wrapping exceptions. A fault raised while handling another fault
inherits the id of the nearest identified fault in its cause chain; otherwise a
fresh random UUID is minted.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from packages.rpc_errors.logging import get_logger

_LOGGER = get_logger(__name__)


class InstanceIdentified(ABC):
    """Tag for fault kinds that own an error instance id.

    Every class carrying this tag is recognized during id inheritance; adding
    a new fault kind means inheriting from this mixin.
    """

    @property
    @abstractmethod
    def error_instance_id(self) -> str:
        """Return the id of this fault occurrence."""


def new_error_instance_id() -> str:
    """Return a fresh lowercase UUIDv4 string."""
    return str(uuid.uuid4())


def is_error_instance_id(value: str) -> bool:
    """Return ``True`` when ``value`` is a canonical lowercase UUID string."""
    try:
        parsed = uuid.UUID(value)
    except (TypeError, ValueError):
        return False
    return str(parsed) == value


def resolve_error_instance_id(cause: BaseException | None) -> str:
    """Return the id inherited from ``cause`` or a newly generated one.

    Walks the cause chain once, keyed by object identity so cyclic chains
    terminate. Never raises.
    """
    seen: set[int] = set()
    node = cause
    while node is not None:
        if id(node) in seen:
            _LOGGER.debug("Cyclic exception cause chain; generating new error instance id")
            break
        seen.add(id(node))
        if isinstance(node, InstanceIdentified):
            return node.error_instance_id
        node = _next_cause(node)
    return new_error_instance_id()


def _next_cause(error: BaseException) -> BaseException | None:
    """Return the explicit cause, else the implicit context unless suppressed."""
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__
