"""Named diagnostic arguments tagged with a logging-safety classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Arg:
    """One named value attached to a fault for diagnostics."""

    name: str
    value: Any

    safe: ClassVar[bool] = False

    def __str__(self) -> str:
        return f"{self.name}={render_value(self.value)}"


@dataclass(frozen=True)
class SafeArg(Arg):
    """Argument whose value may be logged outside a trusted boundary."""

    safe: ClassVar[bool] = True


@dataclass(frozen=True)
class UnsafeArg(Arg):
    """Argument whose value must stay within a trusted boundary."""

    safe: ClassVar[bool] = False


def render_value(value: object) -> str:
    """Render one argument value as the string used in messages and on the wire."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_args(args: tuple[Arg, ...]) -> str:
    """Render arguments as ``{name1=value1, name2=value2}`` in insertion order."""
    return "{" + ", ".join(str(arg) for arg in args) + "}"
