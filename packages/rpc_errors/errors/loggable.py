"""Contract for exceptions that separate a safe log message from their arguments."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .args import Arg


def _rebuild(cls: type[BaseException], args: tuple[Any, ...]) -> BaseException:
    """Recreate an exception without running its constructor."""
    exc = cls.__new__(cls)
    exc.args = args
    return exc


class SafeLoggable(ABC):
    """Exception that can be logged without leaking unsafe values.

    ``log_message`` never contains argument values. Structured loggers emit it
    alongside the safe entries of ``arguments``; plain ``str(exc)`` renders the
    full, unsafe message.
    """

    @property
    @abstractmethod
    def log_message(self) -> str:
        """Return the message without any argument values."""

    @property
    @abstractmethod
    def arguments(self) -> tuple[Arg, ...]:
        """Return the diagnostic arguments in insertion order."""

    @property
    def safe_arguments(self) -> tuple[Arg, ...]:
        """Return only the arguments classified as safe."""
        return tuple(arg for arg in self.arguments if arg.safe)

    def __reduce__(self) -> tuple[Any, ...]:
        """Pickle the built state so a copy keeps its instance id and messages."""
        return (_rebuild, (type(self), getattr(self, "args", ())), dict(self.__dict__))
