"""Exceptions raised for programming mistakes, never for domain failures.

Domain failures travel as data inside a Result. The exceptions here signal
misuse of the API itself: a missing binder, a binder that returns something
other than a Result, or reading the value of a failed result.
"""

from __future__ import annotations

from typing import Any


class ReasonedException(Exception):
    """Base class for all exceptions raised by reasoned."""

    __slots__ = ()


class ArgumentError(ReasonedException, ValueError):
    """Invalid argument passed to a combinator or factory."""

    __slots__ = ("argument",)

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        super().__init__(f"{argument}: {message}")


class ResultValueError(ReasonedException, RuntimeError):
    """Value accessed on a failed ValueResult."""

    __slots__ = ("errors",)

    def __init__(self, errors: tuple[Any, ...]) -> None:
        self.errors = errors
        joined = "; ".join(e.message for e in errors)
        super().__init__(f"value of a failed result is undefined: {joined}")


def require_callable(func: object, argument: str) -> None:
    """Raise ArgumentError unless func is callable."""
    if func is None:
        raise ArgumentError(argument, "must not be None")
    if not callable(func):
        raise ArgumentError(argument, f"expected a callable, got {type(func).__name__}")
