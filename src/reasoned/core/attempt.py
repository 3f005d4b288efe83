"""Try boundary: run code that may raise and turn exceptions into failed results.

This is the only place where an exception becomes a domain failure. The
exception is handed to an exception handler (default: exceptional_error)
that builds the error reason; it never escapes the boundary.

Only Exception subclasses are captured. asyncio.CancelledError,
KeyboardInterrupt and SystemExit propagate untouched.

Example:
    >>> Try(lambda: 42).value
    42
    >>> failed = Try(lambda: int("x"))
    >>> failed.errors[0].exception_type
    'ValueError'

    >>> @safe
    ... def load(path: str) -> str:
    ...     return open(path).read()
    >>> load("/missing").is_failed
    True
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from ..foundation.config import get_settings
from ..observability.logger import get_logger
from .exceptions import ArgumentError, require_callable
from .reasons import Error, ExceptionalError, exceptional_error, is_error
from .result import Result, ValueResult

P = ParamSpec("P")
T = TypeVar("T")

ExceptionHandler = Callable[[Exception], Error | ExceptionalError]


def Try(  # noqa: N802
    work: Callable[[], T | Result],
    exception_handler: ExceptionHandler | None = None,
) -> Result:
    """Run work(); a returned Result passes through, any other value becomes ValueResult.ok(value).

    Raises:
        ArgumentError: work/exception_handler not callable, work returned an
            awaitable (use try_async), or the handler returned a non-error
    """
    _validate(work, exception_handler)
    try:
        outcome = work()
    except Exception as exc:
        return _capture(exc, exception_handler)
    if inspect.isawaitable(outcome):
        if inspect.iscoroutine(outcome):
            outcome.close()
        raise ArgumentError("work", "returned an awaitable; use try_async()")
    return _wrap(outcome)


def try_async(
    work: Callable[[], Awaitable[T | Result] | T | Result],
    exception_handler: ExceptionHandler | None = None,
) -> Awaitable[Result]:
    """Async Try. work may return an awaitable or a plain value/Result.

    Arguments are validated immediately, before the returned awaitable runs.
    """
    _validate(work, exception_handler)
    return _try_async(work, exception_handler)


async def _try_async(
    work: Callable[[], Awaitable[T | Result] | T | Result],
    exception_handler: ExceptionHandler | None,
) -> Result:
    try:
        outcome = work()
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except Exception as exc:
        return _capture(exc, exception_handler)
    return _wrap(outcome)


def safe(
    func: Callable[P, Any] | None = None,
    *,
    exception_handler: ExceptionHandler | None = None,
) -> Any:
    """Decorator running every call of func through Try (or try_async for `async def`).

    Usable bare (@safe) or with arguments (@safe(exception_handler=...)).
    """
    def decorator(fn: Callable[P, Any]) -> Callable[P, Any]:
        require_callable(fn, "func")

        if inspect.iscoroutinefunction(fn):
            @wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Result:
                return await try_async(lambda: fn(*args, **kwargs), exception_handler)
            return async_wrapper

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result:
            return Try(lambda: fn(*args, **kwargs), exception_handler)
        return wrapper

    return decorator(func) if func is not None else decorator


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _validate(work: object, exception_handler: object) -> None:
    require_callable(work, "work")
    if exception_handler is not None:
        require_callable(exception_handler, "exception_handler")


def _wrap(outcome: Any) -> Result:
    return outcome if isinstance(outcome, Result) else ValueResult.ok(outcome)


def _capture(exc: Exception, exception_handler: ExceptionHandler | None) -> ValueResult[Any]:
    err = (exception_handler or exceptional_error)(exc)
    if not is_error(err):
        raise ArgumentError("exception_handler", f"must return an error reason, got {type(err).__name__}")
    if get_settings().capture.log_captured:
        get_logger("reasoned.try").debug(
            "exception captured", exception_type=type(exc).__name__, error=str(exc),
        )
    return ValueResult.fail(err)
