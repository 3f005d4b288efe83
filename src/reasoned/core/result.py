"""Result and ValueResult: success/failure values carrying an ordered reason trail.

A Result is failed exactly when its trail holds at least one error reason;
success reasons never change that. ValueResult adds a payload that is only
meaningful while the result is successful.

Both types are immutable: every with_* appender returns a new value and the
receiver is left untouched, so a Result can be shared freely between
pipelines and threads.

Railway-oriented composition:
    >>> def parse(raw: str) -> ValueResult[int]:
    ...     return Ok(int(raw)) if raw.isdigit() else Fail(f"not a number: {raw}").to_result()
    >>>
    >>> result = (
    ...     Ok("42")
    ...     .bind(parse)
    ...     .bind(lambda n: Ok(n * 2).with_success("doubled"))
    ... )
    >>> result.value
    84
    >>> [s.message for s in result.successes]
    ['doubled']

Bind short-circuits: once a stage fails, later binders are never invoked
and the failing result travels to the end of the chain unchanged.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Generic, Self, TypeVar, overload

import orjson

from .exceptions import ArgumentError, ResultValueError, require_callable
from .reasons import Error, ExceptionalError, Reason, Success, _as_error, _as_success, as_errors, is_error, is_success

T = TypeVar("T")  # Value type
U = TypeVar("U")  # Mapped value type
R = TypeVar("R", bound="Result")  # Result produced by a binder

ErrorLike = str | Error | ExceptionalError | Exception
Errors = ErrorLike | Iterable[ErrorLike]

_REASON_TYPES = (Success, Error, ExceptionalError)

# Sentinel for "no value supplied"
_UNSET: Any = object()


class Result:
    """Untyped result: a success/failure flag derived from an ordered reason trail.

    Use Ok() / Fail() (or Result.ok() / Result.fail()) to construct.
    """

    __slots__ = ("_reasons",)

    def __init__(self, reasons: Iterable[Reason] = ()) -> None:
        self._reasons: tuple[Reason, ...] = tuple(reasons)

    # ─── Factories ─────────────────────────────────────────────────────

    @classmethod
    def ok(cls) -> Result:
        """Successful result with no reasons."""
        return Result()

    @classmethod
    def fail(cls, errors: Errors) -> Self:
        """Failed result holding the given error(s).

        Accepts a message, an error reason, an exception (wrapped via
        exceptional_error), or an iterable of those.
        """
        normalized = as_errors(errors)
        if not normalized:
            raise ArgumentError("errors", "at least one error is required")
        return cls(normalized)

    # ─── State ─────────────────────────────────────────────────────────

    @property
    def reasons(self) -> tuple[Reason, ...]:
        return self._reasons

    @property
    def errors(self) -> tuple[Error | ExceptionalError, ...]:
        return tuple(r for r in self._reasons if is_error(r))  # type: ignore[misc]

    @property
    def successes(self) -> tuple[Success, ...]:
        return tuple(r for r in self._reasons if is_success(r))  # type: ignore[misc]

    @property
    def is_failed(self) -> bool:
        return any(is_error(r) for r in self._reasons)

    @property
    def is_success(self) -> bool:
        return not self.is_failed

    def has_error(self, match: type | Callable[[Error | ExceptionalError], bool] | None = None) -> bool:
        """Check for an error (searching nested causes) matching a reason type or predicate."""
        if match is None:
            return self.is_failed
        test = (lambda e: isinstance(e, match)) if isinstance(match, type) else match
        return any(test(e) for e in _walk_errors(self.errors))

    def has_success(self, match: Callable[[Success], bool] | None = None) -> bool:
        return any(match is None or match(s) for s in self.successes)

    def has_exception(self, exc_type: type[BaseException] = Exception) -> bool:
        """Check whether any captured exception (searching nested causes) is an exc_type."""
        return any(
            isinstance(e, ExceptionalError) and isinstance(e.exception, exc_type)
            for e in _walk_errors(self.errors)
        )

    # ─── Appenders (return new results) ────────────────────────────────

    def with_reason(self, reason: Reason) -> Self:
        return self.with_reasons((reason,))

    def with_reasons(self, reasons: Iterable[Reason]) -> Self:
        """Append reasons, preserving their order."""
        added = tuple(reasons)
        for reason in added:
            if not isinstance(reason, _REASON_TYPES):
                raise ArgumentError("reasons", f"expected a reason, got {type(reason).__name__}")
        return self._replace((*self._reasons, *added))

    def with_success(self, success: str | Success) -> Self:
        return self.with_reasons((_as_success(success),))

    def with_successes(self, successes: Iterable[str | Success]) -> Self:
        return self.with_reasons(tuple(_as_success(s) for s in successes))

    def with_error(self, error: ErrorLike) -> Self:
        return self.with_reasons((_as_error(error),))

    def with_errors(self, errors: Iterable[ErrorLike]) -> Self:
        return self.with_reasons(as_errors(errors))

    def with_value(self, value: T) -> ValueResult[T]:
        """Attach a value, keeping the reason trail."""
        return ValueResult(self._reasons, value)

    # ─── Projections ───────────────────────────────────────────────────

    def to_result(self, value: U | None = None) -> ValueResult[U]:
        """Re-type as a ValueResult sharing this reason trail.

        Useful for handing a failure on to code expecting a different value
        type without running anything.
        """
        return ValueResult(self._reasons, value)

    def _replace(self, reasons: tuple[Reason, ...]) -> Self:
        return Result(reasons)  # type: ignore[return-value]

    # ─── Bind ──────────────────────────────────────────────────────────

    def bind(self, func: Callable[..., R]) -> R | Self:
        """Monadic bind: run func only when successful, prepending this trail to its result.

        If this result is failed, func is never invoked and self is returned.
        func may produce a Result or a ValueResult.

        Raises:
            ArgumentError: func is None/not callable, or does not return a Result
        """
        require_callable(func, "func")
        if self.is_failed:
            return self
        return self._chain(self._invoke(func))

    def bind_async(self, func: Callable[..., Awaitable[R] | R]) -> Awaitable[R | Self]:
        """Async bind. func may return a coroutine, a Task/Future, or a Result.

        Arguments are validated before anything is scheduled, so a missing
        func raises here rather than when the returned awaitable is awaited.
        A failed receiver completes without suspending.
        """
        require_callable(func, "func")
        return self._bind_async(func)

    async def _bind_async(self, func: Callable[..., Awaitable[R] | R]) -> R | Self:
        if self.is_failed:
            return self
        produced = self._invoke(func)
        if inspect.isawaitable(produced):
            produced = await produced
        return self._chain(produced)  # type: ignore[arg-type]

    def _invoke(self, func: Callable[..., Any]) -> Any:
        return func()

    def _chain(self, produced: R) -> R:
        if not isinstance(produced, Result):
            raise ArgumentError("func", f"must return a Result, got {type(produced).__name__}")
        return produced._replace((*self._reasons, *produced._reasons))

    # ─── OnError ───────────────────────────────────────────────────────

    def on_error(self, action: Callable[[], object]) -> Self:
        """Call action() if failed. Always returns self."""
        require_callable(action, "action")
        if self.is_failed:
            action()
        return self

    def inspect_errors(self, action: Callable[[tuple[Error | ExceptionalError, ...]], object]) -> Self:
        """Call action(errors) if failed. Always returns self."""
        require_callable(action, "action")
        if self.is_failed:
            action(self.errors)
        return self

    def on_error_async(self, action: Callable[[], Awaitable[object]]) -> Awaitable[Self]:
        """Async on_error. Successful results complete without scheduling action."""
        require_callable(action, "action")
        return self._run_if_failed(action)

    def inspect_errors_async(
        self, action: Callable[[tuple[Error | ExceptionalError, ...]], Awaitable[object]]
    ) -> Awaitable[Self]:
        """Async inspect_errors. Successful results complete without scheduling action."""
        require_callable(action, "action")
        return self._run_if_failed(lambda: action(self.errors))

    async def _run_if_failed(self, thunk: Callable[[], object]) -> Self:
        if self.is_failed:
            outcome = thunk()
            if inspect.isawaitable(outcome):
                await outcome
        return self

    # ─── Rendering ─────────────────────────────────────────────────────

    def format(self) -> str:
        """Human-readable multi-line rendering of the state and reason trail."""
        lines = [f"{type(self).__name__}: {'Success' if self.is_success else 'Failed'}"]
        for reason in self._reasons:
            lines.extend(_format_reason(reason, depth=1))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_success": self.is_success,
            "is_failed": self.is_failed,
            "reasons": [r.model_dump() for r in self._reasons],
        }

    def to_json(self) -> bytes:
        """Serialize to_dict() with orjson; non-JSON values fall back to str()."""
        return orjson.dumps(self.to_dict(), option=orjson.OPT_NON_STR_KEYS, default=str)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_success

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return type(self) is type(other) and self._reasons == other._reasons

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._reasons))

    def __repr__(self) -> str:
        state = "Ok" if self.is_success else "Failed"
        return f"{type(self).__name__}({state}, reasons={[str(r) for r in self._reasons]!r})"


class ValueResult(Result, Generic[T]):
    """Result carrying a value of type T, meaningful only while successful.

    Reading `value` on a failed result raises ResultValueError; use
    value_or_default() for a non-raising read.
    """

    __slots__ = ("_value",)

    def __init__(self, reasons: Iterable[Reason] = (), value: T | None = None) -> None:
        super().__init__(reasons)
        self._value = value

    @classmethod
    def ok(cls, value: T) -> ValueResult[T]:  # type: ignore[override]
        """Successful result with no reasons holding value."""
        return ValueResult((), value)

    @property
    def value(self) -> T:
        """Payload of a successful result.

        Raises:
            ResultValueError: If the result is failed
        """
        if self.is_failed:
            raise ResultValueError(self.errors)
        return self._value  # type: ignore[return-value]

    def value_or_default(self, default: T | None = None) -> T | None:
        return default if self.is_failed else self._value

    def to_untyped(self) -> Result:
        """Drop the value, keeping the reason trail."""
        return Result(self._reasons)

    def _replace(self, reasons: tuple[Reason, ...]) -> Self:
        return ValueResult(reasons, self._value)  # type: ignore[return-value]

    def _invoke(self, func: Callable[..., Any]) -> Any:
        return func(self._value)

    def bind(self, func: Callable[[T], R]) -> R | Self:  # type: ignore[override]
        """Monadic bind passing the value to func. See Result.bind."""
        return super().bind(func)

    def bind_async(self, func: Callable[[T], Awaitable[R] | R]) -> Awaitable[R | Self]:  # type: ignore[override]
        """Async bind passing the value to func. See Result.bind_async."""
        return super().bind_async(func)

    def bind_and_keep_value(self, func: Callable[[T], Result]) -> ValueResult[T]:
        """Bind to a validation step and reattach this value to the outcome.

        The outcome keeps its own failure state; a failed receiver is
        returned as-is without calling func.
        """
        require_callable(func, "func")
        if self.is_failed:
            return self
        return ValueResult(self._chain(self._invoke(func))._reasons, self._value)

    def bind_and_keep_value_async(self, func: Callable[[T], Awaitable[Result] | Result]) -> Awaitable[ValueResult[T]]:
        """Async bind_and_keep_value."""
        require_callable(func, "func")
        return self._bind_and_keep_value_async(func)

    async def _bind_and_keep_value_async(self, func: Callable[[T], Awaitable[Result] | Result]) -> ValueResult[T]:
        outcome = await self._bind_async(func)
        if outcome is self:
            return self
        return ValueResult(outcome._reasons, self._value)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.is_success:
            data["value"] = self._value
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._reasons == other._reasons
            and (self.is_failed or self._value == other._value)  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._reasons))

    def __repr__(self) -> str:
        if self.is_failed:
            return super().__repr__()
        return f"ValueResult(Ok, value={self._value!r}, reasons={[str(r) for r in self._reasons]!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


@overload
def Ok() -> Result: ...
@overload
def Ok(value: T) -> ValueResult[T]: ...
def Ok(value: Any = _UNSET) -> Result:  # noqa: N802
    """Successful result: untyped when called without a value, otherwise a ValueResult."""
    return Result() if value is _UNSET else ValueResult((), value)


def Fail(errors: Errors) -> Result:  # noqa: N802
    """Failed untyped result. Use ValueResult.fail() or .to_result() for a valued one."""
    return Result.fail(errors)


# ═══════════════════════════════════════════════════════════════════════════════
# Combination
# ═══════════════════════════════════════════════════════════════════════════════


def merge(*results: Result) -> Result:
    """Concatenate reason trails in argument order.

    If every argument is a ValueResult the merge is a ValueResult whose value
    is the list of values (left as None when the merge is failed).
    """
    reasons = tuple(r for result in results for r in result.reasons)
    if results and all(isinstance(r, ValueResult) for r in results):
        merged = ValueResult(reasons)
        return merged if merged.is_failed else merged.with_value([r._value for r in results])  # type: ignore[attr-defined]
    return Result(reasons)


def ok_if(condition: bool, error: ErrorLike | Callable[[], ErrorLike]) -> Result:
    """Ok() when condition holds, otherwise Fail(error). A callable error is built lazily."""
    if condition:
        return Result()
    return Result.fail(error() if callable(error) else error)


def fail_if(condition: bool, error: ErrorLike | Callable[[], ErrorLike]) -> Result:
    """Fail(error) when condition holds, otherwise Ok(). A callable error is built lazily."""
    return ok_if(not condition, error)


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _walk_errors(errors: Iterable[Error | ExceptionalError]) -> Iterable[Error | ExceptionalError]:
    """Depth-first over errors and their nested causes."""
    for err in errors:
        yield err
        yield from _walk_errors(err.causes)


def _format_reason(reason: Reason, depth: int, prefix: str = "") -> list[str]:
    label = f"[{reason.kind}] {reason}"
    if isinstance(reason, ExceptionalError):
        label += f" <{reason.exception_type}>"
    lines = [f"{'  ' * depth}{prefix}{label}"]
    for cause in getattr(reason, "causes", ()):
        lines.extend(_format_reason(cause, depth + 1, "caused by: "))
    return lines
