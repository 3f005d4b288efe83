"""Reasoned - Result values with an audit trail of reasons.

A Result is a success/failure value carrying an ordered trail of error and
success reasons. Pipelines compose through short-circuiting bind, exception
throwing code is fenced with Try, and failures can be observed with OnError
hooks, all without exception-based control flow.

Quick Start:
    >>> from reasoned import Ok, Fail, Try
    >>>
    >>> result = (
    ...     Ok().with_success("input received")
    ...     .bind(lambda: Ok(5))
    ...     .bind(lambda x: Ok(x * 2).with_success("doubled"))
    ... )
    >>> result.value
    10
    >>> [s.message for s in result.successes]
    ['input received', 'doubled']

Short-circuit:
    >>> Fail("no user").bind(lambda: Ok(1)).errors[0].message
    'no user'

Try boundary:
    >>> Try(lambda: 1 / 0).errors[0].exception_type
    'ZeroDivisionError'

Async:
    >>> async def fetch(user_id: int) -> ValueResult[dict]:
    ...     ...
    >>> await Ok(7).bind_async(fetch)

Observing failures:
    >>> from reasoned.observability import log_errors
    >>> Fail("quota exceeded").inspect_errors(log_errors(event="upload rejected"))
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    ArgumentError,
    Error,
    ErrorReason,
    ExceptionalError,
    ExceptionHandler,
    Fail,
    Ok,
    Reason,
    ReasonedException,
    Result,
    ResultValueError,
    Success,
    Try,
    ValueResult,
    error,
    exceptional_error,
    fail_if,
    is_error,
    is_success,
    merge,
    ok_if,
    safe,
    success,
    try_async,
    validate_reason,
)
from .foundation.config import ReasonedSettings, clear_settings_cache, get_settings

__all__ = [
    "__version__",
    # Results
    "Result", "ValueResult", "Ok", "Fail",
    # Reasons
    "Reason", "ErrorReason", "Success", "Error", "ExceptionalError",
    "success", "error", "exceptional_error", "is_error", "is_success", "validate_reason",
    # Try boundary
    "Try", "try_async", "safe", "ExceptionHandler",
    # Combination
    "merge", "ok_if", "fail_if",
    # Exceptions
    "ReasonedException", "ArgumentError", "ResultValueError",
    # Settings
    "ReasonedSettings", "get_settings", "clear_settings_cache",
]
