"""Result algebra: reasons, Result/ValueResult, bind, Try and OnError."""

from .attempt import ExceptionHandler, Try, safe, try_async
from .exceptions import ArgumentError, ReasonedException, ResultValueError
from .reasons import (
    Error,
    ErrorReason,
    ExceptionalError,
    Reason,
    Success,
    error,
    exceptional_error,
    is_error,
    is_success,
    success,
    validate_reason,
)
from .result import Fail, Ok, Result, ValueResult, fail_if, merge, ok_if

__all__ = [
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
]
