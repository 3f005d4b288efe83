"""Ready-made OnError callbacks that report failures through the structured logger."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from .logger import BoundLogger, get_logger

if TYPE_CHECKING:
    from ..core.reasons import Error, ExceptionalError


def log_errors(
    log: BoundLogger | None = None,
    *,
    event: str = "result failed",
    level: str = "error",
) -> Callable[[Sequence[Error | ExceptionalError]], None]:
    """Build an inspect_errors() callback logging one entry per error reason.

    Example:
        >>> fetch_user(uid).bind(validate).inspect_errors(log_errors(event="signup failed"))
    """
    def _log(errors: Sequence[Error | ExceptionalError]) -> None:
        logger = log or get_logger("reasoned")
        emit = getattr(logger, level)
        for position, err in enumerate(errors):
            fields = {"error": err.message, "kind": err.kind, "position": position}
            if err.metadata:
                fields["metadata"] = dict(err.metadata)
            if err.causes:
                fields["causes"] = [c.message for c in err.causes]
            if err.kind == "exceptional":
                fields["exception_type"] = err.exception_type  # type: ignore[union-attr]
            emit(event, **fields)

    return _log
