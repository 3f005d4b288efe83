"""Reason model: the annotations a Result carries.

A closed tagged union of three frozen pydantic models, discriminated by `kind`:

- Success: informational milestone, never affects failure state
- Error: domain failure, may nest causes
- ExceptionalError: error produced at the Try boundary, keeps the exception

Every reason has a message and an insertion-ordered metadata mapping. All
helpers return new instances; reasons are never mutated after construction.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, Self, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

from ..foundation.config import get_settings
from .exceptions import ArgumentError

JsonDict = dict[str, Any]


class _ReasonBase(BaseModel):
    """Fields and helpers shared by every reason variant."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    message: str
    metadata: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("metadata")
    def _dump_metadata(self, v: Mapping[str, Any]) -> JsonDict:
        return dict(v)

    def with_metadata(self, mapping: Mapping[str, Any] | None = None, /, **kw: Any) -> Self:
        """Return a copy with metadata merged in (later keys win, order kept)."""
        merged = {**self.metadata, **(mapping or {}), **kw}
        return self.model_copy(update={"metadata": MappingProxyType(merged)})

    def __str__(self) -> str:
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.message}{meta}"

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, tuple(self.metadata)))


class Success(_ReasonBase):
    """Reason marking a passed milestone."""

    kind: Literal["success"] = "success"


class _ErrorBase(_ReasonBase):
    causes: tuple[ErrorReason, ...] = ()

    def caused_by(self, *causes: str | ErrorReason | Exception) -> Self:
        """Return a copy with causes appended, in the given order.

        Strings become plain errors, exceptions go through exceptional_error().
        """
        return self.model_copy(update={"causes": (*self.causes, *(_as_error(c) for c in causes))})


class Error(_ErrorBase):
    """Reason marking a domain failure."""

    kind: Literal["error"] = "error"


class ExceptionalError(_ErrorBase):
    """Error wrapping an exception captured at the Try boundary.

    `details` holds the formatted traceback (when capture settings allow it);
    `exception` keeps the original object for inspection and is never
    serialized or re-raised.
    """

    kind: Literal["exceptional"] = "exceptional"
    exception_type: str
    details: str | None = Field(default=None, repr=False)
    exception: Exception | None = Field(default=None, exclude=True, repr=False)


ErrorReason: TypeAlias = Annotated[Union[Error, ExceptionalError], Field(discriminator="kind")]
Reason: TypeAlias = Annotated[Union[Success, Error, ExceptionalError], Field(discriminator="kind")]

Error.model_rebuild()
ExceptionalError.model_rebuild()

_ERROR_TYPES = (Error, ExceptionalError)

# Cached at module level; used for validating plain dicts back into reasons
_ReasonAdapter: TypeAdapter[Reason] = TypeAdapter(Reason)


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def is_error(reason: object) -> bool:
    return isinstance(reason, _ERROR_TYPES)


def is_success(reason: object) -> bool:
    return isinstance(reason, Success)


def success(message: str, **metadata: Any) -> Success:
    """Create a Success concisely."""
    return Success(message=message, metadata=metadata)


def error(message: str, *causes: str | ErrorReason | Exception, **metadata: Any) -> Error:
    """Create an Error concisely, optionally with causes."""
    return Error(message=message, metadata=metadata, causes=tuple(_as_error(c) for c in causes))


def exceptional_error(exc: Exception) -> ExceptionalError:
    """Default exception handler for Try: wrap exc without re-raising it."""
    details = None
    if get_settings().capture.include_traceback:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return ExceptionalError(
        message=str(exc) or type(exc).__name__,
        exception_type=type(exc).__name__,
        details=details,
        exception=exc,
    )


def validate_reason(data: JsonDict) -> Success | Error | ExceptionalError:
    """Validate a dict (e.g. from model_dump()) into the matching reason variant."""
    return _ReasonAdapter.validate_python(data)


def _as_error(value: str | ErrorReason | Exception) -> Error | ExceptionalError:
    match value:
        case Error() | ExceptionalError():
            return value
        case str():
            return Error(message=value)
        case Exception():
            return exceptional_error(value)
        case _:
            raise ArgumentError("error", f"expected a message or an error reason, got {type(value).__name__}")


def _as_success(value: str | Success) -> Success:
    match value:
        case Success():
            return value
        case str():
            return Success(message=value)
        case _:
            raise ArgumentError("success", f"expected a message or a Success, got {type(value).__name__}")


def as_errors(
    values: str | ErrorReason | Exception | Iterable[str | ErrorReason | Exception],
) -> tuple[Error | ExceptionalError, ...]:
    """Normalize a message, an error or an iterable of those into a tuple of errors."""
    if isinstance(values, (str, Exception, Success, *_ERROR_TYPES)) or not isinstance(values, Iterable):
        return (_as_error(values),)  # type: ignore[arg-type]
    return tuple(_as_error(v) for v in values)
