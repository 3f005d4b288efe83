"""Tests for OnError hooks: on_error, inspect_errors and their async forms."""

from __future__ import annotations

import pytest

from reasoned import ArgumentError, Error, ExceptionalError, Fail, Ok, Result, ValueResult

ON_ERROR_DATA = [
    pytest.param(Ok(), False, id="ok"),
    pytest.param(Ok(5).with_success("A"), False, id="ok-valued"),
    pytest.param(Fail("Test Error"), True, id="failed"),
    pytest.param(ValueResult.fail("Test Error").with_success("A"), True, id="failed-valued"),
]


def _snapshot(result: Result) -> tuple[object, ...]:
    value = result.value_or_default() if isinstance(result, ValueResult) else None
    return (result.is_failed, result.reasons, value)


# ─────────────────────────────────────────────────────────────────────────────
# Synchronous hooks
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(("result", "expected_invoked"), ON_ERROR_DATA)
def test_on_error_invokes_action_iff_failed(result: Result, expected_invoked: bool) -> None:
    invoked: list[bool] = []
    before = _snapshot(result)

    returned = result.on_error(lambda: invoked.append(True))

    assert bool(invoked) is expected_invoked
    assert returned is result
    assert _snapshot(returned) == before


@pytest.mark.parametrize(("result", "expected_invoked"), ON_ERROR_DATA)
def test_inspect_errors_passes_errors_iff_failed(result: Result, expected_invoked: bool) -> None:
    received: list[tuple[Error | ExceptionalError, ...]] = []

    returned = result.inspect_errors(received.append)

    assert bool(received) is expected_invoked
    assert returned is result
    if expected_invoked:
        assert [e.message for e in received[0]] == ["Test Error"]


def test_on_error_mid_pipeline_keeps_chain() -> None:
    seen: list[str] = []

    result = (
        Ok(2)
        .bind(lambda x: Fail("stage failed").to_result(x))
        .inspect_errors(lambda errs: seen.extend(e.message for e in errs))
        .bind(lambda x: Ok(x * 10))
    )

    assert seen == ["stage failed"]
    assert result.is_failed


def test_on_error_action_exception_propagates() -> None:
    def explode() -> None:
        raise RuntimeError("callback bug")

    with pytest.raises(RuntimeError, match="callback bug"):
        Fail("E1").on_error(explode)


@pytest.mark.parametrize("method", ["on_error", "inspect_errors", "on_error_async", "inspect_errors_async"])
def test_none_action_raises_synchronously(method: str) -> None:
    with pytest.raises(ArgumentError, match="action"):
        getattr(Fail("E1"), method)(None)


# ─────────────────────────────────────────────────────────────────────────────
# Asynchronous hooks
# ─────────────────────────────────────────────────────────────────────────────


class TestOnErrorAsync:
    """on_error_async / inspect_errors_async."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("result", "expected_invoked"), ON_ERROR_DATA)
    async def test_on_error_async(self, result: Result, expected_invoked: bool) -> None:
        invoked: list[bool] = []

        async def action() -> None:
            invoked.append(True)

        returned = await result.on_error_async(action)

        assert bool(invoked) is expected_invoked
        assert returned is result

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("result", "expected_invoked"), ON_ERROR_DATA)
    async def test_inspect_errors_async(self, result: Result, expected_invoked: bool) -> None:
        received: list[int] = []

        async def action(errors: tuple[Error | ExceptionalError, ...]) -> None:
            received.append(len(errors))

        returned = await result.inspect_errors_async(action)

        assert received == ([1] if expected_invoked else [])
        assert returned is result


def test_async_hook_on_success_does_not_schedule_action() -> None:
    """A successful result completes immediately; the callback is never created."""
    calls: list[str] = []

    def action() -> object:
        calls.append("scheduled")
        raise AssertionError("must not run")

    source = Ok(1)
    awaitable = source.on_error_async(action)  # type: ignore[arg-type]

    with pytest.raises(StopIteration) as info:
        awaitable.send(None)  # type: ignore[attr-defined]
    assert info.value.value is source
    assert calls == []
