"""Tests for synchronous bind.

Validates:
- Monad laws (left/right identity, associativity) over value and reasons
- Short-circuit: binder never invoked on failed receivers
- Reason trail accumulation order
- Contract violations fail fast without invoking user code
"""

from __future__ import annotations

from typing import Callable

import pytest

from reasoned import ArgumentError, Fail, Ok, Result, ValueResult


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_monad_left_identity() -> None:
    """Ok(x).bind(f) == f(x): Ok contributes no reasons to merge."""
    f: Callable[[int], ValueResult[int]] = lambda x: Ok(x * 2).with_success("doubled")

    assert Ok(21).bind(f) == f(21)


def test_monad_right_identity() -> None:
    m = Ok(42).with_success("A")

    assert m.bind(Ok) == m


def test_monad_associativity() -> None:
    m = Ok(5).with_success("start")
    f: Callable[[int], ValueResult[int]] = lambda x: Ok(x + 1).with_success("f")
    g: Callable[[int], ValueResult[int]] = lambda x: Ok(x * 2).with_success("g")

    left = m.bind(f).bind(g)
    right = m.bind(lambda x: f(x).bind(g))

    assert left == right
    assert left.value == 12


# ═════════════════════════════════════════════════════════════════════════════
# Untyped receivers
# ═════════════════════════════════════════════════════════════════════════════


def test_bind_accumulates_successes_in_order() -> None:
    result = Ok().with_success("Initial").bind(lambda: Ok().with_success("Chained"))

    assert result.is_success
    assert [s.message for s in result.successes] == ["Initial", "Chained"]


def test_bind_to_failure_keeps_prior_successes() -> None:
    result = Ok().with_success("Initial").bind(lambda: Fail("Binding Error"))

    assert result.is_failed
    assert [r.message for r in result.reasons] == ["Initial", "Binding Error"]


def test_bind_untyped_to_valued() -> None:
    result = Ok().with_success("Initial").bind(lambda: Ok(420).with_success("Binding"))

    assert isinstance(result, ValueResult)
    assert result.value == 420
    assert [s.message for s in result.successes] == ["Initial", "Binding"]


def test_bind_short_circuits_on_failed_receiver() -> None:
    calls: list[str] = []

    def binder() -> Result:
        calls.append("called")
        return Ok().with_success("X")

    source = Fail("E1")
    result = source.bind(binder)

    assert calls == []
    assert result is source
    assert [e.message for e in result.errors] == ["E1"]
    assert result.successes == ()


def test_failure_mid_chain_skips_later_stages() -> None:
    calls: list[str] = []

    def stage(name: str, fail: bool = False) -> Callable[[], Result]:
        def run() -> Result:
            calls.append(name)
            return Fail(f"{name} failed") if fail else Ok().with_success(name)
        return run

    result = Ok().bind(stage("a")).bind(stage("b", fail=True)).bind(stage("c"))

    assert calls == ["a", "b"]
    assert [r.message for r in result.reasons] == ["a", "b failed"]


# ═════════════════════════════════════════════════════════════════════════════
# Valued receivers
# ═════════════════════════════════════════════════════════════════════════════


def test_bind_valued_receives_value() -> None:
    result = Ok(5).bind(lambda x: Ok(x * 2))

    assert result.is_success
    assert result.value == 10


def test_bind_valued_to_new_type() -> None:
    result = Ok(5).with_success("parsed").bind(lambda x: Ok(str(x)).with_success("formatted"))

    assert result.value == "5"
    assert [s.message for s in result.successes] == ["parsed", "formatted"]


def test_bind_valued_to_untyped() -> None:
    result = Ok(5).bind(lambda x: Ok().with_success(f"saw {x}"))

    assert type(result) is Result
    assert result.successes[0].message == "saw 5"


def test_bind_valued_short_circuits() -> None:
    calls: list[int] = []

    def double(x: int) -> ValueResult[int]:
        calls.append(x)
        return Ok(x * 2)

    source: ValueResult[int] = ValueResult.fail("E1")
    result = source.bind(double)

    assert calls == []
    assert result.is_failed
    assert [e.message for e in result.errors] == ["E1"]


def test_bind_does_not_mutate_source() -> None:
    source = Ok(1).with_success("A")
    source.bind(lambda x: Fail("E"))

    assert source.is_success
    assert len(source.reasons) == 1


# ═════════════════════════════════════════════════════════════════════════════
# bind_and_keep_value
# ═════════════════════════════════════════════════════════════════════════════


def test_bind_and_keep_value_reattaches_value() -> None:
    seen: list[int] = []

    def validate(x: int) -> Result:
        seen.append(x)
        return Ok().with_success("validated")

    result = Ok(7).with_success("loaded").bind_and_keep_value(validate)

    assert seen == [7]
    assert isinstance(result, ValueResult)
    assert result.value == 7
    assert [s.message for s in result.successes] == ["loaded", "validated"]


def test_bind_and_keep_value_failed_validation() -> None:
    result = Ok(7).bind_and_keep_value(lambda x: Fail("too small"))

    assert result.is_failed
    assert result.value_or_default() is None
    assert result.errors[0].message == "too small"


def test_bind_and_keep_value_short_circuits() -> None:
    calls: list[int] = []
    source: ValueResult[int] = ValueResult.fail("E1")

    result = source.bind_and_keep_value(lambda x: calls.append(x) or Ok())  # type: ignore[func-returns-value]

    assert calls == []
    assert result is source


# ═════════════════════════════════════════════════════════════════════════════
# Contract violations
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("source", [Ok(), Fail("E1"), Ok(1), ValueResult.fail("E1")])
def test_bind_none_raises(source: Result) -> None:
    with pytest.raises(ArgumentError, match="func"):
        source.bind(None)  # type: ignore[arg-type]


def test_bind_non_callable_raises() -> None:
    with pytest.raises(ArgumentError):
        Ok().bind("not callable")  # type: ignore[arg-type]


def test_bind_and_keep_value_none_raises() -> None:
    with pytest.raises(ArgumentError):
        Ok(1).bind_and_keep_value(None)  # type: ignore[arg-type]


def test_bind_binder_must_return_result() -> None:
    with pytest.raises(ArgumentError, match="must return a Result"):
        Ok(1).bind(lambda x: x + 1)  # type: ignore[arg-type,return-value]


def test_argument_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Ok().bind(None)  # type: ignore[arg-type]
