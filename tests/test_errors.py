from __future__ import annotations

import pytest

from resultflow import (
    AggregateFailureError,
    ConfigurationError,
    InvariantViolationError,
    MissingValueError,
    PredicateError,
    ResultflowError,
)

pytestmark = pytest.mark.unit


def test_subclass_hierarchy() -> None:
    for error_type in (
        ConfigurationError,
        InvariantViolationError,
        PredicateError,
        MissingValueError,
    ):
        assert issubclass(error_type, ResultflowError)
    assert issubclass(AggregateFailureError, ExceptionGroup)


def test_hint_is_appended_to_message() -> None:
    err = ResultflowError("bad input", hint="pass an int")

    assert str(err) == "bad input. pass an int"
    assert err.args == ("bad input",)


def test_hint_defaults_to_none() -> None:
    err = ConfigurationError("broken")

    assert err.hint is None
    assert str(err) == "broken"


def test_structured_metadata() -> None:
    assert PredicateError("rejected", value=3).value == 3
    assert InvariantViolationError("odd", received="x").received == "x"


def test_aggregate_preserves_errors_in_order() -> None:
    first, second = ValueError("1"), KeyError("2")
    group = AggregateFailureError("many", [first, second])

    assert group.message == "many"
    assert group.errors == (first, second)


def test_aggregate_split_keeps_its_type() -> None:
    first, second = ValueError("1"), KeyError("2")
    group = AggregateFailureError("many", [first, second])

    matched, rest = group.split(ValueError)

    assert isinstance(matched, AggregateFailureError)
    assert matched.errors == (first,)
    assert isinstance(rest, AggregateFailureError)
    assert rest.errors == (second,)


def test_aggregate_requires_at_least_one_error() -> None:
    with pytest.raises(ValueError):
        AggregateFailureError("empty", [])
