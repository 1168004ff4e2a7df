"""Operations over sequences of Results.

Everything here is lazy (generators, short-circuiting ``all``/``any``)
except the aggregations ``get_all`` and ``to_result_of_seq`` and the
``match_each_eager`` driver, which drain their input before returning.

Two failure policies meet here and are deliberately asymmetric:

- ``to_result_of_seq`` accumulates *every* failure into one
  ``AggregateFailureError``;
- ``to_seq_of_results`` turns a failed Result back into a single-element
  sequence holding that Failure, not into per-element failures.

Every element must be a Success or Failure. Anything else raises
``InvariantViolationError`` when it is reached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from resultflow.config import current_config
from resultflow.core.result_primitives import (
    Failure,
    Success,
    match,
    to_result,
    unwrap,
)
from resultflow.errors import AggregateFailureError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from resultflow.core.lifting import ExceptionMapper
    from resultflow.core.result_primitives import Result

log = logging.getLogger(__name__)

__all__ = [
    "all_fail",
    "all_succeed",
    "any_fail",
    "any_succeed",
    "do_each",
    "get_all",
    "get_failures",
    "get_successes",
    "if_each",
    "match_each",
    "match_each_eager",
    "then_each",
    "to_result_collection",
    "to_result_of_seq",
    "to_seq_of_results",
]


# --- Predicates ---


def all_succeed(results: Iterable[Result[Any]]) -> bool:
    return all(_succeeded(r) for r in results)


def any_succeed(results: Iterable[Result[Any]]) -> bool:
    return any(_succeeded(r) for r in results)


def all_fail(results: Iterable[Result[Any]]) -> bool:
    return all(not _succeeded(r) for r in results)


def any_fail(results: Iterable[Result[Any]]) -> bool:
    return any(not _succeeded(r) for r in results)


# --- Projections ---


def get_successes[T](results: Iterable[Result[T]]) -> Iterator[T]:
    """Yield the payload of every Success, in order."""
    return (v for r in results for v in match(r, _only, _nothing))


def get_failures(results: Iterable[Result[Any]]) -> Iterator[Exception]:
    """Yield the error of every Failure, in order."""
    return (e for r in results for e in match(r, _nothing, _only))


# --- Aggregation ---


def to_result_of_seq[T](results: Iterable[Result[T]]) -> Result[list[T]]:
    """Collapse a sequence of Results into one Result of a list.

    Drains ``results``. If any element failed, the Failure carries an
    ``AggregateFailureError`` holding every error in encounter order;
    otherwise the Success carries the values in order.
    """
    values: list[T] = []
    errors: list[Exception] = []
    for r in results:
        match(r, values.append, errors.append)
    if errors:
        log.debug(
            "Aggregated %d failure(s) out of %d result(s)",
            len(errors),
            len(errors) + len(values),
        )
        aggregate = AggregateFailureError(current_config().aggregate_message, errors)
        return Failure(aggregate)
    return Success(values)


def get_all[T](results: Iterable[Result[T]]) -> list[T]:
    """Return every success value, or raise the aggregate of every failure.

    Raises:
        AggregateFailureError: If at least one element is a Failure.
    """
    return to_result_of_seq(results).get()


def to_seq_of_results[T](result: Result[Iterable[T]]) -> Iterator[Result[T]]:
    """Expand a Result of a sequence into a sequence of Results.

    A Failure yields itself once; the original element count is not known
    and is not reconstructed. A Success yields one ``Success`` per item.
    """
    if isinstance(result, Failure):
        yield result
        return
    for item in unwrap(result):
        yield Success(item)


def to_result_collection(values: Iterable[Any]) -> Iterator[Result[Any]]:
    """Lift plain values element-wise with ``to_result``."""
    return (to_result(v) for v in values)


# --- Per-element combinators ---


def do_each[T](
    results: Iterable[Result[T]],
    func: Callable[[T], Any],
    map_exception: ExceptionMapper | None = None,
) -> Iterator[Result[T]]:
    return (_checked(r).do(func, map_exception) for r in results)


def then_each[T](
    results: Iterable[Result[T]],
    func: Callable[[T], Any],
    map_exception: ExceptionMapper | None = None,
) -> Iterator[Result[Any]]:
    return (_checked(r).then(func, map_exception) for r in results)


def if_each[T](
    results: Iterable[Result[T]],
    predicate: Callable[[T], Any],
    map_exception: ExceptionMapper | None = None,
) -> Iterator[Result[T]]:
    return (_checked(r).if_(predicate, map_exception) for r in results)


def match_each[T, R](
    results: Iterable[Result[T]],
    on_success: Callable[[T], R],
    on_failure: Callable[[Exception], R],
) -> Iterator[R]:
    """Lazily yield ``match`` of every element."""
    return (match(r, on_success, on_failure) for r in results)


def match_each_eager[T](
    results: Iterable[Result[T]],
    on_success: Callable[[T], Any],
    on_failure: Callable[[Exception], Any],
) -> None:
    """Run ``match`` on every element now, for its effects.

    Unlike the other ``*_each`` helpers this consumes ``results``
    immediately; return values of the branches are discarded.
    """
    for r in results:
        match(r, on_success, on_failure)


# --- Internals ---


def _succeeded(result: Result[Any]) -> bool:
    return match(result, _true, _false)


def _checked[T](result: Result[T]) -> Result[T]:
    _succeeded(result)
    return result


def _true(_: Any) -> bool:
    return True


def _false(_: Any) -> bool:
    return False


def _only(item: Any) -> tuple[Any]:
    return (item,)


def _nothing(_: Any) -> tuple[()]:
    return ()
