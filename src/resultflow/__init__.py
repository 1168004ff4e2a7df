"""resultflow: explicit-failure Results and the combinators to chain them.

Public API:
    - Success / Failure / Result: the two-variant value type
    - UNIT: the payload of a success that carries no information
    - to_result / to_async_result: start a chain from plain values
    - lift / lift_async: wrap raising functions, classifying their errors
    - AsyncResult: combinators over pending Results
    - all_succeed, get_all, to_result_of_seq, ...: collection helpers

Example:
    from resultflow import Success, capture, lift

    parse = lift(int, capture(ValueError))
    doubled = parse("21").then(lambda n: Success(n * 2))
    assert doubled.get() == 42
"""

from __future__ import annotations

import logging

from resultflow.config import FrozenConfig, config_scope, current_config, resolve_config
from resultflow.core.async_result import AsyncResult, to_async_result
from resultflow.core.collection import (
    all_fail,
    all_succeed,
    any_fail,
    any_succeed,
    do_each,
    get_all,
    get_failures,
    get_successes,
    if_each,
    match_each,
    match_each_eager,
    then_each,
    to_result_collection,
    to_result_of_seq,
    to_seq_of_results,
)
from resultflow.core.lifting import (
    ExceptionMapper,
    capture,
    capture_all,
    capture_none,
    lift,
    lift_async,
    wrap_as,
)
from resultflow.core.result_primitives import (
    UNIT,
    Failure,
    Result,
    Success,
    Unit,
    is_failure,
    is_success,
    match,
    to_result,
    unwrap,
)
from resultflow.errors import (
    AggregateFailureError,
    ConfigurationError,
    InvariantViolationError,
    MissingValueError,
    PredicateError,
    ResultflowError,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("resultflow")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("resultflow").addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Result type
    "Success",
    "Failure",
    "Result",
    "Unit",
    "UNIT",
    "is_success",
    "is_failure",
    "match",
    "unwrap",
    "to_result",
    # Lifting
    "ExceptionMapper",
    "lift",
    "lift_async",
    "capture",
    "capture_all",
    "capture_none",
    "wrap_as",
    # Async
    "AsyncResult",
    "to_async_result",
    # Collections
    "all_succeed",
    "any_succeed",
    "all_fail",
    "any_fail",
    "get_successes",
    "get_failures",
    "get_all",
    "to_result_of_seq",
    "to_seq_of_results",
    "to_result_collection",
    "do_each",
    "then_each",
    "if_each",
    "match_each",
    "match_each_eager",
    # Errors
    "ResultflowError",
    "ConfigurationError",
    "InvariantViolationError",
    "PredicateError",
    "MissingValueError",
    "AggregateFailureError",
    # Configuration
    "FrozenConfig",
    "resolve_config",
    "config_scope",
    "current_config",
]
