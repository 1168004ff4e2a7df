"""Lifting adapters: the one place raised exceptions become Failures.

``lift`` and ``lift_async`` wrap a plain (possibly raising) function into one
that returns a Result. Raised exceptions are passed to a classifier which
decides what the Failure carries:

- return an ``Exception`` to capture it as ``Failure(returned)``;
- return ``None`` to decline, re-raising the original exception.

Only ``Exception`` subclasses are ever offered to the classifier, so
``asyncio.CancelledError`` and ``KeyboardInterrupt`` always propagate.
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any

from resultflow.config import current_config
from resultflow.core.result_primitives import UNIT, Failure, Success, to_result

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from resultflow.core.result_primitives import Result

log = logging.getLogger(__name__)

type ExceptionMapper = Callable[[Exception], Exception | None]

__all__ = [
    "ExceptionMapper",
    "capture",
    "capture_all",
    "capture_none",
    "lift",
    "lift_async",
    "wrap_as",
]


def lift[**P](
    func: Callable[P, Any], map_exception: ExceptionMapper
) -> Callable[P, Result[Any]]:
    """Wrap ``func`` so it returns a Result instead of raising.

    Return values are converted with ``to_result``; ``None`` (a void-shaped
    function) becomes ``Success(UNIT)``.
    """

    @functools.wraps(func)
    def lifted(*args: P.args, **kwargs: P.kwargs) -> Result[Any]:
        try:
            returned = func(*args, **kwargs)
        except Exception as exc:
            mapped = _classify(exc, map_exception, func)
            if mapped is None:
                raise
            return Failure(mapped)
        return _wrap_return(returned)

    return lifted


def lift_async[**P](
    func: Callable[P, Awaitable[Any] | Any], map_exception: ExceptionMapper
) -> Callable[P, Awaitable[Result[Any]]]:
    """Async counterpart of ``lift``.

    ``func`` may be a coroutine function or return any awaitable; awaiting it
    happens inside the guarded region, so errors raised while suspended are
    classified too. Synchronous functions are accepted as well.
    """

    @functools.wraps(func)
    async def lifted(*args: P.args, **kwargs: P.kwargs) -> Result[Any]:
        try:
            returned = func(*args, **kwargs)
            if inspect.isawaitable(returned):
                returned = await returned
        except Exception as exc:
            mapped = _classify(exc, map_exception, func)
            if mapped is None:
                raise
            return Failure(mapped)
        return _wrap_return(returned)

    return lifted


# --- Classifiers ---


def capture_all(exc: Exception) -> Exception:
    """Capture every exception as-is."""
    return exc


def capture_none(exc: Exception) -> None:
    """Never capture; every exception propagates."""
    return None


def capture(*types: type[Exception]) -> ExceptionMapper:
    """Capture only instances of ``types``; anything else propagates.

    Example:
        parse = lift(int, capture(ValueError))
        parse("12")   # Success(value=12)
        parse("x")    # Failure(error=ValueError(...))
        parse(None)   # raises TypeError
    """
    if not types:
        raise ValueError("capture() requires at least one exception type")

    def classifier(exc: Exception) -> Exception | None:
        return exc if isinstance(exc, types) else None

    return classifier


def wrap_as(
    error_type: Callable[[str], Exception], message: str | None = None
) -> ExceptionMapper:
    """Capture every exception as ``error_type``, chained via ``__cause__``.

    The new error's message is ``message`` when given, else ``str(exc)``.
    """

    def classifier(exc: Exception) -> Exception:
        wrapped = error_type(message if message is not None else str(exc))
        wrapped.__cause__ = exc
        return wrapped

    return classifier


# --- Internals ---


def _classify(
    exc: Exception, map_exception: ExceptionMapper, func: Callable[..., Any]
) -> Exception | None:
    name = getattr(func, "__qualname__", None) or repr(func)
    mapped = map_exception(exc)
    if mapped is None:
        log.debug("Not capturing %s raised by %s", type(exc).__name__, name)
        return None
    if not isinstance(mapped, Exception):
        raise TypeError(
            f"Exception classifier returned {type(mapped).__name__}; "
            "expected an Exception or None"
        )
    log.debug(
        "Captured %s raised by %s as %s",
        type(exc).__name__,
        name,
        type(mapped).__name__,
        exc_info=exc if current_config().log_captured_errors else None,
    )
    return mapped


def _wrap_return(returned: Any) -> Result[Any]:
    if returned is None:
        return Success(UNIT)
    return to_result(returned)
