"""Combinators over pending Results.

``AsyncResult`` wraps an awaitable that eventually yields one Result and
offers the synchronous combinator set under the same names. Each stage
awaits the previous one to completion, calls the continuation (awaiting it if
it returns an awaitable) and only then resolves, so stages run in strict
order and nothing is scheduled concurrently. Each stage is then settled by the
matching synchronous combinator, which keeps short-circuiting identical: a
resolved Failure skips every later continuation and reaches the end of the
chain unchanged.

Nothing runs until the final ``AsyncResult`` is awaited, and like any
coroutine it can be awaited only once.

Example:
    async def fetch(user_id: int) -> dict: ...

    profile = await (
        to_async_result(user_id)
        .if_(lambda uid: uid > 0)
        .then(fetch, map_exception=capture(TimeoutError))
        .do(audit.record)
    )
"""

from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING, Any

from resultflow.core.lifting import lift_async
from resultflow.core.result_primitives import (
    Failure,
    ensure_result,
    to_result,
    unwrap,
)
from resultflow.core.result_primitives import match as match_result

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator

    from resultflow.core.lifting import ExceptionMapper
    from resultflow.core.result_primitives import Result

__all__ = ["AsyncResult", "to_async_result"]


class AsyncResult[T]:
    """A pending Result with chainable combinators."""

    __slots__ = ("_source",)

    def __init__(self, source: Awaitable[Result[T]]):
        """Wrap an awaitable that yields a Success or Failure."""
        self._source = source

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return self._resolve().__await__()

    def __repr__(self) -> str:
        return f"AsyncResult({self._source!r})"

    async def _resolve(self) -> Result[T]:
        return ensure_result(await self._source, "AsyncResult")

    # --- Chaining ---

    def then[R](
        self,
        func: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> AsyncResult[R]:
        """Flat-map with a sync or async continuation."""
        step = _continuation(func, map_exception)

        async def stage() -> Result[R]:
            result = await self._resolve()
            if isinstance(result, Failure):
                return result
            outcome = await step(result.value)
            return result.then(lambda _: outcome)

        return AsyncResult(stage())

    def do(
        self,
        func: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> AsyncResult[T]:
        """Run a sync or async effect, keeping the Success unless it fails."""
        step = _continuation(func, map_exception)

        async def stage() -> Result[T]:
            result = await self._resolve()
            if isinstance(result, Failure):
                return result
            outcome = await step(result.value)
            return result.do(lambda _: outcome)

        return AsyncResult(stage())

    def if_(
        self,
        predicate: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> AsyncResult[T]:
        """Gate on a sync or async predicate (``bool`` or ``Result[bool]``)."""
        step = _continuation(predicate, map_exception)

        async def stage() -> Result[T]:
            result = await self._resolve()
            if isinstance(result, Failure):
                return result
            verdict = await step(result.value)

            @functools.wraps(predicate)
            def settled(_: Any) -> Any:
                return verdict

            return result.if_(settled)

        return AsyncResult(stage())

    def map_failure(self, mapper: Callable[[Exception], Exception]) -> AsyncResult[T]:
        async def stage() -> Result[T]:
            return (await self._resolve()).map_failure(mapper)

        return AsyncResult(stage())

    # --- Terminal operations ---

    async def match[R](
        self,
        on_success: Callable[[T], R | Awaitable[R]],
        on_failure: Callable[[Exception], R | Awaitable[R]],
    ) -> R:
        """Resolve and dispatch; an awaitable returned by a branch is awaited."""
        outcome = match_result(await self._resolve(), on_success, on_failure)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    async def is_success(self) -> bool:
        return (await self._resolve()).is_success()

    async def is_failure(self) -> bool:
        return (await self._resolve()).is_failure()

    async def get(self) -> T:
        """Return the Success payload or raise the Failure's error."""
        return unwrap(await self._resolve())

    async def success_or_default(self, default: T | None = None) -> T | None:
        return (await self._resolve()).success_or_default(default)

    async def failure_or_default(
        self, default: Exception | None = None
    ) -> Exception | None:
        return (await self._resolve()).failure_or_default(default)


def to_async_result(obj: Any) -> AsyncResult[Any]:
    """Start an async chain from a value, error, Result or awaitable of those.

    Non-Result values are converted with ``to_result``; an ``AsyncResult`` is
    returned unchanged.
    """
    if isinstance(obj, AsyncResult):
        return obj
    if inspect.isawaitable(obj):

        async def settle() -> Result[Any]:
            return to_result(await obj)

        return AsyncResult(settle())

    async def ready() -> Result[Any]:
        return to_result(obj)

    return AsyncResult(ready())


def _continuation(
    func: Callable[..., Any], map_exception: ExceptionMapper | None
) -> Callable[[Any], Awaitable[Any]]:
    if map_exception is not None:
        return lift_async(func, map_exception)

    async def call(value: Any) -> Any:
        outcome = func(value)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    return call
