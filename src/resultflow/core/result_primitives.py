"""Result primitives and the synchronous combinators.

A Result is exactly one of ``Success`` (carrying a value) or ``Failure``
(carrying an exception). Both are frozen; every combinator returns a Result
instead of mutating one, and a Failure is passed along untouched, so once
one appears no further continuation in the chain runs.

Example:
    recorded = []
    Success(5).then(
        lambda x: Success(x * 2) if x > 0 else Failure(ValueError("negative"))
    ).do(recorded.append)
    # -> Success(value=10), recorded == [10]
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Never, TypeIs

from resultflow.config import current_config
from resultflow.errors import InvariantViolationError, MissingValueError, PredicateError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from resultflow.core.lifting import ExceptionMapper

log = logging.getLogger(__name__)


class Unit:
    """The payload of a success that carries no information.

    There is exactly one instance, ``UNIT``; ``Unit()`` returns it. It is
    falsy, like the ``None`` it stands in for.
    """

    __slots__ = ()
    _instance: ClassVar[Unit]

    def __new__(cls) -> Unit:
        return cls._instance

    def __repr__(self) -> str:
        return "Unit()"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[type[Unit], tuple[()]]:
        return (Unit, ())

    def __copy__(self) -> Unit:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Unit:
        return self


Unit._instance = object.__new__(Unit)
UNIT = Unit()


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful computation."""

    value: T

    def __post_init__(self) -> None:
        if self.value is None:
            raise TypeError(
                "Success cannot carry None; use UNIT for operations without a payload"
            )

    @staticmethod
    def is_success() -> Literal[True]:
        return True

    @staticmethod
    def is_failure() -> Literal[False]:
        return False

    def match[R](
        self, on_success: Callable[[T], R], on_failure: Callable[[Exception], R]
    ) -> R:
        return on_success(self.value)

    def then[R](
        self,
        func: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Result[R]:
        """Run ``func`` on the value and return its Result (flat-map).

        Without ``map_exception`` the function must return a Result and any
        exception it raises propagates. With it, ``func`` is lifted: plain
        returns become Successes (``None`` becomes ``UNIT``) and raised
        exceptions are classified into Failures.
        """
        step = _as_result_func(func, map_exception)
        return ensure_result(step(self.value), "then")

    def do(
        self,
        func: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Result[T]:
        """Run ``func`` for its effect and keep this Success.

        The return value is discarded unless it is a Failure, which then
        replaces this Success.
        """
        outcome = _as_result_func(func, map_exception)(self.value)
        if isinstance(outcome, Failure):
            return outcome
        return self

    def if_(
        self,
        predicate: Callable[[T], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Result[T]:
        """Keep this Success if ``predicate`` accepts the value.

        The predicate may return a ``bool`` or a ``Result[bool]``; a Failure
        from it propagates. A rejection yields ``Failure(PredicateError)``.
        """
        verdict = _as_result_func(predicate, map_exception)(self.value)
        match verdict:
            case Failure():
                return verdict
            case Success(value=accepted):
                pass
            case _:
                accepted = verdict
        if accepted:
            return self
        log.debug("Predicate %s rejected %r", _name_of(predicate), self.value)
        return Failure(PredicateError(current_config().predicate_message, value=self.value))

    def map_failure(self, mapper: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def get(self) -> T:
        return unwrap(self)

    def success_or_default(self, default: T | None = None) -> T:
        return self.value

    def failure_or_default(self, default: Exception | None = None) -> Exception | None:
        return default


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: Exception]:
    """A failed computation, containing the error."""

    error: E
    _traceback: TracebackType | None = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.error, Exception):
            raise TypeError(
                f"Failure must carry an Exception instance, got {type(self.error).__name__}"
            )
        # Raising appends frames to __traceback__; unwrap restores this one
        object.__setattr__(self, "_traceback", self.error.__traceback__)

    @staticmethod
    def is_success() -> Literal[False]:
        return False

    @staticmethod
    def is_failure() -> Literal[True]:
        return True

    def match[R](
        self, on_success: Callable[[Any], R], on_failure: Callable[[E], R]
    ) -> R:
        return on_failure(self.error)

    def then(
        self,
        func: Callable[[Any], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Failure[E]:
        return self

    def do(
        self,
        func: Callable[[Any], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Failure[E]:
        return self

    def if_(
        self,
        predicate: Callable[[Any], Any],
        map_exception: ExceptionMapper | None = None,
    ) -> Failure[E]:
        return self

    def map_failure[F: Exception](self, mapper: Callable[[E], F]) -> Failure[F]:
        """Replace the carried error with ``mapper(error)``."""
        return Failure(mapper(self.error))

    def get(self) -> Never:
        return unwrap(self)

    def success_or_default[T](self, default: T | None = None) -> T | None:
        return default

    def failure_or_default(self, default: Exception | None = None) -> E:
        return self.error


type Result[T] = Success[T] | Failure[Exception]


def is_success[T](result: Result[T]) -> TypeIs[Success[T]]:
    return isinstance(result, Success)


def is_failure(result: Result[Any]) -> TypeIs[Failure[Exception]]:
    return isinstance(result, Failure)


def match[T, R](
    result: Result[T],
    on_success: Callable[[T], R],
    on_failure: Callable[[Exception], R],
) -> R:
    """Dispatch on the variant of ``result``.

    Raises:
        InvariantViolationError: If ``result`` is neither Success nor Failure.
    """
    match result:
        case Success(value=value):
            return on_success(value)
        case Failure(error=error):
            return on_failure(error)
        case _:
            raise _unmatched(result)


def unwrap[T](result: Result[T]) -> T:
    """Return the Success payload or raise the Failure's error.

    The error is raised with the traceback it had when the Failure was built,
    so unwrapping the same Failure repeatedly does not grow it.
    """
    match result:
        case Success(value=value):
            return value
        case Failure(error=error):
            raise error.with_traceback(result._traceback)
        case _:
            raise _unmatched(result)


def to_result(obj: Any) -> Result[Any]:
    """Convert a plain value or error into a Result.

    Results pass through unchanged, exceptions become Failures and ``None``
    becomes a Failure carrying ``MissingValueError``. Anything else is a
    Success.
    """
    match obj:
        case Success() | Failure():
            return obj
        case Exception():
            return Failure(obj)
        case None:
            return Failure(
                MissingValueError(
                    "Cannot build a Success from None",
                    hint="Use UNIT for operations without a payload",
                )
            )
        case _:
            return Success(obj)


def ensure_result(obj: Any, stage: str) -> Result[Any]:
    """Return ``obj`` if it is a Result, else raise ``InvariantViolationError``."""
    if isinstance(obj, Success | Failure):
        return obj
    raise InvariantViolationError(
        f"Continuation passed to {stage}() returned {type(obj).__name__}; "
        "expected Success or Failure",
        received=obj,
        hint="Return a Result, or pass map_exception= to lift a plain function",
    )


def _as_result_func(
    func: Callable[..., Any], map_exception: ExceptionMapper | None
) -> Callable[..., Any]:
    if map_exception is None:
        return func
    # Deferred: lifting builds Results from this module
    from resultflow.core.lifting import lift

    return lift(func, map_exception)


def _unmatched(obj: Any) -> InvariantViolationError:
    return InvariantViolationError(
        f"Unable to match {type(obj).__name__}; expected Success or Failure",
        received=obj,
    )


def _name_of(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)
