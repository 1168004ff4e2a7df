"""Exception hierarchy for resultflow.

Domain failures travel as ``Failure`` values; the classes here are what those
values carry (``PredicateError``, ``MissingValueError``, ``AggregateFailureError``)
plus the errors the library raises when it is misused.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence


class ResultflowError(Exception):
    """Base exception for all resultflow errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when one is attached."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(ResultflowError):
    """Configuration validation or resolution failed."""


class InvariantViolationError(ResultflowError):
    """A value that is neither ``Success`` nor ``Failure`` reached a combinator.

    This signals a broken structural guarantee (usually a continuation that
    forgot to return a Result) and is always raised, never wrapped.
    """

    def __init__(
        self, message: str, *, received: Any = None, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.received = received


class PredicateError(ResultflowError):
    """Carried by the Failure produced when an ``if_`` predicate rejects a value."""

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class MissingValueError(ResultflowError):
    """``None`` was offered where a success value is required."""


class AggregateFailureError(ExceptionGroup):
    """Every error of a failed collection, in encounter order.

    Raised by ``get_all`` and carried by the Failure of ``to_result_of_seq``.
    Being an ``ExceptionGroup``, it can be handled with ``except*``.
    """

    def __new__(cls, message: str, errors: Sequence[Exception]) -> AggregateFailureError:
        return super().__new__(cls, message, list(errors))

    def derive(self, excs: Sequence[Exception]) -> AggregateFailureError:
        return AggregateFailureError(self.message, excs)

    @property
    def errors(self) -> tuple[Exception, ...]:
        """The underlying errors, order preserved."""
        return tuple(self.exceptions)
