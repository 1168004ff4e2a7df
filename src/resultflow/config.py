"""Configuration schema and scoped resolution for resultflow.

Resolve once, freeze, then flow: values are validated through the Pydantic
``Settings`` wall into an immutable ``FrozenConfig``. The active config lives
in a ``ContextVar`` so independent chains (threads or asyncio tasks) never
observe each other's scopes.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import asdict, dataclass
from functools import cache
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resultflow.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

__all__ = [
    "FrozenConfig",
    "Settings",
    "config_scope",
    "current_config",
    "resolve_config",
]


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    model_config = ConfigDict(extra="forbid")

    # Message of the PredicateError carried by a rejected ``if_``
    predicate_message: str = Field(default="Predicate returned false!", min_length=1)
    # Message of the AggregateFailureError built by collection aggregation
    aggregate_message: str = Field(default="One or more results failed", min_length=1)
    # Attach tracebacks to the DEBUG records emitted when lifting captures an error
    log_captured_errors: bool = Field(default=False)

    @field_validator("predicate_message", "aggregate_message", mode="before")
    @classmethod
    def strip_messages(cls, v: Any) -> Any:
        """Trim surrounding whitespace so blank messages fail ``min_length``."""
        if isinstance(v, str):
            return v.strip()
        return v


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration consulted by the combinators."""

    predicate_message: str
    aggregate_message: str
    log_captured_errors: bool


def resolve_config(
    overrides: Mapping[str, Any] | None = None, **kwargs: Any
) -> FrozenConfig:
    """Validate overrides on top of the defaults and freeze the result.

    Args:
        overrides: Field values to apply over the defaults.
        **kwargs: Additional field values; these win over ``overrides``.

    Returns:
        The validated, immutable configuration.

    Raises:
        ConfigurationError: If any value fails validation or a key is unknown.
    """
    merged: dict[str, Any] = {**(overrides or {}), **kwargs}
    try:
        settings = Settings(**merged)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid resultflow configuration ({fields})",
            hint=f"Valid fields: {', '.join(Settings.model_fields)}",
        ) from e
    return FrozenConfig(**settings.model_dump())


@cache
def _default_config() -> FrozenConfig:
    return resolve_config()


_active_config: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "resultflow_config", default=None
)


def current_config() -> FrozenConfig:
    """Return the config of the innermost active ``config_scope``, else defaults."""
    scoped = _active_config.get()
    return scoped if scoped is not None else _default_config()


@contextmanager
def config_scope(
    config: FrozenConfig | Mapping[str, Any] | None = None, **kwargs: Any
) -> Generator[FrozenConfig]:
    """Activate a configuration for the duration of a ``with`` block.

    Accepts a ready ``FrozenConfig`` or override values; overrides are layered
    on the currently active configuration, so scopes nest.

    Example:
        with config_scope(predicate_message="age must be positive"):
            Success(-1).if_(lambda age: age > 0)
    """
    if isinstance(config, FrozenConfig):
        if kwargs:
            raise ConfigurationError(
                "config_scope() takes either a FrozenConfig or overrides, not both"
            )
        resolved = config
    else:
        base = asdict(current_config())
        resolved = resolve_config({**base, **(config or {})}, **kwargs)
    token = _active_config.set(resolved)
    try:
        yield resolved
    finally:
        _active_config.reset(token)
