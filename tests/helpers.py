"""Test helpers (small, reusable doubles)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Recorder:
    """Callable test double capturing every argument it is called with.

    ``returns`` is handed back from each call, so the recorder can stand in
    for effects (``do``), continuations (``then``) and predicates (``if_``).
    """

    returns: Any = None
    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        return self.returns

    @property
    def call_count(self) -> int:
        return len(self.calls)


@dataclass
class AsyncRecorder(Recorder):
    """Recorder whose calls suspend once before returning."""

    async def __call__(self, value: Any) -> Any:  # type: ignore[override]
        self.calls.append(value)
        await asyncio.sleep(0)
        return self.returns


class BoomError(Exception):
    """Domain error used to build Failures in tests."""
