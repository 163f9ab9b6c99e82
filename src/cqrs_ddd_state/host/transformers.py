"""Event transformers — how concurrent events of one type become invocations.

Every factory returns a fresh transformer; pass one per registration::

    host.on(Refresh, handler, transformer=restartable())
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    InvocationFactory = Callable[[], Coroutine[Any, Any, None]]

logger = logging.getLogger(__name__)


class ConcurrentTransformer:
    """Start every invocation immediately; invocations interleave freely."""

    def schedule(self, invoke: InvocationFactory) -> asyncio.Task[None] | None:
        return asyncio.get_running_loop().create_task(invoke())


class SequentialTransformer:
    """Run invocations one at a time, in arrival order."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    def schedule(self, invoke: InvocationFactory) -> asyncio.Task[None] | None:
        async def _run_in_turn() -> None:
            async with self._lock:
                await invoke()

        return asyncio.get_running_loop().create_task(_run_in_turn())


class DroppableTransformer:
    """Ignore events that arrive while an invocation is still running."""

    def __init__(self) -> None:
        self._current: asyncio.Task[None] | None = None

    def schedule(self, invoke: InvocationFactory) -> asyncio.Task[None] | None:
        if self._current is not None and not self._current.done():
            logger.debug("Dropping event: previous invocation still running")
            return None
        self._current = asyncio.get_running_loop().create_task(invoke())
        return self._current


class RestartableTransformer:
    """Cancel the running invocation when a new event arrives."""

    def __init__(self) -> None:
        self._current: asyncio.Task[None] | None = None

    def schedule(self, invoke: InvocationFactory) -> asyncio.Task[None] | None:
        if self._current is not None and not self._current.done():
            logger.debug("Restarting: cancelling previous invocation")
            self._current.cancel()
        self._current = asyncio.get_running_loop().create_task(invoke())
        return self._current


def concurrent() -> ConcurrentTransformer:
    return ConcurrentTransformer()


def sequential() -> SequentialTransformer:
    return SequentialTransformer()


def droppable() -> DroppableTransformer:
    return DroppableTransformer()


def restartable() -> RestartableTransformer:
    return RestartableTransformer()
