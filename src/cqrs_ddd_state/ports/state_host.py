"""Protocols describing the event-dispatch runtime that controllers build on.

:class:`~cqrs_ddd_state.host.StateHost` is the in-process implementation;
controllers only rely on what is declared here.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Protocol,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable, Coroutine

S = TypeVar("S")
S_contra = TypeVar("S_contra", contravariant=True)
Ev = TypeVar("Ev")
Ev_contra = TypeVar("Ev_contra", contravariant=True)


@runtime_checkable
class IEmitter(Protocol[S_contra]):
    """Publishes new states; valid only while its handler invocation runs."""

    def __call__(self, state: S_contra) -> None:
        ...

    @property
    def is_done(self) -> bool:
        ...


class StateHandler(Protocol[Ev_contra, S]):
    """Async handler invoked once per matching event."""

    def __call__(self, event: Ev_contra, emit: IEmitter[S]) -> Awaitable[None]:
        ...


@runtime_checkable
class IEventTransformer(Protocol):
    """Decides how invocations of one registration are sequenced.

    ``schedule`` receives a factory for the invocation coroutine and returns
    the task running it, or ``None`` when the invocation is dropped.
    """

    def schedule(
        self,
        invoke: Callable[[], Coroutine[Any, Any, None]],
    ) -> asyncio.Task[None] | None:
        ...


@runtime_checkable
class IStateHost(Protocol, Generic[Ev, S]):
    """Protocol for an event-driven state holder."""

    @property
    def state(self) -> S:
        """The current state, readable between events."""
        ...

    def on(
        self,
        event_type: type[Ev],
        handler: StateHandler[Ev, S],
        *,
        transformer: IEventTransformer | None = None,
    ) -> None:
        """Subscribe *handler* to events of *event_type*."""
        ...

    def add(self, event: Ev) -> asyncio.Future[Any] | None:
        """Deliver *event* to its handler(s)."""
        ...

    async def close(self) -> None:
        """Stop accepting events and cancel in-flight invocations."""
        ...
