"""StateHost — asyncio event-to-state runtime."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..instrumentation import get_hook_registry
from ..primitives.exceptions import (
    EmitterClosedError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    HostClosedError,
)
from .observer import get_observer
from .transformers import concurrent

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.state_host import IEventTransformer, StateHandler

logger = logging.getLogger(__name__)

Ev = TypeVar("Ev")
S = TypeVar("S")


class Emitter(Generic[S]):
    """Emits states on behalf of one handler invocation.

    Closed as soon as the invocation finishes; emitting afterwards raises
    :class:`EmitterClosedError`.
    """

    def __init__(self, emit: Callable[[S], None]) -> None:
        self._emit = emit
        self._done = False

    def __call__(self, state: S) -> None:
        if self._done:
            raise EmitterClosedError(
                "emit was called after the handler invocation completed"
            )
        self._emit(state)

    @property
    def is_done(self) -> bool:
        return self._done

    def close(self) -> None:
        self._done = True


@dataclass(frozen=True)
class _Registration(Generic[Ev, S]):
    event_type: type[Ev]
    handler: StateHandler[Ev, S]
    transformer: IEventTransformer


class StateHost(Generic[Ev, S]):
    """Holds one current state and turns events into state transitions.

    Handlers are registered per event type with :meth:`on` and receive the
    event plus an :class:`Emitter`. The host is single-writer: every emission
    runs on the owning event loop, in the order the emit calls happen.

    A failing handler is logged, reported to :meth:`on_error` and to the
    process-wide observer, and its task keeps the original exception so
    ``await host.add(event)`` re-raises it.

    Usage::

        host = StateHost[Increment, int](0)

        async def increment(event: Increment, emit: Emitter[int]) -> None:
            emit(host.state + event.by)

        host.on(Increment, increment)
        await host.add(Increment(by=2))
        assert host.state == 2
    """

    def __init__(self, initial_state: S) -> None:
        self._state = initial_state
        self._emitted = False
        self._closed = False
        self._registrations: dict[type[Any], _Registration[Any, S]] = {}
        self._listeners: list[Callable[[S], Any]] = []
        self._tasks: set[asyncio.Task[None]] = set()

    # ── State ────────────────────────────────────────────────────

    @property
    def state(self) -> S:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    def listen(self, listener: Callable[[S], Any]) -> Callable[[], None]:
        """Call *listener* with every emitted state; returns an unsubscribe."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── Registration ─────────────────────────────────────────────

    def on(
        self,
        event_type: type[Ev],
        handler: StateHandler[Ev, S],
        *,
        transformer: IEventTransformer | None = None,
    ) -> None:
        """Register the handler for *event_type*.

        Events are routed with ``isinstance``, so a handler for a base event
        type also receives its subclasses. Only one handler per event type is
        allowed.
        """
        if event_type in self._registrations:
            msg = (
                f"Duplicate handler for {event_type.__name__} on "
                f"{type(self).__name__}: on({event_type.__name__}, ...) "
                "can only be called once per event type"
            )
            raise HandlerRegistrationError(msg)
        self._registrations[event_type] = _Registration(
            event_type=event_type,
            handler=handler,
            transformer=transformer or concurrent(),
        )
        logger.debug(
            "Registered state handler %s -> %s",
            event_type.__name__,
            type(self).__name__,
        )

    # ── Dispatching ──────────────────────────────────────────────

    def add(self, event: Ev) -> asyncio.Future[Any] | None:
        """Deliver *event* to every matching handler.

        Returns an awaitable that completes when the invocations finish and
        re-raises a handler's original failure, or ``None`` when every
        invocation was dropped by its transformer. Must be called from a
        running event loop.
        """
        if self._closed:
            raise HostClosedError(
                f"Cannot add {type(event).__name__}: {type(self).__name__} is closed"
            )
        matching = [
            registration
            for event_type, registration in self._registrations.items()
            if isinstance(event, event_type)
        ]
        if not matching:
            raise HandlerNotFoundError(type(self).__name__, type(event).__name__)

        self._notify_observer("on_event", event)

        tasks: list[asyncio.Task[None]] = []
        for registration in matching:
            task = registration.transformer.schedule(
                lambda r=registration: self._invoke(r, event)
            )
            if task is None:
                continue
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)
            tasks.append(task)

        if not tasks:
            return None
        if len(tasks) == 1:
            return tasks[0]
        return asyncio.gather(*tasks)

    async def _invoke(self, registration: _Registration[Any, S], event: Any) -> None:
        emitter: Emitter[S] = Emitter(self._emit)
        event_name = type(event).__name__
        attributes: dict[str, Any] = {
            "event.type": event_name,
            "host.type": type(self).__name__,
            "state.phase": getattr(self._state, "phase", None),
        }

        async def _run_handler() -> None:
            await registration.handler(event, emitter)

        try:
            await get_hook_registry().execute_all(
                f"state.handle.{event_name}",
                attributes,
                _run_handler,
            )
        except Exception as exc:
            logger.exception(
                "Error executing state handler for %s in %s",
                event_name,
                type(self).__name__,
            )
            self._report_error(exc)
            raise
        finally:
            emitter.close()

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        # Failures were reported by _invoke; mark them retrieved so unawaited
        # tasks do not warn on garbage collection.
        if not task.cancelled():
            task.exception()

    # ── Emission ─────────────────────────────────────────────────

    def _emit(self, state: S) -> None:
        if self._closed:
            raise HostClosedError(
                f"Cannot emit new states: {type(self).__name__} is closed"
            )
        if self._emitted and state == self._state:
            logger.debug("Skipping emission of unchanged state %r", state)
            return
        previous = self._state
        self.on_change(previous, state)
        self._notify_observer("on_change", previous, state)
        self._state = state
        self._emitted = True
        for listener in list(self._listeners):
            listener(state)

    # ── Hooks ────────────────────────────────────────────────────

    def on_change(self, previous: S, current: S) -> None:
        """Called before every state change. Override to observe it."""

    def on_error(self, error: BaseException) -> None:
        """Called with the raw failure of a handler. Override to observe it."""

    def _report_error(self, error: BaseException) -> None:
        self.on_error(error)
        self._notify_observer("on_error", error)

    def _notify_observer(self, callback: str, *args: Any) -> None:
        # Observer failures must not replace the handler's outcome.
        try:
            getattr(get_observer(), callback)(self, *args)
        except Exception:
            logger.warning(
                "Host observer %s failed for %s",
                callback,
                type(self).__name__,
                exc_info=True,
            )

    # ── Lifecycle ────────────────────────────────────────────────

    async def close(self) -> None:
        """Stop accepting events and cancel in-flight invocations."""
        if self._closed:
            return
        self._closed = True
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            # Outcomes were already reported by _invoke.
            await asyncio.gather(*pending, return_exceptions=True)
        self._listeners.clear()
        self._notify_observer("on_close")
        logger.debug("Closed %s", type(self).__name__)

    async def __aenter__(self) -> StateHost[Ev, S]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
