"""Tests for the StateHost runtime."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from cqrs_ddd_state.host import (
    Emitter,
    HostObserver,
    StateHost,
    droppable,
    set_observer,
)
from cqrs_ddd_state.ports import IEmitter, IEventTransformer, IStateHost
from cqrs_ddd_state.primitives.exceptions import (
    EmitterClosedError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    HostClosedError,
)

# ============================================================================
# Test Events
# ============================================================================


class Increment:
    def __init__(self, by: int = 1) -> None:
        self.by = by


class BigIncrement(Increment):
    pass


class Explode:
    def __init__(self, error: Exception) -> None:
        self.error = error


class Counter(StateHost[Any, int]):
    def __init__(self) -> None:
        super().__init__(0)
        self.changes: list[tuple[int, int]] = []
        self.on(Increment, self._increment)
        self.on(Explode, self._explode)

    async def _increment(self, event: Increment, emit: Emitter[int]) -> None:
        emit(self.state + event.by)

    async def _explode(self, event: Explode, emit: Emitter[int]) -> None:
        raise event.error

    def on_change(self, previous: int, current: int) -> None:
        self.changes.append((previous, current))


class RecordingObserver(HostObserver):
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def on_event(self, host: Any, event: Any) -> None:
        self.calls.append(("event", type(event).__name__))

    def on_change(self, host: Any, previous: Any, current: Any) -> None:
        self.calls.append(("change", (previous, current)))

    def on_error(self, host: Any, error: BaseException) -> None:
        self.calls.append(("error", error))

    def on_close(self, host: Any) -> None:
        self.calls.append(("close", type(host).__name__))


# ============================================================================
# Tests: emission
# ============================================================================


@pytest.mark.asyncio
async def test_handler_emits_new_state() -> None:
    counter = Counter()

    await counter.add(Increment(by=2))
    await counter.add(Increment(by=3))

    assert counter.state == 5
    assert counter.changes == [(0, 2), (2, 5)]


def test_host_satisfies_protocol() -> None:
    counter = Counter()
    assert isinstance(counter, IStateHost)
    assert isinstance(droppable(), IEventTransformer)
    assert isinstance(Emitter(lambda s: None), IEmitter)


@pytest.mark.asyncio
async def test_listeners_receive_states_until_unsubscribed() -> None:
    counter = Counter()
    seen: list[int] = []
    unsubscribe = counter.listen(seen.append)

    await counter.add(Increment())
    unsubscribe()
    await counter.add(Increment())

    assert seen == [1]
    assert counter.state == 2


@pytest.mark.asyncio
async def test_unchanged_state_is_not_reemitted() -> None:
    counter = Counter()
    seen: list[int] = []
    counter.listen(seen.append)

    await counter.add(Increment(by=0))
    await counter.add(Increment(by=0))

    # the first emission always goes through, later duplicates are skipped
    assert seen == [0]


@pytest.mark.asyncio
async def test_emitter_is_closed_after_handler_returns() -> None:
    captured: list[Emitter[int]] = []
    host: StateHost[Increment, int] = StateHost(0)

    async def keep_emitter(event: Increment, emit: Emitter[int]) -> None:
        captured.append(emit)

    host.on(Increment, keep_emitter)
    await host.add(Increment())

    assert captured[0].is_done
    with pytest.raises(EmitterClosedError):
        captured[0](1)


# ============================================================================
# Tests: registration & routing
# ============================================================================


def test_duplicate_handler_is_rejected() -> None:
    counter = Counter()

    async def other(event: Increment, emit: Emitter[int]) -> None:
        return None

    with pytest.raises(HandlerRegistrationError):
        counter.on(Increment, other)


@pytest.mark.asyncio
async def test_unregistered_event_raises() -> None:
    counter = Counter()
    with pytest.raises(HandlerNotFoundError) as info:
        counter.add("not an event")
    assert info.value.event_type == "str"


@pytest.mark.asyncio
async def test_subclass_events_route_to_base_handler() -> None:
    counter = Counter()
    await counter.add(BigIncrement(by=10))
    assert counter.state == 10


@pytest.mark.asyncio
async def test_every_matching_handler_runs() -> None:
    host: StateHost[Increment, list[str]] = StateHost([])

    async def base(event: Increment, emit: Emitter[list[str]]) -> None:
        emit([*host.state, "base"])

    async def big(event: BigIncrement, emit: Emitter[list[str]]) -> None:
        emit([*host.state, "big"])

    host.on(Increment, base)
    host.on(BigIncrement, big)

    await host.add(BigIncrement())

    assert sorted(host.state) == ["base", "big"]


@pytest.mark.asyncio
async def test_droppable_transformer_ignores_events_while_busy() -> None:
    release = asyncio.Event()
    host: StateHost[Increment, int] = StateHost(0)

    async def slow(event: Increment, emit: Emitter[int]) -> None:
        await release.wait()
        emit(host.state + event.by)

    host.on(Increment, slow, transformer=droppable())
    first = host.add(Increment())
    second = host.add(Increment())
    release.set()
    assert first is not None
    await first

    assert second is None
    assert host.state == 1


# ============================================================================
# Tests: fault boundary
# ============================================================================


@pytest.mark.asyncio
async def test_handler_failure_is_logged_reported_and_reraised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    observer = RecordingObserver()
    set_observer(observer)
    counter = Counter()
    error = ValueError("boom")

    with caplog.at_level(logging.ERROR, logger="cqrs_ddd_state.host.host"):
        with pytest.raises(ValueError) as info:
            await counter.add(Explode(error))

    assert info.value is error
    assert ("error", error) in observer.calls
    assert "Error executing state handler for Explode in Counter" in caplog.text


@pytest.mark.asyncio
async def test_broken_observer_does_not_mask_failure() -> None:
    class BrokenObserver(HostObserver):
        def on_error(self, host: Any, error: BaseException) -> None:
            raise RuntimeError("observer bug")

    set_observer(BrokenObserver())
    counter = Counter()
    error = KeyError("k")

    with pytest.raises(KeyError) as info:
        await counter.add(Explode(error))

    assert info.value is error


class RaisingObserver(HostObserver):
    def on_event(self, host: Any, event: Any) -> None:
        raise RuntimeError("on_event bug")

    def on_change(self, host: Any, previous: Any, current: Any) -> None:
        raise RuntimeError("on_change bug")

    def on_close(self, host: Any) -> None:
        raise RuntimeError("on_close bug")


@pytest.mark.asyncio
async def test_raising_observer_callbacks_are_logged_not_raised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    set_observer(RaisingObserver())
    counter = Counter()
    seen: list[int] = []
    counter.listen(seen.append)

    with caplog.at_level(logging.WARNING, logger="cqrs_ddd_state.host.host"):
        await counter.add(Increment(by=2))
        await counter.close()

    assert counter.state == 2
    assert seen == [2]
    assert counter.is_closed
    assert "Host observer on_event failed for Counter" in caplog.text
    assert "Host observer on_change failed for Counter" in caplog.text
    assert "Host observer on_close failed for Counter" in caplog.text


@pytest.mark.asyncio
async def test_observer_sees_lifecycle() -> None:
    observer = RecordingObserver()
    set_observer(observer)

    async with Counter() as counter:
        await counter.add(Increment())

    assert observer.calls == [
        ("event", "Increment"),
        ("change", (0, 1)),
        ("close", "Counter"),
    ]
    assert counter.is_closed


# ============================================================================
# Tests: lifecycle
# ============================================================================


@pytest.mark.asyncio
async def test_closed_host_rejects_events() -> None:
    counter = Counter()
    await counter.close()
    await counter.close()

    with pytest.raises(HostClosedError):
        counter.add(Increment())


@pytest.mark.asyncio
async def test_close_blocks_late_emissions() -> None:
    host: StateHost[Increment, int] = StateHost(0)
    captured: list[Emitter[int]] = []
    started = asyncio.Event()

    async def hang(event: Increment, emit: Emitter[int]) -> None:
        captured.append(emit)
        started.set()
        await asyncio.Event().wait()

    host.on(Increment, hang)
    task = host.add(Increment())
    await started.wait()
    await host.close()

    assert task is not None and task.cancelled()
    with pytest.raises(EmitterClosedError):
        captured[0](5)
    assert host.state == 0
