"""Instrumentation hooks wrapped around every state handler invocation.

Each invocation runs under the operation name ``state.handle.<EventName>``
with the attributes ``event.type``, ``host.type`` and ``state.phase`` (the
phase before the handler starts). Hooks are matched by glob patterns and run
in ascending priority, outermost first.
"""

from __future__ import annotations

import fnmatch
import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cqrs_ddd.state.instrumentation")


@runtime_checkable
class InstrumentationHook(Protocol):
    """Protocol for instrumentation hooks (tracing, metrics, timing)."""

    async def __call__(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Wrap an operation; must await *next_handler* to continue."""
        ...


class HookRegistration:
    """A registered hook with its priority and operation filter."""

    def __init__(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> None:
        self.hook = hook
        self.priority = priority
        self.operations = operations or []
        self.enabled = enabled

    def matches(self, operation: str) -> bool:
        if not self.enabled:
            return False
        if not self.operations:
            return True
        return any(fnmatch.fnmatch(operation, pattern) for pattern in self.operations)


class HookRegistry:
    """Ordered collection of instrumentation hooks."""

    def __init__(self) -> None:
        self._registrations: list[HookRegistration] = []

    def register(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        enabled: bool = True,
    ) -> HookRegistration:
        """Register *hook*; lower priorities wrap higher ones."""
        registration = HookRegistration(
            hook, priority=priority, operations=operations, enabled=enabled
        )
        self._registrations.append(registration)
        self._registrations.sort(key=lambda r: r.priority)
        logger.debug(
            "Registered instrumentation hook %s (priority=%d)",
            type(hook).__name__,
            priority,
        )
        return registration

    async def execute_all(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run *next_handler* inside every hook matching *operation*."""
        matching = [r for r in self._registrations if r.matches(operation)]
        if not matching:
            return await next_handler()

        async def pipeline(index: int = 0) -> Any:
            if index >= len(matching):
                return await next_handler()
            return await matching[index].hook(
                operation,
                attributes,
                lambda: pipeline(index + 1),
            )

        return await pipeline()

    def clear(self) -> None:
        """Remove all registrations."""
        self._registrations.clear()

    def __len__(self) -> int:
        return len(self._registrations)


_hook_registry_var: ContextVar[HookRegistry | None] = ContextVar(
    "state_hook_registry", default=None
)


def get_hook_registry() -> HookRegistry:
    """Get the hook registry for the current context.

    A fresh registry is created on first access in each context, so hooks
    never leak between tests or unrelated tasks.
    """
    registry = _hook_registry_var.get()
    if registry is None:
        registry = HookRegistry()
        _hook_registry_var.set(registry)
    return registry


def set_hook_registry(registry: HookRegistry) -> None:
    """Set a custom hook registry in the current context."""
    _hook_registry_var.set(registry)
