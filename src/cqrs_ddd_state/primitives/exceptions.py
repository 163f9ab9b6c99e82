"""Errors raised by cqrs-ddd-state itself.

Failures raised by user actions are never wrapped in these: they are
classified for state consumers and re-raised unchanged.
"""

from __future__ import annotations


class CQRSDDDStateError(Exception):
    """Root exception for the cqrs-ddd-state package."""


class HandlerError(CQRSDDDStateError):
    """Base class for handler registration and lookup errors."""


class HandlerRegistrationError(HandlerError):
    """Raised when a second handler is registered for the same event type.

    Usage: StateHost raises this from ``on()``; a host owns exactly one
    handler per event type.
    """


class HandlerNotFoundError(HandlerError):
    """Raised when an event is added to a host that has no handler for it."""

    def __init__(self, host_type: str, event_type: str) -> None:
        self.host_type = host_type
        self.event_type = event_type
        super().__init__(
            f"{host_type}.add({event_type}) was called without a registered "
            f"handler; register one with on({event_type}, ...)"
        )


class HostError(CQRSDDDStateError):
    """Base class for state host lifecycle errors."""


class HostClosedError(HostError):
    """Raised when events are added to, or states emitted by, a closed host."""


class EmitterClosedError(HostError):
    """Raised when an emitter is used after its handler invocation finished.

    Usage: keep ``emit`` calls inside the handler body and await every
    asynchronous step before returning.
    """
