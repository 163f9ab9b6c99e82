"""Primitives: package exceptions."""

from __future__ import annotations

from .exceptions import (
    CQRSDDDStateError,
    EmitterClosedError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    HostClosedError,
    HostError,
)

__all__ = [
    "CQRSDDDStateError",
    "EmitterClosedError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "HostClosedError",
    "HostError",
]
