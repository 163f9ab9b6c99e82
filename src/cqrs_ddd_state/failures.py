"""Classified failures — the outcome of running a raised error through the classifier.

A failure raised by a unit of work ends up as exactly one of:

- :class:`Fatal` — an unexpected defect (anything not declared as business);
- :class:`BusinessTyped` — an expected error matching the declared business type;
- :class:`BusinessUntyped` — an error explicitly marked non-fatal that does not
  match the declared business type.

Instances are immutable and compare structurally.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from .utils import model_origin

E = TypeVar("E")
R = TypeVar("R")


class ClassifiedFailure(BaseModel, Generic[E]):
    """Base of the classified failure union.

    Use the ``fatal`` / ``business_typed`` / ``business_untyped`` factories or
    the concrete classes directly.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # ── Factories ────────────────────────────────────────────────

    @staticmethod
    def fatal(cause: Any) -> Fatal[Any]:
        return Fatal(cause=cause)

    @staticmethod
    def business_typed(error: Any) -> BusinessTyped[Any]:
        return BusinessTyped(error=error)

    @staticmethod
    def business_untyped(cause: Any) -> BusinessUntyped[Any]:
        return BusinessUntyped(cause=cause)

    # ── Introspection ────────────────────────────────────────────

    @property
    def original(self) -> Any:
        """The raw value that was classified."""
        raise NotImplementedError

    @property
    def is_fatal(self) -> bool:
        return isinstance(self, Fatal)

    @property
    def is_business(self) -> bool:
        return isinstance(self, Business)

    @property
    def is_business_typed(self) -> bool:
        return isinstance(self, BusinessTyped)

    @property
    def is_business_untyped(self) -> bool:
        return isinstance(self, BusinessUntyped)

    # ── Dispatch ─────────────────────────────────────────────────

    def match(
        self,
        *,
        fatal: Callable[[Any], R],
        business_typed: Callable[[E], R],
        business_untyped: Callable[[Any], R],
    ) -> R:
        """Call the handler for this case with the wrapped value."""
        if isinstance(self, Fatal):
            return fatal(self.cause)
        if isinstance(self, BusinessTyped):
            return business_typed(self.error)
        if isinstance(self, BusinessUntyped):
            return business_untyped(self.cause)
        raise TypeError(f"Unknown classified failure: {type(self).__name__}")

    def match_or_none(
        self,
        *,
        fatal: Callable[[Any], R] | None = None,
        business_typed: Callable[[E], R] | None = None,
        business_untyped: Callable[[Any], R] | None = None,
    ) -> R | None:
        """Like :meth:`match`, returning ``None`` when this case has no handler."""
        handler = self._select(fatal, business_typed, business_untyped)
        if handler is None:
            return None
        return handler(self.original)

    def match_or(
        self,
        or_else: Callable[[Any], R],
        *,
        fatal: Callable[[Any], R] | None = None,
        business_typed: Callable[[E], R] | None = None,
        business_untyped: Callable[[Any], R] | None = None,
    ) -> R:
        """Like :meth:`match`, calling *or_else* when this case has no handler."""
        handler = self._select(fatal, business_typed, business_untyped)
        if handler is None:
            return or_else(self.original)
        return handler(self.original)

    def _select(
        self,
        fatal: Callable[[Any], R] | None,
        business_typed: Callable[[E], R] | None,
        business_untyped: Callable[[Any], R] | None,
    ) -> Callable[[Any], R] | None:
        if isinstance(self, Fatal):
            return fatal
        if isinstance(self, BusinessTyped):
            return business_typed
        return business_untyped

    # ── Value semantics ──────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassifiedFailure):
            return False
        if model_origin(self) is not model_origin(other):
            return False
        return bool(self.original == other.original)

    def __hash__(self) -> int:
        return hash((model_origin(self).__name__, self.original))

    def __repr__(self) -> str:
        return f"{model_origin(self).__name__}({self.original!r})"

    __str__ = __repr__


class Fatal(ClassifiedFailure[E], Generic[E]):
    """An unexpected defect: not declared as a business error."""

    cause: Any

    @property
    def original(self) -> Any:
        return self.cause


class Business(ClassifiedFailure[E], Generic[E]):
    """Base for expected, recoverable business failures."""


class BusinessTyped(Business[E], Generic[E]):
    """A business failure matching the declared business error type."""

    error: E

    @property
    def original(self) -> Any:
        return self.error


class BusinessUntyped(Business[E], Generic[E]):
    """A failure marked non-fatal that does not match the declared type."""

    cause: Any

    @property
    def original(self) -> Any:
        return self.cause

