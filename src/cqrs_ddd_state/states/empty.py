"""State without data, for operations that do not return a value."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from typing_extensions import Self

from ..failures import ClassifiedFailure
from .base import Phase, State

E = TypeVar("E")
R = TypeVar("R")


class EmptyState(State[E], Generic[E]):
    """State for features that keep no data across transitions.

    Only the ``FAILURE`` phase carries a payload (the classified exception).

    Usage::

        state = EmptyState.initial().to_loading()
        label = state.match(
            initial=lambda: "idle",
            loading=lambda: "saving...",
            success=lambda: "saved",
            failure=lambda exc: f"failed: {exc}",
        )
    """

    # ── Constructors ─────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Self:
        return cls(phase=Phase.INITIAL)

    @classmethod
    def loading(cls) -> Self:
        return cls(phase=Phase.LOADING)

    @classmethod
    def success(cls) -> Self:
        return cls(phase=Phase.SUCCESS)

    @classmethod
    def failure(cls, exception: ClassifiedFailure[E]) -> Self:
        return cls(phase=Phase.FAILURE, exception=exception)

    # ── Transitions ──────────────────────────────────────────────

    def to_initial(self) -> Self:
        return type(self).initial()

    def to_loading(self) -> Self:
        return type(self).loading()

    def to_success(self, data: Any = None) -> Self:
        """Move to ``SUCCESS``; *data* is accepted for uniformity and dropped."""
        return type(self).success()

    def to_failure(self, exception: ClassifiedFailure[E]) -> Self:
        return type(self).failure(exception)

    def copy_with(self, *, exception: ClassifiedFailure[E] | None = None) -> Self:
        """Return a copy in the same phase, replacing the exception if failed."""
        if self.phase is Phase.FAILURE and exception is not None:
            return type(self).failure(exception)
        return type(self)(phase=self.phase, exception=self.exception)

    # ── Dispatch ─────────────────────────────────────────────────

    def _handler_args(self) -> tuple[Any, ...]:
        if self.phase is Phase.FAILURE:
            return (self.exception,)
        return ()

    def match(
        self,
        *,
        initial: Callable[[], R],
        loading: Callable[[], R],
        success: Callable[[], R],
        failure: Callable[[ClassifiedFailure[E]], R],
    ) -> R:
        """Call the handler of the current phase. Every handler is required."""
        return self._dispatch(
            {
                Phase.INITIAL: initial,
                Phase.LOADING: loading,
                Phase.SUCCESS: success,
                Phase.FAILURE: failure,
            }
        )

    def match_or_none(
        self,
        *,
        initial: Callable[[], R] | None = None,
        loading: Callable[[], R] | None = None,
        success: Callable[[], R] | None = None,
        failure: Callable[[ClassifiedFailure[E]], R] | None = None,
    ) -> R | None:
        """Call the handler of the current phase, or return ``None`` if absent."""
        return self._dispatch_or_none(
            {
                Phase.INITIAL: initial,
                Phase.LOADING: loading,
                Phase.SUCCESS: success,
                Phase.FAILURE: failure,
            }
        )

    def match_or(
        self,
        or_else: Callable[[], R],
        *,
        initial: Callable[[], R] | None = None,
        loading: Callable[[], R] | None = None,
        success: Callable[[], R] | None = None,
        failure: Callable[[ClassifiedFailure[E]], R] | None = None,
    ) -> R:
        """Call the handler of the current phase, falling back to *or_else*."""
        handler = self._handler_for(
            {
                Phase.INITIAL: initial,
                Phase.LOADING: loading,
                Phase.SUCCESS: success,
                Phase.FAILURE: failure,
            }
        )
        if handler is None:
            return or_else()
        return handler(*self._handler_args())
