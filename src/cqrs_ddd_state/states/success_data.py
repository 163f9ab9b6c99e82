"""State that only carries data once the unit of work succeeded."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import model_validator
from typing_extensions import Self

from ..failures import ClassifiedFailure
from ..utils import UNSET
from .base import Phase, State

D = TypeVar("D")
E = TypeVar("E")
R = TypeVar("R")


class SuccessDataState(State[E], Generic[D, E]):
    """State for one-shot fetches: ``data`` exists only in ``SUCCESS``.

    ``INITIAL`` and ``LOADING`` carry nothing, ``FAILURE`` carries the
    classified exception. A ``SUCCESS`` state may hold ``None`` as its data.
    """

    data: Any = None

    @model_validator(mode="after")
    def _check_data(self) -> Self:
        if self.phase is not Phase.SUCCESS and self.data is not None:
            raise ValueError(f"a {self.phase.value} state cannot carry data")
        return self

    # ── Constructors ─────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Self:
        return cls(phase=Phase.INITIAL)

    @classmethod
    def loading(cls) -> Self:
        return cls(phase=Phase.LOADING)

    @classmethod
    def success(cls, data: D) -> Self:
        return cls(phase=Phase.SUCCESS, data=data)

    @classmethod
    def failure(cls, exception: ClassifiedFailure[E]) -> Self:
        return cls(phase=Phase.FAILURE, exception=exception)

    # ── Transitions ──────────────────────────────────────────────

    def to_initial(self) -> Self:
        return type(self).initial()

    def to_loading(self) -> Self:
        return type(self).loading()

    def to_success(self, data: D) -> Self:
        return type(self).success(data)

    def to_failure(self, exception: ClassifiedFailure[E]) -> Self:
        return type(self).failure(exception)

    def copy_with(
        self,
        *,
        data: D = UNSET,
        exception: ClassifiedFailure[E] | None = None,
    ) -> Self:
        """Return a copy in the same phase.

        *data* only applies to a ``SUCCESS`` state and *exception* only to a
        ``FAILURE`` state; either defaults to the current value.
        """
        if self.phase is Phase.SUCCESS:
            return type(self).success(self.data if data is UNSET else data)
        if self.phase is Phase.FAILURE:
            return type(self).failure(exception or self.exception)
        return type(self)(phase=self.phase)

    # ── Dispatch ─────────────────────────────────────────────────

    def _handler_args(self) -> tuple[Any, ...]:
        if self.phase is Phase.SUCCESS:
            return (self.data,)
        if self.phase is Phase.FAILURE:
            return (self.exception,)
        return ()

    def match(
        self,
        *,
        initial: Callable[[], R],
        loading: Callable[[], R],
        success: Callable[[D], R],
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
        success: Callable[[D], R] | None = None,
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
        or_else: Callable[[D | None], R],
        *,
        initial: Callable[[], R] | None = None,
        loading: Callable[[], R] | None = None,
        success: Callable[[D], R] | None = None,
        failure: Callable[[ClassifiedFailure[E]], R] | None = None,
    ) -> R:
        """Call the handler of the current phase, falling back to *or_else*.

        *or_else* receives the data in ``SUCCESS`` and ``None`` in every
        other phase, so it must handle both.
        """
        handler = self._handler_for(
            {
                Phase.INITIAL: initial,
                Phase.LOADING: loading,
                Phase.SUCCESS: success,
                Phase.FAILURE: failure,
            }
        )
        if handler is None:
            return or_else(self.data if self.phase is Phase.SUCCESS else None)
        return handler(*self._handler_args())
