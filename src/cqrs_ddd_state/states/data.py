"""State that carries data in every phase."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from typing_extensions import Self

from ..failures import ClassifiedFailure
from ..utils import UNSET
from .base import Phase, State

D = TypeVar("D")
E = TypeVar("E")
R = TypeVar("R")


class DataState(State[E], Generic[D, E]):
    """State for features that always have data, e.g. a refreshable list.

    The data is seeded once and threaded through every transition: a
    transition that does not receive new data keeps the current one, so
    ``DataState.loading(5).to_initial() == DataState.initial(5)``.

    Only an omitted argument keeps the data. ``None`` is a value like any
    other: ``to_success(None)`` clears it, so a ``DataController`` action
    that returns ``None`` leaves ``SUCCESS`` with ``data=None``.
    """

    data: Any

    # ── Constructors ─────────────────────────────────────────────

    @classmethod
    def initial(cls, data: D) -> Self:
        return cls(phase=Phase.INITIAL, data=data)

    @classmethod
    def loading(cls, data: D) -> Self:
        return cls(phase=Phase.LOADING, data=data)

    @classmethod
    def success(cls, data: D) -> Self:
        return cls(phase=Phase.SUCCESS, data=data)

    @classmethod
    def failure(cls, data: D, exception: ClassifiedFailure[E]) -> Self:
        return cls(phase=Phase.FAILURE, data=data, exception=exception)

    # ── Transitions ──────────────────────────────────────────────

    def _data_or_current(self, data: Any) -> Any:
        return self.data if data is UNSET else data

    def to_initial(self, data: D = UNSET) -> Self:
        return type(self).initial(self._data_or_current(data))

    def to_loading(self, data: D = UNSET) -> Self:
        return type(self).loading(self._data_or_current(data))

    def to_success(self, data: D = UNSET) -> Self:
        return type(self).success(self._data_or_current(data))

    def to_failure(self, exception: ClassifiedFailure[E], data: D = UNSET) -> Self:
        return type(self).failure(self._data_or_current(data), exception)

    def copy_with(
        self,
        *,
        data: D = UNSET,
        exception: ClassifiedFailure[E] | None = None,
    ) -> Self:
        """Return a copy in the same phase with *data* and/or *exception* replaced.

        *exception* only applies to a ``FAILURE`` state.
        """
        new_data = self._data_or_current(data)
        if self.phase is Phase.FAILURE:
            return type(self).failure(new_data, exception or self.exception)
        return type(self)(phase=self.phase, data=new_data)

    # ── Dispatch ─────────────────────────────────────────────────

    def _handler_args(self) -> tuple[Any, ...]:
        if self.phase is Phase.FAILURE:
            return (self.data, self.exception)
        return (self.data,)

    def match(
        self,
        *,
        initial: Callable[[D], R],
        loading: Callable[[D], R],
        success: Callable[[D], R],
        failure: Callable[[D, ClassifiedFailure[E]], R],
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
        initial: Callable[[D], R] | None = None,
        loading: Callable[[D], R] | None = None,
        success: Callable[[D], R] | None = None,
        failure: Callable[[D, ClassifiedFailure[E]], R] | None = None,
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
        or_else: Callable[[D], R],
        *,
        initial: Callable[[D], R] | None = None,
        loading: Callable[[D], R] | None = None,
        success: Callable[[D], R] | None = None,
        failure: Callable[[D, ClassifiedFailure[E]], R] | None = None,
    ) -> R:
        """Call the handler of the current phase, falling back to ``or_else(data)``."""
        handler = self._handler_for(
            {
                Phase.INITIAL: initial,
                Phase.LOADING: loading,
                Phase.SUCCESS: success,
                Phase.FAILURE: failure,
            }
        )
        if handler is None:
            return or_else(self.data)
        return handler(*self._handler_args())
