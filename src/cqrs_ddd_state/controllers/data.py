"""Controller for DataState — data kept across every phase."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..states.data import DataState
from .base import StateController

if TYPE_CHECKING:
    from ..failures import ClassifiedFailure

Ev = TypeVar("Ev")
D = TypeVar("D")
E = TypeVar("E")


class DataController(StateController[Ev, DataState[D, E], D, E], Generic[Ev, D, E]):
    """Controller for features that always show data, even while loading or
    after a failure (e.g. a refreshable list).

    Loading and failure states keep the last data; a successful action
    replaces it. Without an explicit initial state the controller starts from
    ``DataState.initial(None)``.
    """

    def __init__(
        self,
        initial_state: DataState[D, E] | None = None,
        *,
        error_type: Any = None,
    ) -> None:
        if initial_state is None:
            initial_state = DataState.initial(None)
        super().__init__(initial_state, error_type=error_type)

    def to_initial(self) -> DataState[D, E]:
        return self.state.to_initial()

    def to_loading(self) -> DataState[D, E]:
        return self.state.to_loading()

    def to_success(self, data: D) -> DataState[D, E]:
        return self.state.to_success(data)

    def to_failure(self, exception: ClassifiedFailure[E]) -> DataState[D, E]:
        return self.state.to_failure(exception)
