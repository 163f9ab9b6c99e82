"""Controller for EmptyState — operations without a return value."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..states.empty import EmptyState
from .base import StateController

if TYPE_CHECKING:
    from ..failures import ClassifiedFailure

Ev = TypeVar("Ev")
E = TypeVar("E")


class EmptyController(StateController[Ev, EmptyState[E], Any, E], Generic[Ev, E]):
    """Controller for features that keep no data, e.g. "delete item".

    Results returned by registered actions are discarded.

    Usage::

        class DeleteItemController(EmptyController[DeleteItem, ItemLocked]):
            error_type = ItemLocked

            def __init__(self, repository: ItemRepository) -> None:
                super().__init__()
                self.register(DeleteItem, lambda e: repository.delete(e.item_id))
    """

    def __init__(
        self,
        initial_state: EmptyState[E] | None = None,
        *,
        error_type: Any = None,
    ) -> None:
        if initial_state is None:
            initial_state = EmptyState.initial()
        super().__init__(initial_state, error_type=error_type)

    def to_initial(self) -> EmptyState[E]:
        return self.state.to_initial()

    def to_loading(self) -> EmptyState[E]:
        return self.state.to_loading()

    def to_success(self, data: Any = None) -> EmptyState[E]:
        return self.state.to_success()

    def to_failure(self, exception: ClassifiedFailure[E]) -> EmptyState[E]:
        return self.state.to_failure(exception)
