"""Controller for SuccessDataState — data only after a successful action."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..states.success_data import SuccessDataState
from .base import StateController

if TYPE_CHECKING:
    from ..failures import ClassifiedFailure

Ev = TypeVar("Ev")
D = TypeVar("D")
E = TypeVar("E")


class SuccessDataController(
    StateController[Ev, SuccessDataState[D, E], D, E], Generic[Ev, D, E]
):
    """Controller for one-shot fetches: data exists only in ``SUCCESS``.

    Always starts from ``SuccessDataState.initial()``.
    """

    def __init__(self, *, error_type: Any = None) -> None:
        super().__init__(SuccessDataState.initial(), error_type=error_type)

    def to_initial(self) -> SuccessDataState[D, E]:
        return self.state.to_initial()

    def to_loading(self) -> SuccessDataState[D, E]:
        return self.state.to_loading()

    def to_success(self, data: D) -> SuccessDataState[D, E]:
        return self.state.to_success(data)

    def to_failure(self, exception: ClassifiedFailure[E]) -> SuccessDataState[D, E]:
        return self.state.to_failure(exception)
