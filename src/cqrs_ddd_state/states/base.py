"""State base class shared by the three state families."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from typing_extensions import Self

from ..failures import ClassifiedFailure
from ..utils import model_origin

E = TypeVar("E")
R = TypeVar("R")


class Phase(str, Enum):
    """Phase of a unit of work."""

    INITIAL = "initial"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_executed(self) -> bool:
        return self in (Phase.SUCCESS, Phase.FAILURE)


class State(BaseModel, Generic[E]):
    """Immutable four-phase state: ``INITIAL -> LOADING -> SUCCESS | FAILURE``.

    Every transition returns a new instance. Two states are equal iff they
    belong to the same family, are in the same phase and carry equal payloads.

    ``exception`` is present exactly in the ``FAILURE`` phase.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phase: Phase
    exception: ClassifiedFailure | None = None

    @model_validator(mode="after")
    def _check_exception(self) -> Self:
        if self.phase is Phase.FAILURE and self.exception is None:
            raise ValueError("a failure state requires an exception")
        if self.phase is not Phase.FAILURE and self.exception is not None:
            raise ValueError(f"a {self.phase.value} state cannot carry an exception")
        return self

    # ── Phase predicates ─────────────────────────────────────────

    @property
    def is_initial(self) -> bool:
        return self.phase is Phase.INITIAL

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def is_success(self) -> bool:
        return self.phase is Phase.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.phase is Phase.FAILURE

    @property
    def is_executed(self) -> bool:
        """Whether the unit of work has finished (success or failure)."""
        return self.phase.is_executed

    # ── Transitions ──────────────────────────────────────────────

    @abstractmethod
    def to_initial(self) -> State[E]:
        ...

    @abstractmethod
    def to_loading(self) -> State[E]:
        ...

    @abstractmethod
    def to_success(self, data: Any) -> State[E]:
        ...

    @abstractmethod
    def to_failure(self, exception: ClassifiedFailure[E]) -> State[E]:
        ...

    # ── Dispatch plumbing ────────────────────────────────────────

    @abstractmethod
    def _handler_args(self) -> tuple[Any, ...]:
        """Arguments passed to the handler of the current phase."""

    def _handler_for(
        self, handlers: Mapping[Phase, Callable[..., R] | None]
    ) -> Callable[..., R] | None:
        return handlers[self.phase]

    def _dispatch(self, handlers: Mapping[Phase, Callable[..., R]]) -> R:
        return handlers[self.phase](*self._handler_args())

    def _dispatch_or_none(
        self, handlers: Mapping[Phase, Callable[..., R] | None]
    ) -> R | None:
        handler = self._handler_for(handlers)
        if handler is None:
            return None
        return handler(*self._handler_args())

    # ── Value semantics ──────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return False
        if model_origin(self) is not model_origin(other):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash((model_origin(self).__name__, *self.__dict__.values()))

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in self.__dict__.items()
            if name != "phase" and value is not None
        )
        return f"{model_origin(self).__name__}.{self.phase.value}({fields})"

    __str__ = __repr__
