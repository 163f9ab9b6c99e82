"""StateController — drives a state family through one unit of work per event."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..classification import classify, default_is_fatal, resolve_is_fatal
from ..host.host import StateHost

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..classification import FatalityPredicate
    from ..failures import ClassifiedFailure
    from ..host.host import Emitter
    from ..ports.state_host import IEventTransformer

logger = logging.getLogger(__name__)

Ev = TypeVar("Ev")
S = TypeVar("S")
D = TypeVar("D")
E = TypeVar("E")


class StateController(StateHost[Ev, S], ABC, Generic[Ev, S, D, E]):
    """Base controller with built-in loading/success/failure handling.

    - ``Ev``: events this controller processes
    - ``S``: the state family
    - ``D``: the data produced by successful actions
    - ``E``: the business error type

    ``E`` is erased at runtime, so the business error type is also declared
    as a runtime token, either as the ``error_type`` class attribute or the
    ``error_type=`` constructor keyword. Leaving it at ``object`` means no
    business type is declared and every failure is fatal unless an override
    says otherwise.

    The four ``to_*`` accessors are implemented per state family; they are
    the only place the controller touches the state shape.
    """

    error_type: Any = object

    def __init__(self, initial_state: S, *, error_type: Any = None) -> None:
        super().__init__(initial_state)
        if error_type is not None:
            self.error_type = error_type

    # ── State accessors ──────────────────────────────────────────

    @abstractmethod
    def to_initial(self) -> S:
        """Return the initial state."""

    @abstractmethod
    def to_loading(self) -> S:
        """Return the loading state."""

    @abstractmethod
    def to_success(self, data: D) -> S:
        """Return the success state for *data*."""

    @abstractmethod
    def to_failure(self, exception: ClassifiedFailure[E]) -> S:
        """Return the failure state for *exception*."""

    # ── Fatality ─────────────────────────────────────────────────

    def default_is_fatal_exception(self, failure: Any) -> bool:
        """Default law: fatal unless *failure* is an instance of ``error_type``.

        With no declared business type every failure is fatal.
        """
        return default_is_fatal(failure, self.error_type)

    def is_fatal_exception(self, failure: Any) -> bool:
        """Decide whether *failure* is fatal for this controller.

        Consults the process-wide handler when one is installed, else the
        default law. Override to change the policy for one controller type.
        """
        return resolve_is_fatal(failure, self.error_type)

    def classify_exception(
        self,
        failure: Any,
        is_fatal: FatalityPredicate | None = None,
    ) -> ClassifiedFailure[E]:
        """Classify *failure*, preferring *is_fatal* over :meth:`is_fatal_exception`."""
        return classify(failure, self.error_type, is_fatal or self.is_fatal_exception)

    # ── Units of work ────────────────────────────────────────────

    def register(
        self,
        event_type: type[Ev],
        action: Callable[[Ev], Awaitable[D]],
        *,
        transformer: IEventTransformer | None = None,
        is_fatal: FatalityPredicate | None = None,
    ) -> None:
        """Run *action* as a unit of work for each event of *event_type*.

        Each event emits ``to_loading()``, awaits ``action(event)`` and emits
        ``to_success(result)``. A raised ``Exception`` is classified (using
        *is_fatal* when given), emitted through ``to_failure(...)`` and then
        re-raised unchanged, so the host's fault boundary still sees the
        original failure.

        - *transformer* sequences concurrent events of this type
          (default: concurrent)
        - *is_fatal* overrides the fatality decision for this registration
        """

        async def _unit_of_work(event: Ev, emit: Emitter[S]) -> None:
            emit(self.to_loading())
            try:
                result = await action(event)
            except Exception as exc:
                self.handle_exception(exc, is_fatal, emit)
                raise
            emit(self.to_success(result))

        self.on(event_type, _unit_of_work, transformer=transformer)

    def handle_exception(
        self,
        exception: Exception,
        is_fatal: FatalityPredicate | None,
        emit: Emitter[S],
    ) -> None:
        """Classify *exception* and emit the matching failure state."""
        classified = self.classify_exception(exception, is_fatal)
        logger.debug(
            "%s unit of work failed with %s, classified as %s",
            type(self).__name__,
            type(exception).__name__,
            type(classified).__name__,
        )
        emit(self.to_failure(classified))
