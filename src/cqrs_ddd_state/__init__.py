"""cqrs-ddd-state — typed unit-of-work states and failure classification.

Controllers run one async action per event, moving a state through
``INITIAL -> LOADING -> SUCCESS | FAILURE``. Failures are classified as
fatal, typed business or untyped business for state consumers and then
re-raised unchanged for the process fault boundary.
"""

from __future__ import annotations

# ── Classification ───────────────────────────────────────────────
from .classification import (
    FatalityPredicate,
    GlobalFatalityHandler,
    classify,
    default_is_fatal,
    get_global_fatality_handler,
    is_top_type,
    reset_global_fatality_handler,
    resolve_is_fatal,
    set_global_fatality_handler,
)

# ── Controllers ──────────────────────────────────────────────────
from .controllers import (
    DataController,
    EmptyController,
    StateController,
    SuccessDataController,
)

# ── Failures ─────────────────────────────────────────────────────
from .failures import (
    Business,
    BusinessTyped,
    BusinessUntyped,
    ClassifiedFailure,
    Fatal,
)

# ── Host ─────────────────────────────────────────────────────────
from .host import (
    Emitter,
    HostObserver,
    StateHost,
    concurrent,
    droppable,
    get_observer,
    reset_observer,
    restartable,
    sequential,
    set_observer,
)
from .instrumentation import (
    HookRegistration,
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)
from .matching import match_exception

# ── Ports ────────────────────────────────────────────────────────
from .ports import IEmitter, IEventTransformer, IStateHost, StateHandler

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    CQRSDDDStateError,
    EmitterClosedError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    HostClosedError,
    HostError,
)

# ── States ───────────────────────────────────────────────────────
from .states import DataState, EmptyState, Phase, State, SuccessDataState

__all__: list[str] = [
    # Classification
    "FatalityPredicate",
    "GlobalFatalityHandler",
    "classify",
    "default_is_fatal",
    "get_global_fatality_handler",
    "is_top_type",
    "reset_global_fatality_handler",
    "resolve_is_fatal",
    "set_global_fatality_handler",
    # Controllers
    "DataController",
    "EmptyController",
    "StateController",
    "SuccessDataController",
    # Failures
    "Business",
    "BusinessTyped",
    "BusinessUntyped",
    "ClassifiedFailure",
    "Fatal",
    "match_exception",
    # Host
    "Emitter",
    "HostObserver",
    "StateHost",
    "concurrent",
    "droppable",
    "get_observer",
    "reset_observer",
    "restartable",
    "sequential",
    "set_observer",
    "HookRegistration",
    "HookRegistry",
    "InstrumentationHook",
    "get_hook_registry",
    "set_hook_registry",
    # Ports
    "IEmitter",
    "IEventTransformer",
    "IStateHost",
    "StateHandler",
    # Primitives
    "CQRSDDDStateError",
    "EmitterClosedError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "HostClosedError",
    "HostError",
    # States
    "DataState",
    "EmptyState",
    "Phase",
    "State",
    "SuccessDataState",
]
